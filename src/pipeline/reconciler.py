"""Map oracle-ranked IDs back onto the candidate businesses."""

import logging

from src.core.schemas import Business

logger = logging.getLogger(__name__)


def reconcile(parsed_ids: list[int], candidates: list[Business]) -> list[Business]:
    """Order candidates by the oracle's ranking, keeping every candidate.

    Matched candidates come first in ``parsed_ids`` order. IDs with no
    candidate are dropped and repeated IDs count once. Unmatched candidates
    follow in their original order, so the result is always a permutation of
    ``candidates``.
    """
    by_id = {b.id: b for b in candidates}
    matched: list[Business] = []
    matched_ids: set[int] = set()

    for business_id in parsed_ids:
        business = by_id.get(business_id)
        if business is None:
            logger.debug("Oracle returned unknown business id %d - ignoring", business_id)
            continue
        if business_id in matched_ids:
            continue
        matched_ids.add(business_id)
        matched.append(business)

    unmatched = [b for b in candidates if b.id not in matched_ids]
    return matched + unmatched
