"""Oracle-assisted business matching for free-text search queries.

Pipeline, strictly in order:
  1. Prompt Builder  : query + candidate records -> prompt text
  2. Oracle          : one call, no retry
  3. Response Parser : comma-separated IDs -> list[int]
  4. Reconciler      : ranked matches first, unmatched tail after
Any oracle or parse failure returns the candidates unchanged.
"""

import logging

from src.core.config import MatchingConfig
from src.core.schemas import Business, ConversationTurn
from src.oracle import OracleProvider
from src.pipeline.fallback import with_fallback
from src.pipeline.parser import parse_match_ids
from src.pipeline.prompts import MATCH_SYSTEM_PROMPT, build_match_prompt
from src.pipeline.reconciler import reconcile

logger = logging.getLogger(__name__)


class BusinessMatcher:
    """Ranks candidate businesses against a user query using the oracle."""

    def __init__(self, provider: OracleProvider, config: MatchingConfig) -> None:
        self._provider = provider
        self._config = config

    def match_query(self, query: str, candidates: list[Business]) -> list[Business]:
        """Return ``candidates`` reordered by relevance to ``query``.

        Every candidate appears exactly once. With no candidates the oracle is
        not called and the result is empty.
        """
        if not candidates:
            logger.debug("No candidates for query %r - skipping oracle", query)
            return []

        candidates = list(candidates)
        result = with_fallback(
            lambda: self._rank(query, candidates),
            fallback=candidates,
            label=f"Business matching for {query!r}",
        )
        logger.info("Matched query %r across %d businesses", query, len(candidates))
        return result

    def _rank(self, query: str, candidates: list[Business]) -> list[Business]:
        prompt = build_match_prompt(query, candidates)
        raw = self._provider.complete(
            [ConversationTurn(role="user", content=prompt)],
            system=MATCH_SYSTEM_PROMPT,
            max_tokens=self._config.max_tokens,
            model=self._config.model,
        )
        logger.debug("Oracle matching reply: %r", raw)
        ids = parse_match_ids(raw)
        if not ids:
            logger.info("Oracle found no relevant businesses for %r", query)
        return reconcile(ids, candidates)
