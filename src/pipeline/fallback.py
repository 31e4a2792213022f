"""Fallback policy shared by the matching and conversation paths.

Search relevance and chat replies are enhancements over a baseline that must
always be deliverable: an unordered candidate list, or a fixed apology.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from src.oracle import OracleError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FALLBACK_REPLY = (
    "I apologize, but I'm having trouble responding right now. Please try again."
)


def with_fallback(operation: Callable[[], T], fallback: T, *, label: str) -> T:
    """Run ``operation`` and return ``fallback`` if the oracle path fails.

    OracleError (including ParseError) and ValueError from prompt building are
    recovered here. Nothing partially computed by ``operation`` is returned.
    Any other exception propagates.
    """
    try:
        return operation()
    except (OracleError, ValueError):
        logger.warning("%s failed - using fallback result", label, exc_info=True)
        return fallback
