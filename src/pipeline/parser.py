"""Interpret raw oracle replies.

An empty identifier list is a valid answer ("nothing relevant"). Only a reply
that cannot be read at all raises ParseError.
"""

import re

from src.oracle import ParseError

_ID_TOKEN = re.compile(r"[0-9]+")
_SEPARATORS = re.compile(r"[,\n]")


def _strip_fences(raw_text: str) -> str:
    cleaned = re.sub(r"^```[a-zA-Z]*\s*\n?", "", raw_text.strip())
    return re.sub(r"\n?```\s*$", "", cleaned).strip()


def parse_match_ids(raw_text: str | None) -> list[int]:
    """Parse a comma-separated ID list into integers, preserving order.

    Tokens that are not plain non-negative base-10 integers are dropped, so
    ``"3, 1,2"``, ``"3,1,2,"`` and ``"abc,3,1,2"`` all yield ``[3, 1, 2]``.
    Markdown code fences around the list are ignored.

    Raises:
        ParseError: If there is no reply text at all.
    """
    if raw_text is None:
        msg = "oracle reply has no text to parse"
        raise ParseError(msg)

    tokens = (t.strip() for t in _SEPARATORS.split(_strip_fences(raw_text)))
    return [int(t) for t in tokens if _ID_TOKEN.fullmatch(t)]


def parse_reply_text(raw_text: str | None) -> str:
    """Return the assistant reply text, stripped.

    Raises:
        ParseError: If the reply is missing or blank.
    """
    if raw_text is None or not raw_text.strip():
        msg = "oracle reply has no text content"
        raise ParseError(msg)
    return raw_text.strip()
