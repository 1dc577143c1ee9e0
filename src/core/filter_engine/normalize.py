from __future__ import annotations

import re


# Typographic quotes -> quotes a keyboard can type.
_QUOTE_MAP = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})
_WS_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Bring indexed text and query text into one comparison domain.

    Trims surrounding whitespace, lowercases (a poor man's casefold, not full
    Unicode case folding) and unifies smart quotes with their ASCII forms.
    Idempotent.
    """
    return text.strip().lower().translate(_QUOTE_MAP)


def split_query(query: str) -> list[str]:
    """Normalize `query` and split it into non-empty tokens."""
    s = normalize_text(query)
    return [part for part in _WS_RE.split(s) if part]
