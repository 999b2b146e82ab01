"""
Keyword normalization.

Every component keys its maps by the normalized form produced here, so two
spellings that differ only in case or surrounding whitespace always refer
to the same skill.
"""

from typing import Any


def normalize_keyword(raw: Any) -> str:
    """
    Canonicalize a raw keyword string.

    Lowercases and strips surrounding whitespace. Total and idempotent:
    ``normalize_keyword(normalize_keyword(x)) == normalize_keyword(x)``.

    Args:
        raw: Raw keyword (None is treated as an empty string)

    Returns:
        Normalized keyword
    """
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raw = str(raw)
    return raw.lower().strip()
