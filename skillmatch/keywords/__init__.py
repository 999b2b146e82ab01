"""Keyword normalization, parsing, weighting, and profile merging."""

from .normalizer import normalize_keyword
from .schema import Keyword, parse_keywords
from .merger import (
    DEFAULT_MERGE_WEIGHT,
    merge_keywords,
    calculate_keyword_similarity,
    get_common_keywords,
    sort_keywords_by_weight
)
from .weighting import (
    CATEGORY_WEIGHTS,
    source_multiplier,
    calculate_keyword_weight,
    recalculate_keyword_weights
)

__all__ = [
    "normalize_keyword",
    "Keyword",
    "parse_keywords",
    "DEFAULT_MERGE_WEIGHT",
    "merge_keywords",
    "calculate_keyword_similarity",
    "get_common_keywords",
    "sort_keywords_by_weight",
    "CATEGORY_WEIGHTS",
    "source_multiplier",
    "calculate_keyword_weight",
    "recalculate_keyword_weights"
]
