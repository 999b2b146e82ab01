"""
Deterministic keyword weighting.

Extracted keywords are weighted by what matters most for matching:

    weight = category importance * source multiplier * position decay

rounded half-up to 2 decimals. Position decay favours the first items
listed in a category: max(0.8, 1 - 0.02 * position).
"""

import logging
import math
from typing import Any, Iterable, List, Optional

from .schema import Keyword, parse_keywords

logger = logging.getLogger(__name__)

CATEGORY_WEIGHTS = {
    "skills": 1.0,
    "technologies": 0.95,
    "expertise": 0.9,
    "tools": 0.85,
    "methodologies": 0.8,
    "domains": 0.8,
    "projects": 0.7,
    "roles": 0.65,
    "certifications": 0.6,
    "companies": 0.5,
    "institutions": 0.45,
    "links": 0.2
}
DEFAULT_CATEGORY_WEIGHT = 0.5

# Resume uploads are stored with source "pdf"
SOURCE_MULTIPLIERS = {
    "resume": 1.0,
    "pdf": 1.0,
    "linkedin": 0.95,
    "github": 0.9
}
DEFAULT_SOURCE_MULTIPLIER = 0.8

MIN_POSITION_FACTOR = 0.8
POSITION_DECAY = 0.02

DEFAULT_CATEGORY = "skills"
DEFAULT_SOURCE = "pdf"


def category_weight(category: Optional[str]) -> float:
    """Importance of a keyword category; unknown categories get 0.5."""
    return CATEGORY_WEIGHTS.get(category, DEFAULT_CATEGORY_WEIGHT)


def source_multiplier(source: Optional[str]) -> float:
    """Trust in an extraction source; unknown sources get 0.8."""
    return SOURCE_MULTIPLIERS.get(source, DEFAULT_SOURCE_MULTIPLIER)


def position_factor(position: int) -> float:
    """Decay for the item's index within its category, floored at 0.8."""
    return max(MIN_POSITION_FACTOR, 1 - position * POSITION_DECAY)


def calculate_keyword_weight(
    category: Optional[str],
    source: Optional[str],
    position: int = 0
) -> float:
    """
    Weight of an extracted keyword.

    Args:
        category: Extraction category (skills, technologies, ...)
        source: Extraction source (pdf, resume, linkedin, github, ...)
        position: Index of the keyword within its category

    Returns:
        Weight in [0, 1], rounded to 2 decimals
    """
    weight = category_weight(category) * source_multiplier(source) * position_factor(position)
    return math.floor(weight * 100 + 0.5) / 100


def recalculate_keyword_weights(keywords: Optional[Iterable[Any]]) -> List[Keyword]:
    """
    Recompute stored keyword weights from category and source alone.

    Stored profiles carry no extraction positions, so no decay is applied.
    A keyword without a category counts as a skill and one without a
    source as a resume upload; the first listed source is used.

    Args:
        keywords: Stored profile keywords (already normalized)

    Returns:
        New Keyword instances with updated weights, in input order
    """
    updated = []
    changed = 0
    for kw in parse_keywords(keywords, normalize=False):
        source = kw.sources[0] if kw.sources else DEFAULT_SOURCE
        weight = calculate_keyword_weight(kw.category or DEFAULT_CATEGORY, source)
        if weight != kw.weight:
            changed += 1
        kw.weight = weight
        updated.append(kw)

    logger.debug(f"Recalculated {len(updated)} keyword weights, {changed} changed")
    return updated
