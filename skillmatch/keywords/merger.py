"""
Keyword profile merging and set utilities.

A user's keyword profile is assembled from several extraction sources
(resume PDF, journal entries, manual edits). Merging folds a new batch of
raw keywords into an existing profile so that each normalized keyword
appears exactly once, keeping its strongest weight and every source that
reported it.

Merge rules:
    existing keyword  -> weight = max(old, new), sources = old ∪ new
    new keyword       -> inserted with normalized key and its own sources
    missing weight    -> DEFAULT_MERGE_WEIGHT (1.0)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .schema import Keyword, coerce_weight, parse_keywords, unique_sources

logger = logging.getLogger(__name__)

DEFAULT_MERGE_WEIGHT = 1.0


def merge_keywords(
    existing: Optional[Iterable[Any]],
    incoming: Optional[Iterable[Any]],
    default_weight: float = DEFAULT_MERGE_WEIGHT
) -> List[Keyword]:
    """
    Merge incoming raw keywords into an existing profile.

    Existing entries are assumed to be normalized already and are keyed
    as-is. A merged entry without a category takes the incoming one.
    Neither input is mutated; the caller replaces its stored profile
    with the returned list.

    Args:
        existing: Current profile keywords (already normalized)
        incoming: Newly extracted raw keywords
        default_weight: Weight for incoming entries that carry none

    Returns:
        Merged keywords, existing entries first, then new ones in
        encounter order
    """
    keyword_map: Dict[str, Keyword] = {}

    for kw in parse_keywords(existing, default_weight=default_weight, normalize=False):
        keyword_map[kw.keyword] = kw

    added = 0
    for kw in parse_keywords(incoming, default_weight=default_weight):
        current = keyword_map.get(kw.keyword)
        if current is not None:
            current.weight = max(current.weight, kw.weight)
            current.sources = unique_sources(current.sources + kw.sources)
            if current.category is None:
                current.category = kw.category
        else:
            keyword_map[kw.keyword] = kw
            added += 1

    logger.debug(f"Merged keywords: {len(keyword_map)} total, {added} new")
    return list(keyword_map.values())


def keyword_set(keywords: Optional[Iterable[Any]]) -> set:
    """Set of normalized keyword strings in a raw keyword list."""
    return {kw.keyword for kw in parse_keywords(keywords)}


def calculate_keyword_similarity(
    keywords_a: Optional[Iterable[Any]],
    keywords_b: Optional[Iterable[Any]]
) -> float:
    """
    Unweighted Jaccard similarity of two keyword lists, scaled to 0-100.

    Args:
        keywords_a: Keywords (strings or mappings) of the first profile
        keywords_b: Keywords (strings or mappings) of the second profile

    Returns:
        Similarity in [0, 100]; 0 when both lists are empty
    """
    set_a = keyword_set(keywords_a)
    set_b = keyword_set(keywords_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union) * 100


def get_common_keywords(
    keywords_a: Optional[Iterable[Any]],
    keywords_b: Optional[Iterable[Any]]
) -> List[Any]:
    """
    Return the entries of ``keywords_a`` whose normalized keyword is in ``keywords_b``.

    Entries are returned unchanged, in the order of ``keywords_a``.
    """
    if not keywords_a:
        return []
    set_b = keyword_set(keywords_b)
    common = []
    for item in keywords_a:
        kw = Keyword.from_raw(item)
        if kw is not None and kw.keyword in set_b:
            common.append(item)
    return common


def _weight_of(item: Any) -> float:
    if isinstance(item, Keyword):
        return item.weight
    if isinstance(item, dict):
        return coerce_weight(item.get("weight"), 0.0)
    return 0.0


def sort_keywords_by_weight(keywords: Optional[Iterable[Any]]) -> List[Any]:
    """Return a new list sorted by weight, highest first (missing weight counts as 0)."""
    if not keywords:
        return []
    return sorted(keywords, key=_weight_of, reverse=True)

