"""
Keyword data structures.

Keywords reach the engine in loosely-typed shapes: bare strings from
manual entry, or mappings produced by resume/journal extraction that may
carry a single ``source`` or a ``sources`` list. ``Keyword.from_raw`` is
the one place these shapes are parsed into a canonical record.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Iterable, Mapping

from .normalizer import normalize_keyword

logger = logging.getLogger(__name__)


def coerce_weight(value: Any, default: float) -> float:
    """
    Convert a raw weight to float, falling back to a default.

    Args:
        value: Raw weight (None, number, or numeric string)
        default: Weight used when value is missing or not numeric

    Returns:
        Weight as float
    """
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric weight {value!r}, using {default}")
        return default


def _raw_sources(item: Mapping[str, Any]) -> List[str]:
    """Read ``sources`` (list) or ``source`` (string) from a raw mapping."""
    sources = item.get("sources")
    if isinstance(sources, (list, tuple, set)):
        return unique_sources(sources)
    source = item.get("source")
    if source:
        return [source]
    return []


def unique_sources(sources: Iterable[Optional[str]]) -> List[str]:
    """Deduplicate sources preserving first-seen order, dropping empties."""
    seen: List[str] = []
    for source in sources:
        if source and source not in seen:
            seen.append(source)
    return seen


@dataclass
class Keyword:
    """
    A normalized skill keyword with a confidence weight.

    Attributes:
        keyword: Normalized keyword (lowercase, trimmed)
        weight: Confidence weight in [0, 1]
        category: Optional category label from extraction
        sources: Extraction sources that produced this keyword
    """
    keyword: str
    weight: float = 1.0
    category: Optional[str] = None
    sources: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "keyword": self.keyword,
            "weight": self.weight,
            "sources": list(self.sources)
        }
        if self.category is not None:
            result["category"] = self.category
        return result

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Optional["Keyword"]:
        """Create from a stored dictionary; None if it has no keyword."""
        return cls.from_raw(d, normalize=False)

    @classmethod
    def from_raw(
        cls,
        item: Any,
        default_weight: float = 1.0,
        normalize: bool = True
    ) -> Optional["Keyword"]:
        """
        Parse any accepted keyword shape into a Keyword.

        Accepted shapes are a bare string, a mapping with at least a
        ``keyword`` field, or an existing Keyword (copied, never shared).

        Args:
            item: Raw keyword entry
            default_weight: Weight used when the entry has none
            normalize: Whether to normalize the keyword string

        Returns:
            Keyword instance, or None if the entry has no usable keyword
        """
        if isinstance(item, Keyword):
            text = item.keyword
            weight = item.weight
            category = item.category
            sources = list(item.sources)
        elif isinstance(item, str):
            text = item
            weight = default_weight
            category = None
            sources = []
        elif isinstance(item, Mapping):
            text = item.get("keyword")
            weight = coerce_weight(item.get("weight"), default_weight)
            category = item.get("category")
            sources = _raw_sources(item)
        else:
            return None

        if not text:
            return None

        key = normalize_keyword(text) if normalize else text
        if not key:
            return None

        return cls(keyword=key, weight=weight, category=category, sources=sources)


def parse_keywords(
    items: Optional[Iterable[Any]],
    default_weight: float = 1.0,
    normalize: bool = True
) -> List[Keyword]:
    """
    Parse a raw keyword list, skipping entries without a keyword.

    Args:
        items: Raw keyword entries (None is treated as empty)
        default_weight: Weight used for entries that have none
        normalize: Whether to normalize keyword strings

    Returns:
        List of Keyword instances in input order
    """
    if not items:
        return []
    parsed = []
    for item in items:
        kw = Keyword.from_raw(item, default_weight=default_weight, normalize=normalize)
        if kw is not None:
            parsed.append(kw)
    return parsed
