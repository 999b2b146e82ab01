"""
Weighted skill compatibility between keyword profiles.

Compatibility is a weighted Jaccard similarity over normalized keywords:

    intersection = sum over shared k of (w_A(k) + w_B(k)) / 2
    union        = sum(w_A) + sum(w_B) - intersection
    score        = 100 * intersection / union

The score is symmetric, bounded in [0, 100], and equals 100 when a
non-empty profile is compared with itself. Scoring one candidate never
depends on another, so candidate pools can be fanned out over a joblib
worker pool and merged afterwards with a single sort.
"""

import logging
import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from joblib import Parallel, delayed

from ..keywords.schema import Keyword

logger = logging.getLogger(__name__)

BARE_KEYWORD_WEIGHT = 1.0


def round_score(value: float) -> float:
    """Round to 2 decimals, halves away from zero for positive scores."""
    return math.floor(value * 100 + 0.5) / 100


@dataclass(frozen=True)
class CommonKeyword:
    """A keyword shared by both profiles with its averaged weight."""
    keyword: str
    weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {"keyword": self.keyword, "weight": self.weight}


@dataclass(frozen=True)
class MatchResult:
    """
    Result of comparing two keyword profiles.

    Attributes:
        score: Weighted Jaccard similarity in [0, 100], 2 decimals
        common_keywords: Shared keywords, highest averaged weight first
        total_common: Number of shared keywords
    """
    score: float = 0.0
    common_keywords: List[CommonKeyword] = field(default_factory=list)
    total_common: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the platform's field names."""
        return {
            "score": self.score,
            "commonKeywords": [ck.to_dict() for ck in self.common_keywords],
            "totalCommon": self.total_common
        }


@dataclass(frozen=True)
class MatchQuality:
    """Display label and color for a compatibility score."""
    label: str
    color: str


@dataclass
class MatchQualityThresholds:
    """
    Lower bounds (inclusive) of each match quality tier.

    Attributes:
        excellent: Minimum score for "Excellent Match"
        great: Minimum score for "Great Match"
        good: Minimum score for "Good Match"
        moderate: Minimum score for "Moderate Match"
    """
    excellent: float = 70.0
    great: float = 50.0
    good: float = 30.0
    moderate: float = 15.0

    def validate(self) -> None:
        """Validate configuration values."""
        bounds = [self.excellent, self.great, self.good, self.moderate]
        if bounds != sorted(bounds, reverse=True):
            raise ValueError(f"Quality thresholds must be descending, got {bounds}")
        if not all(0 <= b <= 100 for b in bounds):
            raise ValueError(f"Quality thresholds must be in [0, 100], got {bounds}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchQualityThresholds":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchQualityThresholds":
        """Create from main config dictionary."""
        thresholds = config.get("matching", {}).get("quality_thresholds", {})
        defaults = cls()
        return cls(
            excellent=thresholds.get("excellent", defaults.excellent),
            great=thresholds.get("great", defaults.great),
            good=thresholds.get("good", defaults.good),
            moderate=thresholds.get("moderate", defaults.moderate)
        )


DEFAULT_THRESHOLDS = MatchQualityThresholds()


def _weight_map(keywords: Iterable[Any]) -> Dict[str, float]:
    """Normalized keyword -> weight; bare strings weigh 1.0, later duplicates win."""
    weights: Dict[str, float] = {}
    for item in keywords:
        kw = Keyword.from_raw(item, default_weight=BARE_KEYWORD_WEIGHT)
        if kw is not None:
            weights[kw.keyword] = max(0.0, kw.weight)
    return weights


def calculate_compatibility(
    keywords_a: Optional[Iterable[Any]],
    keywords_b: Optional[Iterable[Any]]
) -> MatchResult:
    """
    Compute weighted Jaccard compatibility between two keyword profiles.

    Each element may be a bare string (weight 1.0), a mapping with
    ``keyword`` and ``weight``, or a Keyword. Never raises: empty or
    missing profiles yield a zero result.

    Args:
        keywords_a: First profile's keywords
        keywords_b: Second profile's keywords

    Returns:
        MatchResult with score, shared keywords and their count
    """
    if not keywords_a or not keywords_b:
        return MatchResult()

    map_a = _weight_map(keywords_a)
    map_b = _weight_map(keywords_b)

    total_a = math.fsum(map_a.values())
    total_b = math.fsum(map_b.values())

    common_keywords = []
    for keyword, weight_a in map_a.items():
        if keyword in map_b:
            avg = (weight_a + map_b[keyword]) / 2
            common_keywords.append(CommonKeyword(keyword=keyword, weight=avg))

    # fsum keeps the intersection independent of iteration order
    intersection = math.fsum(ck.weight for ck in common_keywords)
    union = total_a + total_b - intersection

    score = (intersection / union) * 100 if union > 0 else 0.0
    common_keywords.sort(key=lambda ck: ck.weight, reverse=True)

    return MatchResult(
        score=round_score(score),
        common_keywords=common_keywords,
        total_common=len(common_keywords)
    )


def find_top_matches(
    user_keywords: Optional[Iterable[Any]],
    candidates: Optional[Sequence[Mapping[str, Any]]],
    limit: int = 10,
    n_jobs: int = 1
) -> List[Dict[str, Any]]:
    """
    Rank candidates by compatibility with a user's keyword profile.

    Each returned record is a copy of the candidate with ``compatibility``,
    ``commonKeywords`` and ``totalCommon`` attached. Candidates scoring
    0 are dropped.

    Args:
        user_keywords: The user's keywords
        candidates: Candidate records, each with a ``keywords`` list
        limit: Maximum number of matches to return
        n_jobs: joblib worker count for scoring (1 scores in-process)

    Returns:
        Matches sorted by compatibility, highest first
    """
    if not candidates:
        return []

    user_keywords = list(user_keywords or [])
    keyword_lists = [candidate.get("keywords") for candidate in candidates]

    if n_jobs == 1:
        results = [calculate_compatibility(user_keywords, kws) for kws in keyword_lists]
    else:
        logger.info(f"Scoring {len(keyword_lists)} candidates with n_jobs={n_jobs}")
        results = Parallel(n_jobs=n_jobs)(
            delayed(calculate_compatibility)(user_keywords, kws) for kws in keyword_lists
        )

    matches = []
    for candidate, result in zip(candidates, results):
        if result.score <= 0:
            continue
        match = dict(candidate)
        match["compatibility"] = result.score
        match["commonKeywords"] = [ck.to_dict() for ck in result.common_keywords]
        match["totalCommon"] = result.total_common
        matches.append(match)

    matches.sort(key=lambda m: m["compatibility"], reverse=True)
    logger.debug(f"{len(matches)} of {len(candidates)} candidates matched, returning top {limit}")
    return matches[:limit]


def get_match_quality(
    score: float,
    thresholds: Optional[MatchQualityThresholds] = None
) -> MatchQuality:
    """
    Map a compatibility score to a display label and color.

    Args:
        score: Compatibility score
        thresholds: Tier lower bounds (defaults 70/50/30/15)

    Returns:
        MatchQuality for the first tier whose bound the score reaches
    """
    t = thresholds or DEFAULT_THRESHOLDS
    if score >= t.excellent:
        return MatchQuality("Excellent Match", "green")
    if score >= t.great:
        return MatchQuality("Great Match", "blue")
    if score >= t.good:
        return MatchQuality("Good Match", "yellow")
    if score >= t.moderate:
        return MatchQuality("Moderate Match", "orange")
    return MatchQuality("Low Match", "gray")
