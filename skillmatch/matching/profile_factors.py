"""
Multi-factor profile compatibility.

Extends the keyword compatibility score with profile signals that the
matching feed uses to break near-ties between candidates.

Factor weights (total = 100):
    keyword match         70   weighted Jaccard (primary signal)
    skill diversity       10   complementary but overlapping skills
    profile completeness   7   filled-in profile fields
    location               5   same city / region
    collaboration style    3   shared work-style terms in bios
    premium                5   premium members on either side
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..keywords.merger import keyword_set
from .compatibility import CommonKeyword, calculate_compatibility, round_score

logger = logging.getLogger(__name__)

FACTOR_WEIGHTS = {
    "keyword": 70.0,
    "diversity": 10.0,
    "completeness": 7.0,
    "location": 5.0,
    "collaboration": 3.0,
    "premium": 5.0
}

PROFILE_FIELDS = [
    "full_name",
    "bio",
    "job_title",
    "company",
    "location",
    "linkedin_url",
    "github_url",
    "website"
]

COLLABORATION_TERMS = [
    "mentor", "mentoring", "advise", "advising",
    "startup", "startup founder", "venture",
    "remote", "async", "flexible",
    "open source", "opensource",
    "learning", "growth", "development",
    "team", "collaboration", "collaborate",
    "product", "engineering", "design"
]

# (low, high, bonus) bands on the share of non-shared skills, first match wins
DIVERSITY_BANDS = [
    (0.3, 0.7, 20.0),
    (0.2, 0.8, 15.0),
    (0.1, 0.9, 10.0)
]
MAX_DIVERSITY_BONUS = 20.0
MAX_COMPLETENESS_BONUS = 20.0
MAX_LOCATION_BONUS = 10.0
MAX_COLLABORATION_BONUS = 10.0


@dataclass(frozen=True)
class ProfileCompatibility:
    """
    Multi-factor compatibility result.

    Attributes:
        score: Combined score in [0, 100], 2 decimals
        common_keywords: Shared keywords from the keyword factor
        total_common: Number of shared keywords
        breakdown: Points contributed by each factor
    """
    score: float = 0.0
    common_keywords: List[CommonKeyword] = field(default_factory=list)
    total_common: int = 0
    breakdown: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "commonKeywords": [ck.to_dict() for ck in self.common_keywords],
            "totalCommon": self.total_common,
            "breakdown": dict(self.breakdown)
        }


def skill_diversity_bonus(
    keywords_a: Optional[Iterable[Any]],
    keywords_b: Optional[Iterable[Any]]
) -> float:
    """
    Reward complementary skill sets (0-20 points).

    The diversity ratio is the share of skills held by only one side.
    Profiles that are neither identical nor disjoint score best.
    """
    set_a = keyword_set(keywords_a)
    set_b = keyword_set(keywords_b)
    combined = set_a | set_b
    if not set_a or not set_b:
        return 0.0

    ratio = len(set_a ^ set_b) / len(combined)
    for low, high, bonus in DIVERSITY_BANDS:
        if low <= ratio <= high:
            return bonus
    return 0.0


def profile_completeness_bonus(profile: Optional[Mapping[str, Any]]) -> float:
    """Points (0-20) proportional to the number of filled profile fields."""
    if not profile:
        return 0.0
    filled = sum(
        1 for name in PROFILE_FIELDS
        if profile.get(name) is not None and str(profile.get(name)).strip()
    )
    return round_score(filled / len(PROFILE_FIELDS) * MAX_COMPLETENESS_BONUS)


def location_bonus(location_a: Optional[str], location_b: Optional[str]) -> float:
    """10 points for the same location, 7 when one contains the other."""
    if not location_a or not location_b:
        return 0.0
    loc_a = location_a.lower().strip()
    loc_b = location_b.lower().strip()
    if loc_a == loc_b:
        return MAX_LOCATION_BONUS
    if loc_a in loc_b or loc_b in loc_a:
        return 7.0
    return 0.0


def collaboration_style_bonus(bio_a: Optional[str], bio_b: Optional[str]) -> float:
    """
    Points (0-10) for work-style terms that appear in both bios.

    Fewer than two shared terms is treated as noise.
    """
    if not bio_a or not bio_b:
        return 0.0
    bio_a = bio_a.lower()
    bio_b = bio_b.lower()
    shared = sum(1 for term in COLLABORATION_TERMS if term in bio_a and term in bio_b)
    if shared < 2:
        return 0.0
    return min(3.0 + shared * 2, MAX_COLLABORATION_BONUS)


def _is_premium(profile: Mapping[str, Any]) -> bool:
    return bool(profile.get("is_premium") or profile.get("isPremium"))


def premium_bonus(profile_a: Mapping[str, Any], profile_b: Mapping[str, Any]) -> float:
    """5 points when both members are premium, 2.5 when one is."""
    premium_a = _is_premium(profile_a)
    premium_b = _is_premium(profile_b)
    if premium_a and premium_b:
        return FACTOR_WEIGHTS["premium"]
    if premium_a or premium_b:
        return FACTOR_WEIGHTS["premium"] / 2
    return 0.0


def calculate_profile_compatibility(
    keywords_a: Optional[Iterable[Any]],
    keywords_b: Optional[Iterable[Any]],
    profile_a: Optional[Mapping[str, Any]] = None,
    profile_b: Optional[Mapping[str, Any]] = None
) -> ProfileCompatibility:
    """
    Combine keyword compatibility with profile-level signals.

    Args:
        keywords_a: First profile's keywords
        keywords_b: Second profile's keywords
        profile_a: First member's profile fields (bio, location, ...)
        profile_b: Second member's profile fields

    Returns:
        ProfileCompatibility with the capped total and per-factor breakdown
    """
    keywords_a = list(keywords_a or [])
    keywords_b = list(keywords_b or [])
    if not keywords_a or not keywords_b:
        return ProfileCompatibility()

    profile_a = profile_a or {}
    profile_b = profile_b or {}

    keyword_match = calculate_compatibility(keywords_a, keywords_b)
    keyword_points = keyword_match.score / 100 * FACTOR_WEIGHTS["keyword"]

    diversity_points = (
        skill_diversity_bonus(keywords_a, keywords_b) / MAX_DIVERSITY_BONUS
        * FACTOR_WEIGHTS["diversity"]
    )

    completeness = (
        profile_completeness_bonus(profile_a) + profile_completeness_bonus(profile_b)
    ) / 2
    completeness_points = completeness / MAX_COMPLETENESS_BONUS * FACTOR_WEIGHTS["completeness"]

    location_points = (
        location_bonus(profile_a.get("location"), profile_b.get("location"))
        / MAX_LOCATION_BONUS * FACTOR_WEIGHTS["location"]
    )

    collaboration_points = (
        collaboration_style_bonus(profile_a.get("bio"), profile_b.get("bio"))
        / MAX_COLLABORATION_BONUS * FACTOR_WEIGHTS["collaboration"]
    )

    premium_points = premium_bonus(profile_a, profile_b)

    total = (
        keyword_points + diversity_points + completeness_points
        + location_points + collaboration_points + premium_points
    )

    breakdown = {
        "keyword": round_score(keyword_points),
        "diversity": round_score(diversity_points),
        "completeness": round_score(completeness_points),
        "location": round_score(location_points),
        "collaboration": round_score(collaboration_points),
        "premium": premium_points
    }
    logger.debug(f"Profile compatibility breakdown: {breakdown}")

    return ProfileCompatibility(
        score=min(round_score(total), 100.0),
        common_keywords=keyword_match.common_keywords,
        total_common=keyword_match.total_common,
        breakdown=breakdown
    )
