"""Keyword compatibility scoring and candidate ranking."""

from .compatibility import (
    CommonKeyword,
    MatchResult,
    MatchQuality,
    MatchQualityThresholds,
    calculate_compatibility,
    find_top_matches,
    get_match_quality
)
from .profile_factors import ProfileCompatibility, calculate_profile_compatibility

__all__ = [
    "CommonKeyword",
    "MatchResult",
    "MatchQuality",
    "MatchQualityThresholds",
    "calculate_compatibility",
    "find_top_matches",
    "get_match_quality",
    "ProfileCompatibility",
    "calculate_profile_compatibility"
]
