"""
Team keyword aggregation.

Combines every member's keyword profile into one team profile that is
biased toward what distinguishes the team rather than what every member
trivially shares. The result feeds problem-statement generation and
synergy analysis, so the reweighting rules must stay exact:

    soft skill (stoplist)              -> dropped
    held by one member, not generic    -> weight + 0.2 (max 1.0), flagged unique
    generic and held by every member   -> weight - 0.1 (min 0.3)

Entries flagged unique sort before all others; each tier is ordered by
weight, highest first.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..keywords.normalizer import normalize_keyword
from ..keywords.schema import coerce_weight

logger = logging.getLogger(__name__)

DEFAULT_TEAM_WEIGHT = 0.5

SOFT_SKILL_STOPLIST = frozenset([
    "communication", "teamwork", "team player", "leadership",
    "problem solving", "problem-solving", "time management", "adaptability",
    "creativity", "collaboration", "interpersonal", "interpersonal skills",
    "public speaking", "work ethic", "multitasking", "organizational",
    "organizational skills", "negotiation", "conflict resolution", "empathy",
    "active listening", "decision making", "initiative", "motivation",
    "flexibility", "stress management", "networking", "patience",
    "positive attitude", "attention to detail", "self-motivated",
    "self motivated", "fast learner", "quick learner", "hardworking",
    "dedicated", "passionate", "detail oriented", "team management",
    "people skills", "verbal communication", "written communication",
    "presentation skills", "critical thinking", "analytical thinking",
    "creative thinking", "innovative", "proactive", "organized",
    "responsible", "reliable", "punctual",
])

GENERIC_SKILLS = frozenset([
    "python", "javascript", "sql", "api", "data", "analysis", "excel", "git",
    "html", "css", "react", "node", "java", "c++", "typescript", "linux",
])


@dataclass
class TeamAggregationConfig:
    """
    Reweighting parameters for team aggregation.

    Attributes:
        unique_boost: Added to keywords only one member holds
        generic_penalty: Subtracted from generic keywords every member holds
        generic_floor: Lowest weight a penalized generic keyword can reach
        default_weight: Weight for keywords that arrive without one
    """
    unique_boost: float = 0.2
    generic_penalty: float = 0.1
    generic_floor: float = 0.3
    default_weight: float = DEFAULT_TEAM_WEIGHT

    def validate(self) -> None:
        """Validate configuration values."""
        for name, value in self.to_dict().items():
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TeamAggregationConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "TeamAggregationConfig":
        """Create from main config dictionary."""
        team_config = config.get("team", {})
        defaults = cls()
        return cls(
            unique_boost=team_config.get("unique_boost", defaults.unique_boost),
            generic_penalty=team_config.get("generic_penalty", defaults.generic_penalty),
            generic_floor=team_config.get("generic_floor", defaults.generic_floor),
            default_weight=team_config.get("default_weight", defaults.default_weight)
        )


@dataclass
class CombinedTeamKeyword:
    """
    A keyword in a team's combined profile.

    Attributes:
        keyword: Normalized keyword
        weight: Reweighted team weight
        category: Category from the last member entry that carried one
        occurrences: Number of member entries contributing this keyword
        is_unique: Held by a single member and not a generic skill
    """
    keyword: str
    weight: float
    category: Optional[str] = None
    occurrences: int = 1
    is_unique: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the platform's field names."""
        return {
            "keyword": self.keyword,
            "weight": self.weight,
            "category": self.category,
            "occurrences": self.occurrences,
            "isUnique": self.is_unique
        }


@dataclass(frozen=True)
class ProblemKeywords:
    """Team skills selected as input for problem-statement generation."""
    unique_skills: List[str]
    other_skills: List[str]
    keywords_used: List[str]


def _entry_fields(entry: Any):
    if isinstance(entry, str):
        return entry, None, None
    if isinstance(entry, Mapping):
        return entry.get("keyword"), entry.get("weight"), entry.get("category")
    # Keyword and CombinedTeamKeyword instances
    return (
        getattr(entry, "keyword", None),
        getattr(entry, "weight", None),
        getattr(entry, "category", None)
    )


def combine_team_keywords(
    members_keywords: Optional[Sequence[Optional[Iterable[Any]]]],
    config: Optional[TeamAggregationConfig] = None
) -> List[CombinedTeamKeyword]:
    """
    Combine members' keyword profiles into a reweighted team profile.

    Args:
        members_keywords: One keyword list per member (None counts as empty)
        config: Reweighting parameters (defaults: +0.2 / -0.1 / floor 0.3)

    Returns:
        Team keywords, unique-flagged first, then by weight descending
    """
    config = config or TeamAggregationConfig()
    if not members_keywords:
        return []

    member_count = len(members_keywords)
    keyword_map: Dict[str, CombinedTeamKeyword] = {}

    for member_keywords in members_keywords:
        for entry in member_keywords or []:
            text, raw_weight, category = _entry_fields(entry)
            if not text:
                continue
            key = normalize_keyword(text)
            if not key:
                continue
            weight = coerce_weight(raw_weight, config.default_weight)

            combined = keyword_map.get(key)
            if combined is None:
                keyword_map[key] = CombinedTeamKeyword(
                    keyword=key, weight=weight, category=category
                )
            else:
                # Counted per entry, so a member listing a keyword twice counts twice
                combined.occurrences += 1
                combined.weight = max(combined.weight, weight)
                if category is not None:
                    combined.category = category

    dropped = 0
    keywords = []
    for kw in keyword_map.values():
        if kw.keyword in SOFT_SKILL_STOPLIST:
            dropped += 1
            continue

        is_generic = kw.keyword in GENERIC_SKILLS
        if kw.occurrences == 1 and not is_generic:
            kw.weight = min(1.0, kw.weight + config.unique_boost)
            kw.is_unique = True
        if is_generic and kw.occurrences == member_count:
            kw.weight = max(config.generic_floor, kw.weight - config.generic_penalty)
        keywords.append(kw)

    keywords.sort(key=lambda kw: (not kw.is_unique, -kw.weight))

    logger.debug(
        f"Combined {member_count} members into {len(keywords)} team keywords "
        f"({dropped} soft skills dropped)"
    )
    return keywords


def select_problem_keywords(
    combined: Sequence[CombinedTeamKeyword],
    max_unique: int = 10,
    max_other: int = 15,
    max_used: int = 10
) -> ProblemKeywords:
    """
    Pick the team skills a generated problem statement should build on.

    Args:
        combined: Output of combine_team_keywords
        max_unique: Unique skills to offer
        max_other: Non-unique skills to offer
        max_used: Total skills recorded as used, unique skills first

    Returns:
        ProblemKeywords with the selected keyword strings
    """
    unique_skills = [kw.keyword for kw in combined if kw.is_unique][:max_unique]
    other_skills = [kw.keyword for kw in combined if not kw.is_unique][:max_other]
    keywords_used = unique_skills + other_skills[:max(0, max_used - len(unique_skills))]
    return ProblemKeywords(
        unique_skills=unique_skills,
        other_skills=other_skills,
        keywords_used=keywords_used
    )


def top_team_keywords(combined: Sequence[CombinedTeamKeyword], limit: int = 20) -> List[str]:
    """Leading keyword strings of a combined team profile, in ranked order."""
    return [kw.keyword for kw in combined[:limit]]
