"""Team keyword aggregation."""

from .aggregation import (
    DEFAULT_TEAM_WEIGHT,
    SOFT_SKILL_STOPLIST,
    GENERIC_SKILLS,
    TeamAggregationConfig,
    CombinedTeamKeyword,
    ProblemKeywords,
    combine_team_keywords,
    select_problem_keywords,
    top_team_keywords
)

__all__ = [
    "DEFAULT_TEAM_WEIGHT",
    "SOFT_SKILL_STOPLIST",
    "GENERIC_SKILLS",
    "TeamAggregationConfig",
    "CombinedTeamKeyword",
    "ProblemKeywords",
    "combine_team_keywords",
    "select_problem_keywords",
    "top_team_keywords"
]
