"""Evaluation module for candidate-pool match analysis."""

from .metrics import (
    compute_score_distribution_stats,
    check_symmetry,
    matches_to_frame,
    MatchReport,
    create_match_report
)

__all__ = [
    "compute_score_distribution_stats",
    "check_symmetry",
    "matches_to_frame",
    "MatchReport",
    "create_match_report"
]
