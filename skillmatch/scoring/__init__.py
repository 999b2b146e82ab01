"""Competition score fusion and synergy evaluation boundary."""

from .pipeline import (
    ScoreWeights,
    ScoreSet,
    TeamScore,
    ScorePipeline,
    calculate_consistency_score,
    calculate_final_score,
    create_pipeline_from_config
)
from .synergy import SynergyAnalysis, SynergyEvaluator, parse_synergy_response

__all__ = [
    "ScoreWeights",
    "ScoreSet",
    "TeamScore",
    "ScorePipeline",
    "calculate_consistency_score",
    "calculate_final_score",
    "create_pipeline_from_config",
    "SynergyAnalysis",
    "SynergyEvaluator",
    "parse_synergy_response"
]
