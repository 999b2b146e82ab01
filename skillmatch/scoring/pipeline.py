"""
Competition score fusion.

A team's ranking combines four independently sourced sub-scores, each in
[0, 100]:

    synergy      0.25   AI judgement of prototype/skill alignment
    consistency  0.20   progress logs submitted vs. required
    technical    0.35   judges' technical score
    social       0.20   judges' social-impact score

Fusion Formula:
    final = sum(w_i * s_i) / sum(w_i)   over sub-scores that are present

Missing sub-scores do not drag the final score toward zero: the weights
are renormalized over whatever has been supplied so far. With no
sub-scores at all the final score is 0.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..matching.compatibility import round_score
from ..team.aggregation import CombinedTeamKeyword, top_team_keywords
from .synergy import SynergyAnalysis, SynergyEvaluator

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_LOGS = 5


@dataclass
class ScoreWeights:
    """
    Weights of the four sub-scores.

    Attributes:
        synergy: Weight of the synergy sub-score
        consistency: Weight of the consistency sub-score
        technical: Weight of the technical sub-score
        social: Weight of the social sub-score
    """
    synergy: float = 0.25
    consistency: float = 0.20
    technical: float = 0.35
    social: float = 0.20

    def validate(self) -> None:
        """Validate configuration values."""
        for name, value in self.to_dict().items():
            if not 0 <= value <= 1:
                raise ValueError(f"{name} weight must be in [0, 1], got {value}")
        if sum(self.to_dict().values()) <= 0:
            raise ValueError("At least one sub-score weight must be positive")

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoreWeights":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoreWeights":
        """Create from main config dictionary."""
        weights = config.get("scoring", {}).get("weights", {})
        defaults = cls()
        return cls(
            synergy=weights.get("synergy", defaults.synergy),
            consistency=weights.get("consistency", defaults.consistency),
            technical=weights.get("technical", defaults.technical),
            social=weights.get("social", defaults.social)
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved score weights to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ScoreWeights":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


DEFAULT_WEIGHTS = ScoreWeights()

# ScoreSet field -> ScoreWeights field
SCORE_FIELDS = {
    "synergy_score": "synergy",
    "consistency_score": "consistency",
    "technical_score": "technical",
    "social_score": "social"
}


@dataclass
class ScoreSet:
    """
    The four optional sub-scores of a team.

    ``final_score`` is derived on every access and is never stored, so it
    always reflects the current sub-scores.
    """
    synergy_score: Optional[float] = None
    consistency_score: Optional[float] = None
    technical_score: Optional[float] = None
    social_score: Optional[float] = None

    @property
    def final_score(self) -> float:
        return calculate_final_score(self)

    def to_dict(self) -> Dict[str, Optional[float]]:
        """Convert to dictionary, including the derived final score."""
        result = asdict(self)
        result["final_score"] = self.final_score
        return result

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ScoreSet":
        """Create from a mapping; unknown keys (including final_score) are ignored."""
        return cls(**{name: d.get(name) for name in SCORE_FIELDS})


def calculate_consistency_score(logs_count: int, required: int = DEFAULT_REQUIRED_LOGS) -> float:
    """
    Score progress-log consistency on a 0-100 scale.

    Args:
        logs_count: Number of progress logs the team submitted
        required: Number of logs that earns the full score

    Returns:
        min(100, logs_count / required * 100); 0 when required is not positive
    """
    if required <= 0:
        return 0.0
    return min(100.0, logs_count * 100 / required)


def calculate_final_score(
    scores: Union[ScoreSet, Mapping[str, Any]],
    weights: Optional[ScoreWeights] = None
) -> float:
    """
    Combine the present sub-scores into a final score.

    Args:
        scores: ScoreSet or mapping with any of the *_score keys
        weights: Sub-score weights (defaults 0.25/0.20/0.35/0.20)

    Returns:
        Weighted mean of present sub-scores, 2 decimals; 0 if none present
    """
    weights = weights or DEFAULT_WEIGHTS
    if isinstance(scores, ScoreSet):
        scores = asdict(scores)

    weight_values = weights.to_dict()
    total = 0.0
    weight_sum = 0.0
    for score_field, weight_name in SCORE_FIELDS.items():
        value = scores.get(score_field)
        if value is None:
            continue
        weight = weight_values[weight_name]
        total += value * weight
        weight_sum += weight

    return round_score(total / weight_sum) if weight_sum > 0 else 0.0


@dataclass
class TeamScore:
    """
    Scores recorded for one team.

    Attributes:
        scores: Current sub-scores
        synergy_analysis: Evaluator output behind the synergy score, if any
        weights: Weights the final score is fused with
    """
    scores: ScoreSet
    synergy_analysis: Optional[SynergyAnalysis] = None
    weights: ScoreWeights = field(default_factory=ScoreWeights)

    @property
    def final_score(self) -> float:
        return calculate_final_score(self.scores, self.weights)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = self.scores.to_dict()
        result["final_score"] = self.final_score
        result["synergy_analysis"] = (
            self.synergy_analysis.to_dict() if self.synergy_analysis else None
        )
        return result


class ScorePipeline:
    """
    Score fusion for competition teams.

    Builds a team's ScoreSet from its progress logs, judge scores and an
    optional injected synergy evaluator, and ranks teams by final score.

    Attributes:
        weights: ScoreWeights used for fusion
        required_logs: Logs needed for a full consistency score
    """

    def __init__(
        self,
        weights: Optional[ScoreWeights] = None,
        required_logs: int = DEFAULT_REQUIRED_LOGS
    ):
        """
        Initialize the score pipeline.

        Args:
            weights: ScoreWeights instance (defaults 0.25/0.20/0.35/0.20)
            required_logs: Logs needed for a full consistency score
        """
        self.weights = weights or ScoreWeights()
        self.weights.validate()
        self.required_logs = required_logs
        logger.info(
            f"Initialized ScorePipeline with weights={self.weights.to_dict()}, "
            f"required_logs={required_logs}"
        )

    def final_score(self, scores: Union[ScoreSet, Mapping[str, Any]]) -> float:
        """Final score under this pipeline's weights."""
        return calculate_final_score(scores, self.weights)

    def score_team(
        self,
        logs_count: int,
        technical_score: Optional[float] = None,
        social_score: Optional[float] = None,
        existing: Optional[ScoreSet] = None,
        evaluator: Optional[SynergyEvaluator] = None,
        prototype_description: Optional[str] = None,
        combined_keywords: Optional[Sequence[CombinedTeamKeyword]] = None,
        existing_analysis: Optional[SynergyAnalysis] = None,
        required_logs: Optional[int] = None
    ) -> TeamScore:
        """
        Recompute a team's scores.

        Consistency is always recomputed from ``logs_count``. Judge scores
        passed in replace the existing ones; omitted ones are kept. The
        synergy score is re-evaluated only when an evaluator, a prototype
        description and combined keywords are all supplied; if the
        evaluator fails, the previous synergy score is kept.

        Args:
            logs_count: Progress logs submitted by the team
            technical_score: New technical score, if judged
            social_score: New social score, if judged
            existing: Previously recorded scores
            evaluator: Injected synergy evaluator
            prototype_description: Team's submission description
            combined_keywords: Output of combine_team_keywords
            existing_analysis: Previously recorded synergy analysis
            required_logs: Per-event override of the required log count

        Returns:
            TeamScore with the updated ScoreSet
        """
        existing = existing or ScoreSet()

        scores = ScoreSet(
            synergy_score=existing.synergy_score,
            consistency_score=calculate_consistency_score(
                logs_count, required_logs if required_logs is not None else self.required_logs
            ),
            technical_score=(
                technical_score if technical_score is not None else existing.technical_score
            ),
            social_score=social_score if social_score is not None else existing.social_score
        )
        analysis = existing_analysis

        if evaluator is not None and prototype_description and combined_keywords:
            keywords = top_team_keywords(combined_keywords)
            try:
                analysis = evaluator.evaluate(prototype_description, keywords)
                scores.synergy_score = analysis.score
            except Exception as e:
                logger.error(f"Synergy analysis failed: {e}")
                analysis = existing_analysis

        logger.debug(f"Scored team: {scores.to_dict()}")
        return TeamScore(scores=scores, synergy_analysis=analysis, weights=self.weights)

    def rank_leaderboard(self, entries: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """
        Order leaderboard entries by final score, highest first.

        Each entry's final score is recomputed from its sub-scores; teams
        with no sub-scores rank as 0.

        Args:
            entries: Mappings with any of the *_score keys plus team fields

        Returns:
            New entry dicts with ``final_score`` set, sorted descending
        """
        ranked = []
        for entry in entries:
            record = dict(entry)
            record["final_score"] = self.final_score(ScoreSet.from_dict(entry))
            ranked.append(record)
        ranked.sort(key=lambda r: r["final_score"], reverse=True)
        return ranked


def create_pipeline_from_config(config: Dict[str, Any]) -> ScorePipeline:
    """
    Factory function to create ScorePipeline from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Configured ScorePipeline instance
    """
    weights = ScoreWeights.from_config(config)
    required_logs = config.get("scoring", {}).get("required_logs", DEFAULT_REQUIRED_LOGS)
    return ScorePipeline(weights, required_logs=required_logs)
