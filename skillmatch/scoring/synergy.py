"""
Synergy evaluation boundary.

Synergy scores come from an external AI evaluator that judges how well a
team's prototype uses the team's combined skills. The engine never builds
such a client itself: callers inject any object satisfying
``SynergyEvaluator``, and raw model text can be validated with
``parse_synergy_response`` before it reaches the score pipeline.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Sequence

logger = logging.getLogger(__name__)

ALIGNMENT_LEVELS = ("high", "medium", "low")

_FENCE_PATTERN = re.compile(r"```(?:json)?\n?")


@dataclass
class SynergyAnalysis:
    """
    Evaluator verdict on prototype/skill alignment.

    Attributes:
        score: Synergy score in [0, 100]
        alignment: "high", "medium" or "low"
        skills_used: Team skills the prototype uses
        skills_missing: Team skills the prototype leaves unused
        feedback: One-sentence summary
    """
    score: float
    alignment: str
    skills_used: List[str] = field(default_factory=list)
    skills_missing: List[str] = field(default_factory=list)
    feedback: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "alignment": self.alignment,
            "skills_used": list(self.skills_used),
            "skills_missing": list(self.skills_missing),
            "feedback": self.feedback
        }


class SynergyEvaluator(Protocol):
    """Anything that can rate a prototype against a team's top keywords."""

    def evaluate(self, prototype_description: str, keywords: Sequence[str]) -> SynergyAnalysis:
        ...


def parse_synergy_response(text: str) -> SynergyAnalysis:
    """
    Parse an evaluator's JSON reply, tolerating Markdown code fences.

    Args:
        text: Raw evaluator output

    Returns:
        Validated SynergyAnalysis

    Raises:
        ValueError: If the reply is not JSON or fields are out of range
    """
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_PATTERN.sub("", cleaned).strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Synergy response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Synergy response must be a JSON object, got {type(data).__name__}")

    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not 0 <= score <= 100:
        raise ValueError(f"score must be a number in [0, 100], got {score!r}")

    alignment = data.get("alignment")
    if alignment not in ALIGNMENT_LEVELS:
        raise ValueError(f"alignment must be one of {ALIGNMENT_LEVELS}, got {alignment!r}")

    logger.debug(f"Parsed synergy analysis: score={score}, alignment={alignment}")
    return SynergyAnalysis(
        score=float(score),
        alignment=alignment,
        skills_used=list(data.get("skills_used") or []),
        skills_missing=list(data.get("skills_missing") or []),
        feedback=str(data.get("feedback") or "")
    )
