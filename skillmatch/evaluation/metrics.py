"""
Evaluation metrics for candidate-pool matching.

There are no ground-truth labels for skill compatibility, so evaluation
focuses on:
1. Score distribution across a candidate pool
2. Sanity checks (symmetry: score(A, B) must equal score(B, A))
3. A tabular view of ranked matches for inspection

This module DOES NOT claim real-world predictive accuracy.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence
import json

import numpy as np
import pandas as pd

from ..matching.compatibility import (
    MatchQualityThresholds,
    calculate_compatibility,
    get_match_quality
)

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 12.5, "p50": 30.0, "p90": 71.2}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class SymmetryCheck:
    """Results of the symmetry sanity check."""
    n_pairs: int
    n_violations: int
    max_difference: float

    @property
    def is_symmetric(self) -> bool:
        return self.n_violations == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_pairs": int(self.n_pairs),
            "n_violations": int(self.n_violations),
            "max_difference": float(self.max_difference),
            "is_symmetric": self.is_symmetric
        }


@dataclass
class MatchReport:
    """
    Evaluation report for one user's candidate pool.

    Contains the score distribution, quality-tier counts and the symmetry
    check. The report documents scoring behavior WITHOUT claiming
    predictive validity.
    """
    name: str
    distribution_stats: ScoreDistributionStats
    quality_counts: Dict[str, int] = field(default_factory=dict)
    symmetry_check: Optional[SymmetryCheck] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "name": self.name,
            "distribution_stats": self.distribution_stats.to_dict(),
            "quality_counts": dict(self.quality_counts)
        }
        if self.symmetry_check:
            result["symmetry_check"] = self.symmetry_check.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved match report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        stats = self.distribution_stats
        lines = [
            f"Match Report: {self.name}",
            "=" * 50,
            "",
            f"Score Distribution ({stats.count} candidates):",
            f"  Mean: {stats.mean:.2f}",
            f"  Std:  {stats.std:.2f}",
            f"  Min:  {stats.min:.2f}",
            f"  Max:  {stats.max:.2f}",
        ]

        for q_name, q_value in stats.quantiles.items():
            lines.append(f"  {q_name}: {q_value:.2f}")

        if self.quality_counts:
            lines.extend(["", "Match Quality:"])
            for label, count in self.quality_counts.items():
                lines.append(f"  {label}: {count}")

        if self.symmetry_check:
            lines.extend([
                "",
                "Symmetry Check:",
                f"  Pairs checked: {self.symmetry_check.n_pairs}",
                f"  Is symmetric: {self.symmetry_check.is_symmetric}",
                f"  Max difference: {self.symmetry_check.max_difference:.4f}",
            ])

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for compatibility scores.

    Args:
        scores: Compatibility scores (0-100)
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance (all zeros for an empty pool)
    """
    values = np.asarray(scores, dtype=float)
    if values.size == 0:
        return ScoreDistributionStats(
            count=0, mean=0.0, std=0.0, min=0.0, max=0.0,
            quantiles={f"p{int(q * 100)}": 0.0 for q in quantiles}
        )

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(values, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        count=int(values.size),
        mean=float(np.mean(values)),
        std=float(np.std(values)),
        min=float(np.min(values)),
        max=float(np.max(values)),
        quantiles=quantile_dict
    )


def check_symmetry(
    user_keywords: Optional[Iterable[Any]],
    candidates: Sequence[Mapping[str, Any]],
    tolerance: float = 1e-9
) -> SymmetryCheck:
    """
    Verify that compatibility is symmetric for every user/candidate pair.

    Args:
        user_keywords: The user's keywords
        candidates: Candidate records, each with a ``keywords`` list
        tolerance: Largest score difference still counted as symmetric

    Returns:
        SymmetryCheck instance
    """
    user_keywords = list(user_keywords or [])
    n_violations = 0
    max_difference = 0.0
    for candidate in candidates:
        forward = calculate_compatibility(user_keywords, candidate.get("keywords")).score
        backward = calculate_compatibility(candidate.get("keywords"), user_keywords).score
        difference = abs(forward - backward)
        max_difference = max(max_difference, difference)
        if difference > tolerance:
            n_violations += 1

    if n_violations:
        logger.warning(f"Symmetry violated for {n_violations} of {len(candidates)} pairs")

    return SymmetryCheck(
        n_pairs=len(candidates),
        n_violations=n_violations,
        max_difference=max_difference
    )


def matches_to_frame(
    matches: Sequence[Mapping[str, Any]],
    id_field: str = "id",
    thresholds: Optional[MatchQualityThresholds] = None
) -> pd.DataFrame:
    """
    Tabulate ranked matches (output of find_top_matches).

    Args:
        matches: Ranked match records
        id_field: Candidate field used as the identifier column
        thresholds: Quality tier bounds for the label column

    Returns:
        DataFrame with rank, id, compatibility, total_common, quality and
        top_keywords columns
    """
    columns = ["rank", id_field, "compatibility", "total_common", "quality", "top_keywords"]
    rows = []
    for rank, match in enumerate(matches, start=1):
        common = match.get("commonKeywords") or []
        rows.append({
            "rank": rank,
            id_field: match.get(id_field),
            "compatibility": match.get("compatibility", 0.0),
            "total_common": match.get("totalCommon", 0),
            "quality": get_match_quality(match.get("compatibility", 0.0), thresholds).label,
            "top_keywords": ", ".join(ck["keyword"] for ck in common[:5])
        })
    return pd.DataFrame(rows, columns=columns)


def create_match_report(
    name: str,
    user_keywords: Optional[Iterable[Any]],
    candidates: Sequence[Mapping[str, Any]],
    thresholds: Optional[MatchQualityThresholds] = None,
    quantiles: Sequence[float] = DEFAULT_QUANTILES,
    run_symmetry_check: bool = True
) -> MatchReport:
    """
    Create a complete report for a user's candidate pool.

    Args:
        name: Report name (e.g., the user's id)
        user_keywords: The user's keywords
        candidates: Candidate records, each with a ``keywords`` list
        thresholds: Quality tier bounds
        quantiles: Quantiles to compute
        run_symmetry_check: Whether to recompute every pair in reverse

    Returns:
        MatchReport instance
    """
    user_keywords = list(user_keywords or [])
    scores = [
        calculate_compatibility(user_keywords, candidate.get("keywords")).score
        for candidate in candidates
    ]

    dist_stats = compute_score_distribution_stats(scores, quantiles)

    labels = pd.Series(
        [get_match_quality(score, thresholds).label for score in scores],
        dtype=object
    )
    quality_counts = {label: int(count) for label, count in labels.value_counts().items()}

    symmetry = None
    if run_symmetry_check:
        symmetry = check_symmetry(user_keywords, candidates)

    return MatchReport(
        name=name,
        distribution_stats=dist_stats,
        quality_counts=quality_counts,
        symmetry_check=symmetry
    )
