"""Tests for candidate-pool evaluation metrics."""

import json

import pytest

from skillmatch.evaluation import (
    check_symmetry,
    compute_score_distribution_stats,
    create_match_report,
    matches_to_frame,
)
from skillmatch.matching import find_top_matches


def test_distribution_stats():
    stats = compute_score_distribution_stats([10.0, 20.0, 30.0, 40.0])

    assert stats.count == 4
    assert stats.mean == pytest.approx(25.0)
    assert stats.min == 10.0
    assert stats.max == 40.0
    assert stats.quantiles["p50"] == pytest.approx(25.0)
    assert set(stats.quantiles) == {"p10", "p25", "p50", "p75", "p90"}


def test_distribution_stats_empty_pool():
    stats = compute_score_distribution_stats([])
    assert stats.count == 0
    assert stats.to_dict()["quantiles"]["p90"] == 0.0


def test_symmetry_check_passes(candidates):
    check = check_symmetry(["python", {"keyword": "sql", "weight": 0.3}], candidates)
    assert check.n_pairs == 4
    assert check.is_symmetric
    assert check.max_difference == 0.0


def test_matches_to_frame(candidates):
    matches = find_top_matches(["python", "sql"], candidates)

    frame = matches_to_frame(matches)

    assert list(frame.columns) == ["rank", "id", "compatibility", "total_common", "quality", "top_keywords"]
    assert frame["rank"].tolist() == [1, 2, 3]
    assert frame.iloc[0]["id"] == "c3"
    assert frame.iloc[0]["top_keywords"] == "python, sql"


def test_matches_to_frame_empty():
    frame = matches_to_frame([])
    assert frame.empty
    assert "compatibility" in frame.columns


def test_create_match_report(candidates, tmp_path):
    report = create_match_report("user-1", ["python", "sql"], candidates)

    assert report.distribution_stats.count == 4
    assert sum(report.quality_counts.values()) == 4
    assert report.quality_counts["Low Match"] == 1
    assert report.symmetry_check.is_symmetric
    assert "Match Report: user-1" in report.summary()

    path = tmp_path / "report.json"
    report.save(str(path))
    saved = json.loads(path.read_text())
    assert saved["name"] == "user-1"
    assert saved["symmetry_check"]["is_symmetric"] is True


def test_report_without_symmetry_check(candidates):
    report = create_match_report("user-2", ["go"], candidates, run_symmetry_check=False)
    assert report.symmetry_check is None
    assert "symmetry_check" not in report.to_dict()
    assert report.quality_counts == {"Low Match": 4}
