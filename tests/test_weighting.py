"""Tests for deterministic keyword weighting."""

import pytest

from skillmatch.keywords import (
    CATEGORY_WEIGHTS,
    Keyword,
    calculate_keyword_weight,
    recalculate_keyword_weights,
    source_multiplier,
)


@pytest.mark.parametrize("category,expected", [
    ("skills", 1.0),
    ("technologies", 0.95),
    ("expertise", 0.9),
    ("tools", 0.85),
    ("methodologies", 0.8),
    ("domains", 0.8),
    ("projects", 0.7),
    ("roles", 0.65),
    ("certifications", 0.6),
    ("companies", 0.5),
    ("institutions", 0.45),
    ("links", 0.2),
    ("hobbies", 0.5),
    (None, 0.5),
])
def test_category_importance(category, expected):
    assert calculate_keyword_weight(category, "pdf") == pytest.approx(expected)


def test_category_table_is_complete():
    assert len(CATEGORY_WEIGHTS) == 12


@pytest.mark.parametrize("source,expected", [
    ("resume", 1.0),
    ("pdf", 1.0),
    ("linkedin", 0.95),
    ("github", 0.9),
    ("journal", 0.8),
    (None, 0.8),
])
def test_source_multiplier(source, expected):
    assert source_multiplier(source) == expected
    assert calculate_keyword_weight("skills", source) == pytest.approx(expected)


@pytest.mark.parametrize("position,expected", [
    (0, 1.0),
    (1, 0.98),
    (5, 0.9),
    (10, 0.8),
    (11, 0.8),
    (40, 0.8),
])
def test_position_decay_is_floored(position, expected):
    assert calculate_keyword_weight("skills", "pdf", position) == pytest.approx(expected)


def test_weight_is_rounded_to_two_decimals():
    # 0.95 * 0.95 = 0.9025
    assert calculate_keyword_weight("technologies", "linkedin") == 0.9
    # 0.95 * 0.95 * 0.94 = 0.84835
    assert calculate_keyword_weight("technologies", "linkedin", 3) == 0.85
    # 0.9 * 0.9 = 0.81
    assert calculate_keyword_weight("expertise", "github") == pytest.approx(0.81)


def test_recalculate_uses_category_and_first_source():
    stored = [
        {"keyword": "docker", "weight": 0.3, "category": "tools", "sources": ["linkedin", "pdf"]},
        {"keyword": "aws certified", "weight": 0.9, "category": "certifications", "sources": ["linkedin"]},
    ]

    updated = recalculate_keyword_weights(stored)

    assert [kw.keyword for kw in updated] == ["docker", "aws certified"]
    assert updated[0].weight == pytest.approx(0.81)
    assert updated[1].weight == pytest.approx(0.57)
    assert updated[0].sources == ["linkedin", "pdf"]
    assert stored[0]["weight"] == 0.3


def test_recalculate_defaults_to_skills_from_resume():
    original = Keyword(keyword="rust", weight=0.2)

    updated = recalculate_keyword_weights([original, {"weight": 0.5}, None])

    assert updated == [Keyword(keyword="rust", weight=1.0)]
    assert original.weight == 0.2
    assert updated[0].category is None


def test_recalculate_empty():
    assert recalculate_keyword_weights(None) == []
