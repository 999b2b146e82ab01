"""Tests for competition score fusion and synergy parsing."""

import logging

import pytest

from skillmatch.scoring import (
    ScorePipeline,
    ScoreSet,
    ScoreWeights,
    SynergyAnalysis,
    calculate_consistency_score,
    calculate_final_score,
    create_pipeline_from_config,
    parse_synergy_response,
)
from skillmatch.team import CombinedTeamKeyword


class FakeEvaluator:
    """Records what it was asked and returns a fixed verdict."""

    def __init__(self, score=90.0):
        self.score = score
        self.calls = []

    def evaluate(self, prototype_description, keywords):
        self.calls.append((prototype_description, list(keywords)))
        return SynergyAnalysis(score=self.score, alignment="high", skills_used=list(keywords))


class FailingEvaluator:
    def evaluate(self, prototype_description, keywords):
        raise RuntimeError("model unavailable")


@pytest.fixture
def team_keywords():
    return [
        CombinedTeamKeyword(keyword="rust", weight=0.8, is_unique=True),
        CombinedTeamKeyword(keyword="python", weight=0.7, occurrences=3),
    ]


@pytest.mark.parametrize("logs_count,required,expected", [
    (0, 5, 0.0),
    (3, 5, 60.0),
    (5, 5, 100.0),
    (12, 5, 100.0),
    (1, 3, pytest.approx(33.333333)),
    (4, 0, 0.0),
])
def test_consistency_score(logs_count, required, expected):
    assert calculate_consistency_score(logs_count, required) == expected


def test_final_score_renormalizes_over_present_scores():
    assert calculate_final_score({"technical_score": 80}) == 80.0
    assert calculate_final_score({"technical_score": 80, "social_score": 50}) == pytest.approx(69.09)


def test_final_score_all_present():
    scores = ScoreSet(synergy_score=70, consistency_score=100, technical_score=80, social_score=60)
    assert calculate_final_score(scores) == pytest.approx(77.5)


def test_final_score_bounds():
    full = {name: 100 for name in ("synergy_score", "consistency_score", "technical_score", "social_score")}
    assert calculate_final_score(full) == pytest.approx(100.0)
    assert calculate_final_score({}) == 0.0
    assert calculate_final_score(ScoreSet()) == 0.0


def test_score_set_derives_final_score_on_access():
    scores = ScoreSet(technical_score=80)
    assert scores.final_score == 80.0

    scores.social_score = 50
    assert scores.final_score == pytest.approx(69.09)
    assert scores.to_dict()["final_score"] == scores.final_score


def test_score_set_from_dict_ignores_stored_final_score():
    scores = ScoreSet.from_dict({"technical_score": 40, "final_score": 99, "team_id": "t1"})
    assert scores == ScoreSet(technical_score=40)
    assert scores.final_score == 40.0


def test_weights_validate():
    with pytest.raises(ValueError):
        ScoreWeights(technical=1.5).validate()
    with pytest.raises(ValueError):
        ScoreWeights(synergy=0, consistency=0, technical=0, social=0).validate()


def test_weights_from_config_and_file_round_trip(tmp_path):
    weights = ScoreWeights.from_config({"scoring": {"weights": {"technical": 0.5}}})
    assert weights.technical == 0.5
    assert weights.synergy == 0.25

    path = tmp_path / "weights.json"
    weights.save(str(path))
    assert ScoreWeights.load(str(path)) == weights


def test_custom_weights_change_final_score():
    pipeline = ScorePipeline(ScoreWeights(synergy=0, consistency=0.5, technical=0.5, social=0))
    assert pipeline.final_score({"consistency_score": 100, "technical_score": 50, "synergy_score": 0}) == 75.0


class TestScoreTeam:
    """ScorePipeline.score_team behaviour."""

    def test_recomputes_consistency_and_keeps_existing_scores(self):
        pipeline = ScorePipeline()
        existing = ScoreSet(synergy_score=60, consistency_score=20, technical_score=70, social_score=40)

        result = pipeline.score_team(3, existing=existing)

        assert result.scores == ScoreSet(
            synergy_score=60, consistency_score=60.0, technical_score=70, social_score=40
        )
        assert result.synergy_analysis is None

    def test_new_judge_scores_override(self):
        existing = ScoreSet(technical_score=70, social_score=40)
        result = ScorePipeline().score_team(5, technical_score=90, existing=existing)

        assert result.scores.technical_score == 90
        assert result.scores.social_score == 40

    def test_required_logs_override(self):
        pipeline = ScorePipeline(required_logs=10)
        assert pipeline.score_team(5).scores.consistency_score == 50.0
        assert pipeline.score_team(5, required_logs=5).scores.consistency_score == 100.0

    def test_evaluator_sets_synergy(self, team_keywords):
        evaluator = FakeEvaluator(score=85)

        result = ScorePipeline().score_team(
            5,
            technical_score=80,
            evaluator=evaluator,
            prototype_description="A Rust CLI for data pipelines",
            combined_keywords=team_keywords,
        )

        assert evaluator.calls == [("A Rust CLI for data pipelines", ["rust", "python"])]
        assert result.scores.synergy_score == 85
        assert result.synergy_analysis.alignment == "high"
        # (0.25*85 + 0.20*100 + 0.35*80) / 0.80
        assert result.final_score == pytest.approx(86.56)

    def test_evaluator_skipped_without_description(self, team_keywords):
        evaluator = FakeEvaluator()
        result = ScorePipeline().score_team(
            2, existing=ScoreSet(synergy_score=40), evaluator=evaluator,
            combined_keywords=team_keywords,
        )
        assert evaluator.calls == []
        assert result.scores.synergy_score == 40

    def test_failing_evaluator_keeps_previous_synergy(self, team_keywords, caplog):
        previous = SynergyAnalysis(score=55, alignment="medium")

        with caplog.at_level(logging.ERROR):
            result = ScorePipeline().score_team(
                5,
                existing=ScoreSet(synergy_score=55),
                evaluator=FailingEvaluator(),
                prototype_description="An app",
                combined_keywords=team_keywords,
                existing_analysis=previous,
            )

        assert result.scores.synergy_score == 55
        assert result.synergy_analysis is previous
        assert "model unavailable" in caplog.text

    def test_to_dict_uses_pipeline_weights(self):
        pipeline = ScorePipeline(ScoreWeights(synergy=0, consistency=1, technical=0, social=0))
        result = pipeline.score_team(5, technical_score=10).to_dict()
        assert result["final_score"] == 100.0
        assert result["synergy_analysis"] is None


def test_rank_leaderboard_sorts_by_recomputed_final_score():
    entries = [
        {"team_id": "a", "technical_score": 50, "final_score": 99},
        {"team_id": "b", "technical_score": 90},
        {"team_id": "c"},
    ]

    ranked = ScorePipeline().rank_leaderboard(entries)

    assert [r["team_id"] for r in ranked] == ["b", "a", "c"]
    assert [r["final_score"] for r in ranked] == [90.0, 50.0, 0.0]
    assert entries[0]["final_score"] == 99


def test_create_pipeline_from_config():
    pipeline = create_pipeline_from_config({"scoring": {"required_logs": 8}})
    assert pipeline.required_logs == 8
    assert pipeline.weights == ScoreWeights()


class TestParseSynergyResponse:
    def test_plain_json(self):
        analysis = parse_synergy_response(
            '{"score": 72, "alignment": "medium", "skills_used": ["rust"], '
            '"skills_missing": ["sql"], "feedback": "Solid use of Rust."}'
        )
        assert analysis == SynergyAnalysis(
            score=72.0, alignment="medium", skills_used=["rust"],
            skills_missing=["sql"], feedback="Solid use of Rust.",
        )

    def test_code_fences_are_stripped(self):
        analysis = parse_synergy_response('```json\n{"score": 40, "alignment": "low"}\n```')
        assert analysis.score == 40.0
        assert analysis.skills_used == []

    @pytest.mark.parametrize("text", [
        "not json",
        "[1, 2]",
        '{"score": 120, "alignment": "high"}',
        '{"score": true, "alignment": "high"}',
        '{"score": "80", "alignment": "high"}',
        '{"score": 80, "alignment": "great"}',
        "",
    ])
    def test_invalid_responses_raise(self, text):
        with pytest.raises(ValueError):
            parse_synergy_response(text)
