"""Tests for configuration loading and validation."""

import pytest
import yaml

from skillmatch.configs import get_config_value, load_config, validate_config


def test_shipped_config_is_valid(default_config_path):
    config = load_config(str(default_config_path))
    assert validate_config(config) == []
    assert get_config_value(config, "scoring.weights.technical") == 0.35
    assert get_config_value(config, "matching.quality_thresholds.excellent") == 70


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("scoring: [unclosed")
    with pytest.raises(yaml.YAMLError):
        load_config(str(path))


def test_validate_flags_bad_values(default_config_path):
    config = load_config(str(default_config_path))
    config["scoring"]["weights"]["social"] = 1.2
    config["scoring"]["required_logs"] = 0
    config["matching"]["quality_thresholds"]["great"] = 90
    config["matching"]["n_jobs"] = 0
    config["team"]["generic_floor"] = "high"
    del config["global"]

    issues = validate_config(config)

    assert "Missing required section: global" in issues
    assert any("scoring.weights.social" in issue for issue in issues)
    assert any("scoring.required_logs" in issue for issue in issues)
    assert any("descending" in issue for issue in issues)
    assert any("matching.n_jobs" in issue for issue in issues)
    assert any("team.generic_floor" in issue for issue in issues)


def test_validate_reports_missing_weights_and_tiers():
    issues = validate_config({"scoring": {"weights": {"technical": 0.5}},
                              "matching": {"quality_thresholds": {"excellent": 70}}})
    assert "Missing scoring.weights.synergy" in issues
    assert "Missing matching.quality_thresholds: great, good, moderate" in issues


def test_get_config_value():
    config = {"a": {"b": {"c": 3}}}
    assert get_config_value(config, "a.b.c") == 3
    assert get_config_value(config, "a.x.c", default=7) == 7
    assert get_config_value(config, "a.b.c.d") is None
