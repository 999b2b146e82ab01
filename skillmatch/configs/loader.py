"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that all required fields are present.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ["global", "keywords", "matching", "team", "scoring"]
SCORE_COMPONENTS = ["synergy", "consistency", "technical", "social"]
QUALITY_TIERS = ["excellent", "great", "good", "moderate"]


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in REQUIRED_SECTIONS:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    # Sub-score weights are renormalized at scoring time, so they only
    # need to be individually in range
    weights = get_config_value(config, "scoring.weights", {}) or {}
    for name in SCORE_COMPONENTS:
        if name not in weights:
            issues.append(f"Missing scoring.weights.{name}")
            continue
        w = weights[name]
        if not isinstance(w, (int, float)) or not 0 <= w <= 1:
            issues.append(f"scoring.weights.{name} must be in [0, 1], got {w}")

    required_logs = get_config_value(config, "scoring.required_logs", 5)
    if not isinstance(required_logs, int) or required_logs <= 0:
        issues.append(f"scoring.required_logs must be a positive integer, got {required_logs}")

    thresholds = get_config_value(config, "matching.quality_thresholds", {}) or {}
    values = [thresholds.get(tier) for tier in QUALITY_TIERS]
    if all(v is not None for v in values):
        if values != sorted(values, reverse=True):
            issues.append(f"matching.quality_thresholds must be descending, got {values}")
    elif thresholds:
        missing = [tier for tier, v in zip(QUALITY_TIERS, values) if v is None]
        issues.append(f"Missing matching.quality_thresholds: {', '.join(missing)}")

    n_jobs = get_config_value(config, "matching.n_jobs", 1)
    if not isinstance(n_jobs, int) or n_jobs == 0:
        issues.append(f"matching.n_jobs must be a non-zero integer, got {n_jobs}")

    for key in ["unique_boost", "generic_penalty", "generic_floor", "default_weight"]:
        value = get_config_value(config, f"team.{key}")
        if value is not None and (not isinstance(value, (int, float)) or not 0 <= value <= 1):
            issues.append(f"team.{key} must be in [0, 1], got {value}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.weights.technical")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
