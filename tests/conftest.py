"""Shared fixtures for the engine tests."""

from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def default_config_path() -> Path:
    """Path to the shipped configuration file."""
    return PROJECT_ROOT / "configs" / "config.yaml"


@pytest.fixture
def profile_a():
    return [{"keyword": "python", "weight": 0.8}, {"keyword": "sql", "weight": 0.6}]


@pytest.fixture
def profile_b():
    return [{"keyword": "python", "weight": 0.5}, {"keyword": "react", "weight": 0.9}]


@pytest.fixture
def candidates():
    """A small candidate pool with one non-overlapping profile."""
    return [
        {"id": "c1", "keywords": [{"keyword": "Python", "weight": 0.9}, {"keyword": "Docker", "weight": 0.7}]},
        {"id": "c2", "keywords": [{"keyword": "figma", "weight": 1.0}]},
        {"id": "c3", "keywords": ["python", "sql", "machine learning"]},
        {"id": "c4", "keywords": [{"keyword": "sql", "weight": 0.2}]},
    ]
