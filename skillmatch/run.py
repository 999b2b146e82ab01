"""
Command-line runner for the skill compatibility engine.

Reads a JSON payload, runs one engine operation, and prints the result as
JSON on stdout. Fetching and persisting data stays with the caller.

Usage:
    python -m skillmatch.run merge --input profile.json
    python -m skillmatch.run match --input payload.json
    python -m skillmatch.run team --input members.json
    python -m skillmatch.run score --input teams.json --config configs/config.yaml

Payloads:
    merge: {"existing": [...], "incoming": [...]}
    match: {"user_keywords": [...], "candidates": [{"id": ..., "keywords": [...]}]}
    team:  {"members": [[...], [...]]}
    score: {"teams": [{"team_id": ..., "logs_count": 3, "technical_score": 80}]}
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def load_runtime_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load and validate the config file, or return an empty config."""
    from .configs import load_config, validate_config

    if config_path is None:
        return {}

    config = load_config(config_path)
    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")

    setup_logging(config.get("global", {}).get("log_level", "INFO"))
    return config


def run_merge(payload: Dict[str, Any], config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge newly extracted keywords into an existing profile."""
    from .configs import get_config_value
    from .keywords import DEFAULT_MERGE_WEIGHT, merge_keywords

    default_weight = get_config_value(
        config, "keywords.default_merge_weight", DEFAULT_MERGE_WEIGHT
    )
    merged = merge_keywords(
        payload.get("existing"), payload.get("incoming"), default_weight=default_weight
    )
    logger.info(f"Merged profile has {len(merged)} keywords")
    return {"keywords": [kw.to_dict() for kw in merged]}


def run_match(payload: Dict[str, Any], config: Dict[str, Any]) -> Dict[str, Any]:
    """Rank a candidate pool against a user's keywords."""
    from .configs import get_config_value
    from .matching import MatchQualityThresholds, find_top_matches, get_match_quality
    from .evaluation import create_match_report

    thresholds = MatchQualityThresholds.from_config(config)
    thresholds.validate()

    limit = payload.get("limit", get_config_value(config, "matching.top_matches_limit", 10))
    n_jobs = get_config_value(config, "matching.n_jobs", 1)

    user_keywords = payload.get("user_keywords") or []
    candidates = payload.get("candidates") or []

    matches = find_top_matches(user_keywords, candidates, limit=limit, n_jobs=n_jobs)
    for match in matches:
        quality = get_match_quality(match["compatibility"], thresholds)
        match["quality"] = {"label": quality.label, "color": quality.color}

    report = create_match_report("candidate_pool", user_keywords, candidates, thresholds)
    logger.info("\n" + report.summary())

    return {"matches": matches, "report": report.to_dict()}


def run_team(payload: Dict[str, Any], config: Dict[str, Any]) -> Dict[str, Any]:
    """Combine team members' keywords into a team profile."""
    from .team import TeamAggregationConfig, combine_team_keywords, select_problem_keywords

    team_config = TeamAggregationConfig.from_config(config)
    team_config.validate()

    members = payload.get("members") or []
    combined = combine_team_keywords(members, team_config)
    problem = select_problem_keywords(combined)
    logger.info(
        f"Team of {len(members)} members: {len(combined)} keywords, "
        f"{len(problem.unique_skills)} unique"
    )

    return {
        "combined_keywords": [kw.to_dict() for kw in combined],
        "unique_skills": problem.unique_skills,
        "other_skills": problem.other_skills,
        "keywords_used": problem.keywords_used
    }


def run_score(payload: Dict[str, Any], config: Dict[str, Any]) -> Dict[str, Any]:
    """Score and rank teams from their sub-scores and log counts."""
    from .scoring import ScoreSet, create_pipeline_from_config

    pipeline = create_pipeline_from_config(config)

    entries = []
    for team in payload.get("teams") or []:
        team_score = pipeline.score_team(
            team.get("logs_count", 0),
            existing=ScoreSet.from_dict(team),
            required_logs=team.get("required_logs")
        )
        entry = dict(team)
        entry.update(team_score.to_dict())
        entries.append(entry)

    return {"leaderboard": pipeline.rank_leaderboard(entries)}


COMMANDS = {
    "merge": run_merge,
    "match": run_match,
    "team": run_team,
    "score": run_score
}


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the engine CLI."""
    parser = argparse.ArgumentParser(
        description="Skill compatibility and team scoring engine"
    )
    parser.add_argument(
        "command",
        choices=sorted(COMMANDS),
        help="Operation to run"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Path to the JSON payload"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (built-in defaults if omitted)"
    )

    args = parser.parse_args(argv)

    try:
        config = load_runtime_config(args.config)
        with open(args.input, "r") as f:
            payload = json.load(f)
        result = COMMANDS[args.command](payload, config)
    except Exception as e:
        logger.exception(f"{args.command} failed with error: {e}")
        return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
