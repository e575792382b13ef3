#!/usr/bin/env python3
"""Validate a team definition and print its execution plan.

Prints the execution waves by default, or the serial dependency order with
--serial. Optionally writes orchestration instructions as Markdown.

Usage:
    uv run python scripts/plan_team.py teams/release-team.yaml
    uv run python scripts/plan_team.py teams/release-team.yaml --serial
    uv run python scripts/plan_team.py teams/release-team.yaml --markdown ORCHESTRATION.md
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from agent_teams import (
    OrchestrationConfig,
    TeamFileError,
    TeamValidationError,
    check_team,
    generate_orchestration_markdown,
    load_settings,
    parallel_groups,
    read_team_file,
    topological_sort,
    validate_team,
)

logger = logging.getLogger(__name__)


def plan_team(
    path: Path,
    *,
    serial: bool = False,
    markdown: Path | None = None,
    version: str = "",
) -> int:
    """Load, validate, and print the plan for one team file."""
    settings = load_settings()
    team = read_team_file(path)

    if settings.collect_all_errors:
        result = check_team(team)
        for warning in result.warnings:
            logger.warning("%s", warning)
        if not result.valid:
            for error in result.errors:
                print(f"  ERROR {error}", file=sys.stderr)
            return 1
    else:
        validate_team(team)

    print(f"Team: {team.name} ({team.process}, {len(team.tasks)} tasks)")
    if serial:
        for index, task in enumerate(topological_sort(team), start=1):
            print(f"  {index}. {task.name} [{task.agent}]")
    else:
        for index, wave in enumerate(parallel_groups(team), start=1):
            names = ", ".join(task.name for task in wave)
            print(f"  Wave {index}: {names}")

    if markdown:
        config = OrchestrationConfig(
            version=version or team.version,
            agent_specs_path=settings.agent_specs_path,
        )
        markdown.parent.mkdir(parents=True, exist_ok=True)
        markdown.write_text(generate_orchestration_markdown(team, config), encoding="utf-8")
        print(f"Wrote {markdown}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate a team and print its execution plan")
    parser.add_argument("team_file", type=Path, help="Team definition (.yaml, .json, .toml)")
    parser.add_argument(
        "--serial", action="store_true", help="Print the serial order instead of waves"
    )
    parser.add_argument("--markdown", type=Path, help="Write orchestration Markdown to this path")
    parser.add_argument("--version", default="", help="Target version for the instructions")
    args = parser.parse_args()

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        return plan_team(
            args.team_file,
            serial=args.serial,
            markdown=args.markdown,
            version=args.version,
        )
    except (TeamFileError, TeamValidationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
