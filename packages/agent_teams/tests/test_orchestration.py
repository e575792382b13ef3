from __future__ import annotations

import logging

import pytest
from agent_teams.aggregation import evaluate_team
from agent_teams.models import Status, Subtask, Task, Team
from agent_teams.orchestration import (
    OrchestrationConfig,
    expected_team_result,
    generate_orchestration_markdown,
    render_status_report,
)


def test_markdown_groups_waves(release_team: Team) -> None:
    release_team.with_description("Release validation workflow")
    markdown = generate_orchestration_markdown(
        release_team,
        OrchestrationConfig(version="v1.2.0", agent_specs_path="validation/specs"),
    )
    assert markdown.startswith("# Release Team Orchestration\n")
    assert "**Target Version:** `v1.2.0`" in markdown
    assert "**Process:** hierarchical" in markdown
    assert "**Manager:** coordinator" in markdown
    assert "## Parallel Group 1" in markdown
    assert "## Group 2" in markdown
    assert markdown.index("### Task: qa-validation") < markdown.index("## Group 2")
    assert "**Requires:** qa-validation, docs-validation (must be GO)" in markdown
    assert "Read your instructions from validation/specs/qa.md" in markdown
    assert "    Target version: v1.2.0" in markdown
    assert "| lint | command | No | Pass |" in markdown
    assert "**Sign-off:** GO if all 1 required subtasks pass." in markdown
    assert "## Expected Status Report" in markdown


def test_markdown_truncates_expected_output() -> None:
    team = Team(name="t", process="sequential")
    team.add_task(
        Task(name="a", agent="x").add_subtask(
            Subtask(name="grep", pattern="secret", expected_output="x" * 40)
        )
    )
    markdown = generate_orchestration_markdown(team)
    assert f"| grep | pattern | Yes | {'x' * 27}... |" in markdown


def test_markdown_include_tasks_ignores_excluded_dependencies(release_team: Team) -> None:
    markdown = generate_orchestration_markdown(
        release_team, OrchestrationConfig(include_tasks=["release-validation"])
    )
    assert "### Task: release-validation" in markdown
    assert "### Task: qa-validation" not in markdown
    assert "## Group 1" in markdown


def test_markdown_falls_back_on_cycle(caplog: pytest.LogCaptureFixture) -> None:
    team = Team(name="loop", process="parallel")
    team.add_task(Task(name="a", agent="x", depends_on=["b"]))
    team.add_task(Task(name="b", agent="x", depends_on=["a"]))
    with caplog.at_level(logging.WARNING):
        markdown = generate_orchestration_markdown(team)
    assert "## Parallel Group 1" in markdown
    assert "falling back to a single group" in caplog.text


def test_expected_result_is_all_go(release_team: Team) -> None:
    result = expected_team_result(release_team, version="v2.0.0")
    assert result.status is Status.GO
    assert result.version == "v2.0.0"
    assert all(task.status is Status.GO for task in result.tasks)
    lint = result.tasks[0].subtasks[1]
    assert lint.name == "lint"
    assert lint.message == "optional"


def test_render_status_report(release_team: Team) -> None:
    result = evaluate_team(
        release_team,
        {"qa-validation": {"build": True, "lint": False}, "docs-validation": {"readme": False}},
    )
    report = render_status_report(result)
    lines = report.splitlines()
    assert lines[0].startswith("╔") and lines[-1].startswith("╚")
    assert "TEAM STATUS REPORT" in lines[1]
    assert " qa-validation (qa): 🟡 WARN" in report
    assert "🔴 NO-GO" in report
    assert "🔴 TEAM: NO-GO 🔴" in report


def test_render_go_footer(release_team: Team) -> None:
    report = render_status_report(expected_team_result(release_team, version="v1.0.0"))
    assert "TEAM STATUS REPORT (v1.0.0)" in report
    assert "🚀 TEAM: GO 🚀" in report
    assert "🟢 GO (optional)" in report
