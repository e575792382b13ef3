from __future__ import annotations

from pathlib import Path

import pytest
from agent_teams.models import Process, Subtask, Task, Team


@pytest.fixture(autouse=True)
def _set_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    repo_root = Path(__file__).resolve().parents[3]
    monkeypatch.setenv("AGENT_TEAMS_DIR", str(repo_root / "teams"))
    monkeypatch.setenv("AGENT_TEAMS_LOG_LEVEL", "INFO")
    monkeypatch.setenv("AGENT_TEAMS_COLLECT_ALL_ERRORS", "false")
    monkeypatch.delenv("AGENT_TEAMS_SPECS_PATH", raising=False)


@pytest.fixture
def teams_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "teams"


@pytest.fixture
def release_team() -> Team:
    team = Team(name="release-team", process=Process.HIERARCHICAL, manager="coordinator")
    team.add_agents("qa", "docs", "release")
    team.add_task(
        Task(name="qa-validation", agent="qa").add_subtasks(
            Subtask(name="build", command="go build ./..."),
            Subtask(name="lint", command="golangci-lint run").optional(),
        )
    )
    team.add_task(
        Task(name="docs-validation", agent="docs").add_subtask(
            Subtask(name="readme", file="README.md")
        )
    )
    team.add_task(
        Task(name="release-validation", agent="release")
        .add_dependency("qa-validation")
        .add_dependency("docs-validation")
        .add_subtask(Subtask(name="git-clean", command="git status --porcelain"))
    )
    return team
