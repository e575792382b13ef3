from __future__ import annotations

import json
import stat
from pathlib import Path

import pytest
import yaml
from agent_teams.errors import TeamParseError, TeamReadError, TeamValidationError
from agent_teams.graph import parallel_groups, validate_team
from agent_teams.loader import (
    parse_team_json,
    parse_team_toml,
    parse_team_yaml,
    read_team_dir,
    read_team_file,
    team_to_dict,
    write_team_file,
    write_team_json,
)
from agent_teams.models import Process, SubtaskKind, Task, Team

TEAM_YAML = """\
name: docs-team
process: parallel
agents: [writer, reviewer]
tasks:
  - name: draft
    agent: writer
    subtasks:
      - name: outline
        file: docs/outline.md
        required: true
  - name: review
    agent: reviewer
    depends_on: [draft]
    subtasks:
      - name: spelling
        command: codespell docs
        required: false
        timeout: 60
"""

TEAM_TOML = """\
name = "docs-team"
process = "sequential"

[[tasks]]
name = "draft"
agent = "writer"

[[tasks.subtasks]]
name = "no-todo"
pattern = "TODO"
files = "docs/**/*.md"
"""


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_parse_yaml() -> None:
    team = parse_team_yaml(TEAM_YAML)
    assert team.process is Process.PARALLEL
    review = team.get_task("review")
    assert review is not None
    assert review.depends_on == ["draft"]
    spelling = review.subtasks[0]
    assert spelling.kind is SubtaskKind.COMMAND
    assert spelling.required is False
    assert spelling.timeout == 60


def test_parse_toml() -> None:
    team = parse_team_toml(TEAM_TOML)
    subtask = team.tasks[0].subtasks[0]
    assert subtask.kind is SubtaskKind.PATTERN
    assert subtask.files == "docs/**/*.md"
    assert subtask.required is True


def test_parse_json_error_carries_path() -> None:
    with pytest.raises(TeamParseError) as excinfo:
        parse_team_json(b"{not json", "teams/broken.json")
    assert excinfo.value.format == "json"
    assert excinfo.value.path == "teams/broken.json"
    assert "failed to parse json file teams/broken.json" in str(excinfo.value)


def test_parse_yaml_rejects_missing_fields() -> None:
    with pytest.raises(TeamParseError, match="failed to parse yaml"):
        parse_team_yaml("tasks:\n  - agent: qa\n")


def test_unknown_process_survives_parsing() -> None:
    team = parse_team_yaml("name: t\nprocess: round-robin\ntasks: []\n")
    assert team.process == "round-robin"


def test_read_team_file_by_extension(tmp_path: Path) -> None:
    _write(tmp_path / "team.yml", TEAM_YAML)
    _write(tmp_path / "team.toml", TEAM_TOML)
    assert read_team_file(tmp_path / "team.yml").name == "docs-team"
    assert read_team_file(tmp_path / "team.toml").process is Process.SEQUENTIAL


def test_read_team_file_without_extension(tmp_path: Path) -> None:
    payload = {"name": "json-team", "process": "parallel", "tasks": [{"name": "a", "agent": "x"}]}
    _write(tmp_path / "team", json.dumps(payload))
    assert read_team_file(tmp_path / "team").name == "json-team"


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(TeamReadError) as excinfo:
        read_team_file(tmp_path / "missing.yaml")
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_write_and_read_yaml(tmp_path: Path) -> None:
    team = parse_team_yaml(TEAM_YAML)
    path = write_team_file(team, tmp_path / "out" / "team.yaml")
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert read_team_file(path) == team


def test_write_json_omits_empty_fields(tmp_path: Path) -> None:
    team = parse_team_yaml(TEAM_YAML)
    path = write_team_json(team, tmp_path / "team.json")
    text = path.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    payload = json.loads(text)
    draft = payload["tasks"][0]
    assert "depends_on" not in draft
    assert "description" not in draft
    assert draft["subtasks"][0] == {"name": "outline", "file": "docs/outline.md", "required": True}
    assert read_team_file(path) == team


def test_team_to_dict_keeps_required_fields() -> None:
    payload = team_to_dict(Team(name="bare"))
    assert payload == {"name": "bare", "process": "", "tasks": []}


def test_read_team_dir(tmp_path: Path) -> None:
    _write(tmp_path / "b.yaml", TEAM_YAML.replace("docs-team", "beta"))
    _write(tmp_path / "a.toml", TEAM_TOML.replace("docs-team", "alpha"))
    _write(tmp_path / "notes.txt", "ignored")
    (tmp_path / "nested").mkdir()
    _write(tmp_path / "nested" / "c.yaml", TEAM_YAML)

    teams = read_team_dir(tmp_path)
    assert [team.name for team in teams] == ["alpha", "beta"]


def test_read_team_dir_propagates_first_failure(tmp_path: Path) -> None:
    _write(tmp_path / "good.yaml", TEAM_YAML)
    _write(tmp_path / "bad.yaml", "name: [unclosed")
    with pytest.raises(TeamParseError):
        read_team_dir(tmp_path)


def test_read_team_dir_missing(tmp_path: Path) -> None:
    with pytest.raises(TeamReadError, match="not a directory"):
        read_team_dir(tmp_path / "absent")


def test_bundled_release_team_plans(teams_dir: Path) -> None:
    team = read_team_file(teams_dir / "release-team.yaml")
    validate_team(team)
    waves = parallel_groups(team)
    assert [len(wave) for wave in waves] == [4, 1]
    assert waves[1][0].name == "release-validation"
    assert yaml.safe_load((teams_dir / "release-team.yaml").read_text())["manager"] == team.manager


def test_toml_with_invalid_utf8_is_a_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "team.toml"
    path.write_bytes(b'name = "\xff\xfe"\n')
    with pytest.raises(TeamParseError) as excinfo:
        read_team_file(path)
    assert excinfo.value.format == "toml"
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_read_team_dir_matches_upper_case_suffixes(tmp_path: Path) -> None:
    _write(tmp_path / "TEAM.YAML", TEAM_YAML)
    assert [team.name for team in read_team_dir(tmp_path)] == ["docs-team"]


def test_missing_team_name_is_reported_by_validation() -> None:
    team = parse_team_yaml("process: parallel\ntasks:\n  - name: a\n    agent: x\n")
    assert team.name == ""
    with pytest.raises(TeamValidationError) as excinfo:
        validate_team(team)
    assert str(excinfo.value) == "name: team name is required"


def test_unnamed_team_round_trips_with_name_and_agent(tmp_path: Path) -> None:
    team = Team(process="sequential").add_task(Task(name="a"))
    payload = team_to_dict(team)
    assert payload["name"] == ""
    assert payload["tasks"][0]["agent"] == ""
    assert read_team_file(write_team_json(team, tmp_path / "team.json")) == team


def test_rewrite_restricts_existing_file_permissions(tmp_path: Path) -> None:
    path = tmp_path / "team.yaml"
    path.write_text("stale", encoding="utf-8")
    path.chmod(0o644)
    write_team_file(parse_team_yaml(TEAM_YAML), path)
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert read_team_file(path).name == "docs-team"
