"""Read and write team definition files (YAML, JSON, TOML)."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agent_teams.errors import TeamParseError, TeamReadError, TeamWriteError
from agent_teams.models import Team

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o600
DEFAULT_DIR_MODE = 0o700

TEAM_FILE_SUFFIXES = (".yaml", ".yml", ".json", ".toml")


def parse_team_yaml(data: str | bytes, path: str = "") -> Team:
    """Parse YAML text into a Team."""
    try:
        payload = yaml.safe_load(data)
        return Team.model_validate(payload)
    except (yaml.YAMLError, ValidationError) as exc:
        raise TeamParseError("yaml", path, exc) from exc


def parse_team_json(data: str | bytes, path: str = "") -> Team:
    """Parse JSON text into a Team."""
    try:
        return Team.model_validate_json(data)
    except ValidationError as exc:
        raise TeamParseError("json", path, exc) from exc


def parse_team_toml(data: str | bytes, path: str = "") -> Team:
    """Parse TOML text into a Team."""
    try:
        text = data.decode("utf-8") if isinstance(data, bytes) else data
        return Team.model_validate(tomllib.loads(text))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError, ValidationError) as exc:
        raise TeamParseError("toml", path, exc) from exc


def read_team_file(path: str | Path) -> Team:
    """Read a team file, choosing the format from its extension.

    Files without a recognized extension are tried as YAML, then JSON.

    Raises:
        TeamReadError: The file could not be read.
        TeamParseError: The content is not a valid team definition.
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise TeamReadError(str(file_path), exc) from exc

    suffix = file_path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        team = parse_team_yaml(data, str(file_path))
    elif suffix == ".json":
        team = parse_team_json(data, str(file_path))
    elif suffix == ".toml":
        team = parse_team_toml(data, str(file_path))
    else:
        try:
            team = parse_team_yaml(data, str(file_path))
        except TeamParseError:
            team = parse_team_json(data, str(file_path))

    logger.info("Loaded team '%s' from %s (%d tasks)", team.name, file_path, len(team.tasks))
    return team


def read_team_dir(directory: str | Path) -> list[Team]:
    """Read every team file in a directory, sorted by file name.

    Subdirectories and files with other extensions are skipped. The first
    unreadable or invalid file aborts the scan.
    """
    base = Path(directory)
    if not base.is_dir():
        msg = "not a directory"
        raise TeamReadError(str(base), msg)
    paths = sorted(
        path
        for path in base.iterdir()
        if path.is_file() and path.suffix.lower() in TEAM_FILE_SUFFIXES
    )
    return [read_team_file(path) for path in paths]


def team_to_dict(team: Team) -> dict[str, Any]:
    """Return a serializable payload with empty optional fields omitted."""
    payload = {"name": team.name, **team.model_dump(mode="json", exclude_defaults=True)}
    payload["process"] = str(team.process)
    tasks = payload.setdefault("tasks", [])
    for task_payload, task in zip(tasks, team.tasks, strict=True):
        task_payload.setdefault("agent", task.agent)
        for subtask_payload, subtask in zip(
            task_payload.get("subtasks", []), task.subtasks, strict=True
        ):
            subtask_payload["required"] = subtask.required
    return payload


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True, mode=DEFAULT_DIR_MODE)
        # restrict permissions before any content lands in the file
        path.touch(mode=DEFAULT_FILE_MODE)
        path.chmod(DEFAULT_FILE_MODE)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise TeamWriteError(str(path), exc) from exc
    logger.info("Wrote team file %s", path)


def write_team_file(team: Team, path: str | Path) -> Path:
    """Write a team as YAML, creating parent directories as needed."""
    file_path = Path(path)
    text = yaml.safe_dump(team_to_dict(team), sort_keys=False, allow_unicode=True)
    _write_text(file_path, text)
    return file_path


def write_team_json(team: Team, path: str | Path) -> Path:
    """Write a team as indented JSON with a trailing newline."""
    file_path = Path(path)
    text = json.dumps(team_to_dict(team), indent=2, ensure_ascii=False) + "\n"
    _write_text(file_path, text)
    return file_path
