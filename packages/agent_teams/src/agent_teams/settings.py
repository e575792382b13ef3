"""Pydantic model for runtime settings."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel, frozen=True):
    """Runtime configuration loaded from environment variables."""

    teams_dir: str = "./teams"
    agent_specs_path: str = ""
    log_level: str = "INFO"
    collect_all_errors: bool = False


def load_settings() -> Settings:
    """Load settings from environment variables with defaults."""
    load_dotenv()

    log_level = os.getenv("AGENT_TEAMS_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        msg = f"AGENT_TEAMS_LOG_LEVEL must be a logging level name, got '{log_level}'."
        raise ValueError(msg)

    return Settings(
        teams_dir=os.getenv("AGENT_TEAMS_DIR", "./teams"),
        agent_specs_path=os.getenv("AGENT_TEAMS_SPECS_PATH", ""),
        log_level=log_level,
        collect_all_errors=os.getenv("AGENT_TEAMS_COLLECT_ALL_ERRORS", "false").lower()
        in _TRUE_VALUES,
    )
