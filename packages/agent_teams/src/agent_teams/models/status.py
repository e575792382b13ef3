"""Pydantic models for check outcomes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

_EMOJI = {
    "GO": "🟢",
    "NO-GO": "🔴",
    "WARN": "🟡",
    "SKIP": "⚪",
    "PENDING": "⏳",
    "RUNNING": "🔄",
}


class Status(str, Enum):
    """Outcome of a subtask, task, or team."""

    GO = "GO"
    NO_GO = "NO-GO"
    WARN = "WARN"
    SKIP = "SKIP"
    PENDING = "PENDING"
    RUNNING = "RUNNING"

    def __str__(self) -> str:
        return self.value

    @property
    def emoji(self) -> str:
        return _EMOJI.get(self.value, "❓")

    @property
    def is_blocking(self) -> bool:
        """True when this status should stop the workflow."""
        return self is Status.NO_GO

    @property
    def is_passing(self) -> bool:
        """True for GO, WARN, and SKIP."""
        return self in (Status.GO, Status.WARN, Status.SKIP)

    @property
    def is_terminal(self) -> bool:
        """False for the PENDING and RUNNING lifecycle markers."""
        return self not in (Status.PENDING, Status.RUNNING)


class SubtaskResult(BaseModel):
    """Outcome of a single subtask."""

    name: str
    status: Status
    message: str = ""
    output: str = ""


class TaskResult(BaseModel):
    """Outcome of a task, folded from its subtask results."""

    name: str
    agent: str
    status: Status
    subtasks: list[SubtaskResult] = Field(default_factory=list)


class TeamResult(BaseModel):
    """Outcome of a team, folded from its task results."""

    name: str
    status: Status
    tasks: list[TaskResult] = Field(default_factory=list)
    version: str = ""
