"""Pydantic models for team definitions and results."""

from agent_teams.models.status import Status, SubtaskResult, TaskResult, TeamResult
from agent_teams.models.team import Process, Subtask, SubtaskKind, Task, Team
from agent_teams.models.validation import ValidationResult

__all__ = [
    "Process",
    "Status",
    "Subtask",
    "SubtaskKind",
    "SubtaskResult",
    "Task",
    "TaskResult",
    "Team",
    "TeamResult",
    "ValidationResult",
]
