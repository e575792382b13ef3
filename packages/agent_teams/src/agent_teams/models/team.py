"""Pydantic models for team definitions.

A team owns an ordered list of tasks and each task owns an ordered list of
subtasks. The builder helpers only append; graph integrity is checked
separately by :mod:`agent_teams.graph`.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from agent_teams.utils import dedupe


class Process(str, Enum):
    """How the tasks of a team are executed."""

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"
    HIERARCHICAL = "hierarchical"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Return True when value names a recognized process."""
        try:
            cls(value)
        except ValueError:
            return False
        return True


class SubtaskKind(str, Enum):
    """Kind of check a subtask performs, derived from its fields."""

    COMMAND = "command"
    PATTERN = "pattern"
    FILE = "file"
    UNCLASSIFIED = "unclassified"

    def __str__(self) -> str:
        return self.value


class Subtask(BaseModel):
    """A single check within a task.

    Attributes:
        name: Identifier, unique within the owning task (e.g. "build", "lint")
        description: What the check validates
        command: CLI command to run
        pattern: Regex searched for in ``files``; a match indicates failure
        files: Glob of files the pattern check operates over
        file: A file that must exist
        required: Failure blocks the task (NO-GO) instead of warning (WARN)
        expected_output: What a successful run looks like
        timeout: Command timeout in seconds, for the external executor
    """

    name: str
    description: str = ""
    command: str = ""
    pattern: str = ""
    files: str = ""
    file: str = ""
    required: bool = True
    expected_output: str = ""
    timeout: int = 0

    @property
    def kind(self) -> SubtaskKind:
        # command wins over pattern, pattern over file
        if self.command:
            return SubtaskKind.COMMAND
        if self.pattern:
            return SubtaskKind.PATTERN
        if self.file:
            return SubtaskKind.FILE
        return SubtaskKind.UNCLASSIFIED

    @property
    def is_command_based(self) -> bool:
        return self.kind is SubtaskKind.COMMAND

    @property
    def is_pattern_based(self) -> bool:
        return self.kind is SubtaskKind.PATTERN

    @property
    def is_file_based(self) -> bool:
        return self.kind is SubtaskKind.FILE

    def with_command(self, command: str) -> Subtask:
        """Set the command and return the subtask for chaining."""
        self.command = command
        return self

    def with_pattern(self, pattern: str) -> Subtask:
        """Set the pattern and return the subtask for chaining."""
        self.pattern = pattern
        return self

    def with_files(self, files: str) -> Subtask:
        """Set the files glob and return the subtask for chaining."""
        self.files = files
        return self

    def with_file(self, file: str) -> Subtask:
        """Set the required file and return the subtask for chaining."""
        self.file = file
        return self

    def optional(self) -> Subtask:
        """Mark the subtask optional so failure reports WARN."""
        self.required = False
        return self


class Task(BaseModel):
    """A unit of work assigned to one agent within a team."""

    name: str
    agent: str = ""
    description: str = ""
    depends_on: list[str] = Field(default_factory=list)
    subtasks: list[Subtask] = Field(default_factory=list)
    inputs: list[str] = Field(default_factory=list)
    outputs: list[str] = Field(default_factory=list)

    @field_validator("depends_on")
    @classmethod
    def _unique_dependencies(cls, value: list[str]) -> list[str]:
        return dedupe(value)

    def with_description(self, description: str) -> Task:
        """Set the description and return the task for chaining."""
        self.description = description
        return self

    def add_dependency(self, task_name: str) -> Task:
        """Depend on another task by name. Adding a name twice is a no-op."""
        if task_name not in self.depends_on:
            self.depends_on.append(task_name)
        return self

    def add_subtask(self, subtask: Subtask) -> Task:
        """Append a subtask."""
        self.subtasks.append(subtask)
        return self

    def add_subtasks(self, *subtasks: Subtask) -> Task:
        """Append several subtasks in order."""
        self.subtasks.extend(subtasks)
        return self

    def get_subtask(self, name: str) -> Subtask | None:
        """Return the subtask with the given name, or None."""
        return next((subtask for subtask in self.subtasks if subtask.name == name), None)

    @property
    def has_dependencies(self) -> bool:
        return bool(self.depends_on)

    @property
    def has_subtasks(self) -> bool:
        return bool(self.subtasks)

    def required_subtask_count(self) -> int:
        """Return the number of required subtasks."""
        return sum(1 for subtask in self.subtasks if subtask.required)

    def subtask_names(self) -> list[str]:
        """Return subtask names in order."""
        return [subtask.name for subtask in self.subtasks]


class Team(BaseModel):
    """A multi-agent workflow definition.

    ``process`` keeps unrecognized values as plain strings so that a loaded
    definition can be reported by validation instead of failing to parse.
    """

    name: str = ""
    description: str = ""
    process: Process | str = Field(default="", union_mode="left_to_right")
    manager: str = ""
    agents: list[str] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    version: str = ""

    def with_description(self, description: str) -> Team:
        """Set the description and return the team for chaining."""
        self.description = description
        return self

    def with_manager(self, manager: str) -> Team:
        """Set the manager agent used by hierarchical teams."""
        self.manager = manager
        return self

    def with_version(self, version: str) -> Team:
        """Set the target version and return the team for chaining."""
        self.version = version
        return self

    def add_agent(self, agent: str) -> Team:
        """Append an agent name."""
        self.agents.append(agent)
        return self

    def add_agents(self, *agents: str) -> Team:
        """Append several agent names in order."""
        self.agents.extend(agents)
        return self

    def add_task(self, task: Task) -> Team:
        """Append a task. Dependencies are not checked here."""
        self.tasks.append(task)
        return self

    def get_task(self, name: str) -> Task | None:
        """Return the task with the given name, or None when absent."""
        return next((task for task in self.tasks if task.name == name), None)

    def task_names(self) -> list[str]:
        """Return task names in team order."""
        return [task.name for task in self.tasks]

    def agent_tasks(self, agent: str) -> list[Task]:
        """Return the tasks assigned to an agent, in team order."""
        return [task for task in self.tasks if task.agent == agent]

    def total_subtask_count(self) -> int:
        """Return the number of subtasks across all tasks."""
        return sum(len(task.subtasks) for task in self.tasks)

    def required_subtask_count(self) -> int:
        """Return the number of required subtasks across all tasks."""
        return sum(task.required_subtask_count() for task in self.tasks)
