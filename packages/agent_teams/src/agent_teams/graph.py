"""Dependency-graph engine for team task lists.

Validation, serial ordering (Kahn's algorithm) and wave partitioning are
plain functions over a :class:`~agent_teams.models.Team`. They never mutate
the team and perform no I/O.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict, deque
from typing import TYPE_CHECKING

from agent_teams.errors import CircularDependencyError, TeamValidationError
from agent_teams.models import Process, ValidationResult

if TYPE_CHECKING:
    from collections.abc import Iterator

    from agent_teams.models import Task, Team

logger = logging.getLogger(__name__)


def _structural_errors(team: Team) -> Iterator[TeamValidationError]:
    """Yield structural violations in check order."""
    if not team.name:
        yield TeamValidationError("name", "team name is required")

    if not Process.is_valid(team.process):
        yield TeamValidationError("process", "invalid process type")

    if team.process == Process.HIERARCHICAL and not team.manager:
        yield TeamValidationError("manager", "manager is required for hierarchical process")

    if not team.tasks:
        yield TeamValidationError("tasks", "at least one task is required")

    task_names = {task.name for task in team.tasks}
    for task in team.tasks:
        for dependency in task.depends_on:
            if dependency not in task_names:
                yield TeamValidationError(
                    f"tasks.{task.name}.depends_on",
                    f"unknown dependency: {dependency}",
                )

    counts = Counter(task.name for task in team.tasks)
    for name, count in counts.items():
        if count > 1:
            yield TeamValidationError(f"tasks.{name}", "duplicate task name")


def validate_team(team: Team) -> None:
    """Check a team definition and raise the first violation found.

    Checks run in order: name, process, manager for hierarchical teams,
    non-empty task list, dependency references, unique task names. Cycles
    are not detected here; :func:`topological_sort` is the cycle check.

    Raises:
        TeamValidationError: The first violated invariant.
    """
    error = next(_structural_errors(team), None)
    if error is not None:
        raise error


def _warnings(team: Team) -> list[str]:
    warnings: list[str] = []
    if team.manager and team.process != Process.HIERARCHICAL:
        warnings.append(f"manager: ignored for {team.process} process")
    if team.agents:
        known = set(team.agents)
        for task in team.tasks:
            if task.agent not in known:
                warnings.append(f"tasks.{task.name}.agent: '{task.agent}' not in team agents")
    for task in team.tasks:
        duplicates = [name for name, n in Counter(task.subtask_names()).items() if n > 1]
        for name in duplicates:
            warnings.append(f"tasks.{task.name}.subtasks: duplicate subtask name '{name}'")
    return warnings


def check_team(team: Team) -> ValidationResult:
    """Collect every violation in a team, including dependency cycles.

    Unlike :func:`validate_team` this does not stop at the first problem.
    The cycle check only runs once the structure is otherwise valid, since a
    dangling dependency would also leave tasks unresolved.
    """
    errors = [str(error) for error in _structural_errors(team)]
    if not errors:
        try:
            topological_sort(team)
        except CircularDependencyError as exc:
            errors.append(f"{exc} (unresolved: {', '.join(exc.unresolved)})")
    return ValidationResult(valid=not errors, errors=errors, warnings=_warnings(team))


def topological_sort(team: Team) -> list[Task]:
    """Return tasks in dependency order.

    Ready tasks are taken in the order they appear in ``team.tasks``, so the
    result is deterministic for a given team.

    Raises:
        CircularDependencyError: Some tasks can never become ready.
    """
    in_degree: dict[str, int] = {}
    dependents: dict[str, list[str]] = defaultdict(list)
    for task in team.tasks:
        in_degree.setdefault(task.name, 0)
        for dependency in task.depends_on:
            in_degree[task.name] += 1
            dependents[dependency].append(task.name)

    by_name = {task.name: task for task in team.tasks}
    queue = deque(task.name for task in team.tasks if in_degree[task.name] == 0)
    logger.debug("Team %s: %d root task(s)", team.name, len(queue))

    ordered: list[Task] = []
    while queue:
        name = queue.popleft()
        ordered.append(by_name[name])
        for dependent in dependents[name]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    if len(ordered) != len(team.tasks):
        done = {task.name for task in ordered}
        unresolved = [task.name for task in team.tasks if task.name not in done]
        logger.debug("Team %s: unresolved tasks %s", team.name, unresolved)
        raise CircularDependencyError(unresolved)

    return ordered


def parallel_groups(team: Team) -> list[list[Task]]:
    """Group tasks into waves that may run concurrently.

    A task's wave is one more than the deepest wave among its dependencies,
    so every dependency finishes in an earlier wave. Waves run in index
    order; tasks inside a wave keep their team order.

    Raises:
        CircularDependencyError: Propagated from :func:`topological_sort`.
    """
    levels: dict[str, int] = {}
    for task in topological_sort(team):
        levels[task.name] = 1 + max((levels[dep] for dep in task.depends_on), default=-1)

    waves: list[list[Task]] = [[] for _ in range(max(levels.values(), default=-1) + 1)]
    for task in team.tasks:
        waves[levels[task.name]].append(task)

    logger.debug("Team %s: wave sizes %s", team.name, [len(wave) for wave in waves])
    return waves
