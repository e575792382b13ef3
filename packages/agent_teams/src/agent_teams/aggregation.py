"""Fold child statuses into parent statuses.

One rule serves both levels (subtasks into a task, tasks into a team):

1. any NO-GO gives NO-GO
2. else all SKIP gives SKIP
3. else any WARN gives WARN
4. else GO

``required`` is not consulted here. :func:`classify_subtask_outcome` decides
whether a failed subtask reports NO-GO or WARN before folding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agent_teams.models import Status, SubtaskResult, TaskResult, TeamResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from agent_teams.models import Subtask, Task, Team


def aggregate(statuses: Iterable[Status]) -> Status:
    """Combine child statuses into one parent status.

    An empty input counts as all skipped.

    Raises:
        ValueError: A PENDING or RUNNING status was passed in.
    """
    has_no_go = False
    has_warn = False
    all_skip = True
    for status in statuses:
        if not status.is_terminal:
            msg = f"Cannot aggregate non-terminal status: {status}"
            raise ValueError(msg)
        if status is not Status.SKIP:
            all_skip = False
        if status is Status.NO_GO:
            has_no_go = True
        elif status is Status.WARN:
            has_warn = True

    if has_no_go:
        return Status.NO_GO
    if all_skip:
        return Status.SKIP
    if has_warn:
        return Status.WARN
    return Status.GO


def classify_subtask_outcome(subtask: Subtask, passed: bool | None) -> Status:
    """Map a raw check outcome to a status.

    Args:
        subtask: The subtask that was checked.
        passed: True on success, False on failure, None when not evaluated.
    """
    if passed is None:
        return Status.SKIP
    if passed:
        return Status.GO
    return Status.NO_GO if subtask.required else Status.WARN


def compute_task_status(subtasks: Iterable[SubtaskResult]) -> Status:
    """Fold subtask results into a task status."""
    return aggregate(result.status for result in subtasks)


def compute_team_status(tasks: Iterable[TaskResult]) -> Status:
    """Fold task results into a team status."""
    return aggregate(result.status for result in tasks)


def build_task_result(task: Task, subtask_results: list[SubtaskResult]) -> TaskResult:
    """Assemble a TaskResult with its status folded from ``subtask_results``."""
    return TaskResult(
        name=task.name,
        agent=task.agent,
        status=compute_task_status(subtask_results),
        subtasks=list(subtask_results),
    )


def build_team_result(team: Team, task_results: list[TaskResult]) -> TeamResult:
    """Assemble a TeamResult with its status folded from ``task_results``."""
    return TeamResult(
        name=team.name,
        status=compute_team_status(task_results),
        tasks=list(task_results),
        version=team.version,
    )


def evaluate_team(
    team: Team,
    outcomes: Mapping[str, Mapping[str, bool | None]],
) -> TeamResult:
    """Build the full result tree from raw per-subtask outcomes.

    ``outcomes`` maps task name to subtask name to passed/failed/None.
    Subtasks without an entry are reported as skipped.
    """
    task_results: list[TaskResult] = []
    for task in team.tasks:
        task_outcomes = outcomes.get(task.name, {})
        subtask_results = [
            SubtaskResult(
                name=subtask.name,
                status=classify_subtask_outcome(subtask, task_outcomes.get(subtask.name)),
            )
            for subtask in task.subtasks
        ]
        task_results.append(build_task_result(task, subtask_results))
    return build_team_result(team, task_results)
