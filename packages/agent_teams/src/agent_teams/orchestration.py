"""Render orchestration instructions and status reports for a team.

The markdown output walks the team wave by wave so that an orchestrating
assistant can spawn every task of a wave concurrently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from agent_teams.aggregation import build_task_result, build_team_result
from agent_teams.errors import CircularDependencyError
from agent_teams.graph import parallel_groups
from agent_teams.models import Status, SubtaskResult, Team
from agent_teams.utils import center_text, to_title

if TYPE_CHECKING:
    from agent_teams.models import Task, TeamResult

logger = logging.getLogger(__name__)

EXPECTED_OUTPUT_LIMIT = 30
MIN_REPORT_WIDTH = 60


@dataclass(frozen=True)
class OrchestrationConfig:
    """Options for :func:`generate_orchestration_markdown`.

    Attributes:
        version: Target release version, e.g. "v1.2.0"
        agent_specs_path: Directory holding ``<agent>.md`` instructions
        include_tasks: Restrict output to these task names (empty means all)
    """

    version: str = ""
    agent_specs_path: str = ""
    include_tasks: list[str] = field(default_factory=list)


def _select_tasks(team: Team, include: list[str]) -> list[Task]:
    if not include:
        return list(team.tasks)
    wanted = set(include)
    selected = [task for task in team.tasks if task.name in wanted]
    # dependencies on tasks outside the selection are treated as satisfied
    return [
        task.model_copy(update={"depends_on": [d for d in task.depends_on if d in wanted]})
        for task in selected
    ]


def _truncate(text: str, limit: int = EXPECTED_OUTPUT_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _task_instructions(task: Task, original: Task, config: OrchestrationConfig) -> list[str]:
    lines = [f"### Task: {task.name}", ""]
    if task.description:
        lines += [task.description, ""]
    if original.depends_on:
        lines += [f"**Requires:** {', '.join(original.depends_on)} (must be GO)", ""]

    agent_path = f"{task.agent}.md"
    if config.agent_specs_path:
        agent_path = f"{config.agent_specs_path.rstrip('/')}/{task.agent}.md"

    lines += [
        "**Instructions:**",
        "",
        f"Use the Task tool to spawn subagent `{task.agent}`:",
        "",
        "```",
        "Task tool:",
        "  subagent_type: general-purpose",
        f'  description: "{task.description}"',
        "  prompt: |",
        f"    You are the {task.agent} specialist. Read your instructions from {agent_path}",
        "    ",
        "    Execute the following subtasks and report Go/No-Go for each:",
    ]
    lines += [f"    - {name}" for name in task.subtask_names()]
    if config.version:
        lines += ["    ", f"    Target version: {config.version}"]
    lines += ["```", ""]

    if task.subtasks:
        lines += [
            "**Subtasks:**",
            "",
            "| Subtask | Type | Required | Expected |",
            "|---------|------|----------|----------|",
        ]
        for subtask in task.subtasks:
            required = "Yes" if subtask.required else "No"
            expected = _truncate(subtask.expected_output or "Pass")
            lines.append(f"| {subtask.name} | {subtask.kind} | {required} | {expected} |")
        lines.append("")

    lines += [
        f"**Sign-off:** GO if all {task.required_subtask_count()} required subtasks pass. "
        "Optional subtasks report WARN on failure.",
        "",
    ]
    return lines


def generate_orchestration_markdown(
    team: Team, config: OrchestrationConfig | None = None
) -> str:
    """Generate wave-by-wave orchestration instructions in Markdown."""
    config = config or OrchestrationConfig()
    lines = [f"# {to_title(team.name)} Orchestration", ""]
    if team.description:
        lines += [team.description, ""]
    if config.version:
        lines += [f"**Target Version:** `{config.version}`", ""]
    lines.append(f"**Process:** {team.process}")
    if team.manager:
        lines.append(f"**Manager:** {team.manager}")
    lines += ["", "---", ""]

    tasks = _select_tasks(team, config.include_tasks)
    try:
        groups = parallel_groups(Team(name=team.name, process=team.process, tasks=tasks))
    except CircularDependencyError as exc:
        logger.warning("Team %s: %s; falling back to a single group", team.name, exc)
        groups = [tasks]

    originals = {task.name: task for task in team.tasks}
    for index, group in enumerate(groups, start=1):
        if not group:
            continue
        if len(group) > 1:
            lines += [
                f"## Parallel Group {index}",
                "",
                "These tasks can run concurrently using parallel Task tool calls.",
                "",
            ]
        else:
            lines += [f"## Group {index}", ""]
        for task in group:
            lines += _task_instructions(task, originals.get(task.name, task), config)

    expected = expected_team_result(
        Team(name=team.name, tasks=tasks), version=config.version or team.version
    )
    lines += [
        "---",
        "",
        "## Expected Status Report",
        "",
        "After execution, report status in this format:",
        "",
        "```",
        render_status_report(expected).rstrip("\n"),
        "```",
    ]
    return "\n".join(lines) + "\n"


def expected_team_result(team: Team, version: str = "") -> TeamResult:
    """Build an all-GO result shaped like the team, for report templates."""
    task_results = [
        build_task_result(
            task,
            [
                SubtaskResult(
                    name=subtask.name,
                    status=Status.GO,
                    message="" if subtask.required else "optional",
                )
                for subtask in task.subtasks
            ],
        )
        for task in team.tasks
    ]
    result = build_team_result(team, task_results)
    # a team without subtasks folds to SKIP; the template always shows GO
    return result.model_copy(
        update={
            "status": Status.GO,
            "version": version or team.version,
            "tasks": [task.model_copy(update={"status": Status.GO}) for task in result.tasks],
        }
    )


def _status_label(status: Status, message: str = "") -> str:
    label = f"{status.emoji} {status}"
    return f"{label} ({message})" if message else label


def render_status_report(result: TeamResult) -> str:
    """Render a boxed, human-readable status report."""
    task_width = max([20, *(len(task.name) for task in result.tasks)])
    subtask_width = max(
        [18, *(len(sub.name) for task in result.tasks for sub in task.subtasks)]
    )
    width = max(MIN_REPORT_WIDTH, task_width + subtask_width + 20)
    border = "═" * width

    title = "TEAM STATUS REPORT"
    if result.version:
        title = f"{title} ({result.version})"

    lines = [f"╔{border}╗", f"║{center_text(title, width)}║", f"╠{border}╣"]
    for task in result.tasks:
        task_line = f" {task.name} ({task.agent}): {_status_label(task.status)}"
        lines.append(f"║{task_line:<{width}}║")
        for subtask in task.subtasks:
            label = _status_label(subtask.status, subtask.message)
            row = f"   {subtask.name:<{subtask_width}} {label}"
            lines.append(f"║{row:<{width}}║")
        lines.append(f"╠{border}╣")

    if result.status is Status.GO:
        footer = "🚀 TEAM: GO 🚀"
    else:
        footer = f"{result.status.emoji} TEAM: {result.status} {result.status.emoji}"
    lines += [f"║{center_text(footer, width)}║", f"╚{border}╝"]
    return "\n".join(lines) + "\n"
