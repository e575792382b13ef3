from agent_teams.aggregation import (
    aggregate,
    build_task_result,
    build_team_result,
    classify_subtask_outcome,
    compute_task_status,
    compute_team_status,
    evaluate_team,
)
from agent_teams.errors import (
    CircularDependencyError,
    TeamFileError,
    TeamParseError,
    TeamReadError,
    TeamValidationError,
    TeamWriteError,
)
from agent_teams.graph import check_team, parallel_groups, topological_sort, validate_team
from agent_teams.loader import (
    parse_team_json,
    parse_team_toml,
    parse_team_yaml,
    read_team_dir,
    read_team_file,
    write_team_file,
    write_team_json,
)
from agent_teams.models import (
    Process,
    Status,
    Subtask,
    SubtaskKind,
    SubtaskResult,
    Task,
    TaskResult,
    Team,
    TeamResult,
    ValidationResult,
)
from agent_teams.orchestration import (
    OrchestrationConfig,
    expected_team_result,
    generate_orchestration_markdown,
    render_status_report,
)
from agent_teams.settings import Settings, load_settings

__all__ = [
    "CircularDependencyError",
    "OrchestrationConfig",
    "Process",
    "Settings",
    "Status",
    "Subtask",
    "SubtaskKind",
    "SubtaskResult",
    "Task",
    "TaskResult",
    "Team",
    "TeamFileError",
    "TeamParseError",
    "TeamReadError",
    "TeamResult",
    "TeamValidationError",
    "TeamWriteError",
    "ValidationResult",
    "aggregate",
    "build_task_result",
    "build_team_result",
    "check_team",
    "classify_subtask_outcome",
    "compute_task_status",
    "compute_team_status",
    "evaluate_team",
    "expected_team_result",
    "generate_orchestration_markdown",
    "load_settings",
    "parallel_groups",
    "parse_team_json",
    "parse_team_toml",
    "parse_team_yaml",
    "read_team_dir",
    "read_team_file",
    "render_status_report",
    "topological_sort",
    "validate_team",
    "write_team_file",
    "write_team_json",
]
