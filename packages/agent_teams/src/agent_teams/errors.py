"""Error types raised by team validation, planning, and file loading."""

from __future__ import annotations


class TeamValidationError(ValueError):
    """A team definition violates a structural invariant."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class CircularDependencyError(TeamValidationError):
    """Task dependencies contain at least one cycle.

    Attributes:
        unresolved: Names of tasks that never became ready, in team order.
    """

    def __init__(self, unresolved: list[str] | None = None) -> None:
        self.unresolved = list(unresolved or [])
        super().__init__("tasks", "circular dependency detected")


class TeamFileError(Exception):
    """Base class for team file I/O failures."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


class TeamReadError(TeamFileError):
    """A team file or directory could not be read."""

    def __init__(self, path: str, reason: object) -> None:
        super().__init__(path, f"failed to read {path}: {reason}")


class TeamWriteError(TeamFileError):
    """A team file could not be written."""

    def __init__(self, path: str, reason: object) -> None:
        super().__init__(path, f"failed to write {path}: {reason}")


class TeamParseError(TeamFileError):
    """A team file could not be decoded into a Team."""

    def __init__(self, fmt: str, path: str, reason: object) -> None:
        self.format = fmt
        if path:
            message = f"failed to parse {fmt} file {path}: {reason}"
        else:
            message = f"failed to parse {fmt}: {reason}"
        super().__init__(path, message)
