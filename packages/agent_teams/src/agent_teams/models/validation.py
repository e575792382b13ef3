"""Pydantic model for collected validation findings."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ValidationResult(BaseModel, frozen=True):
    """Every violation found in a team, rendered as ``"<field>: <message>"``."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
