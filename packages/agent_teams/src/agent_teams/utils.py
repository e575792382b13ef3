"""Shared helpers for agent_teams."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def dedupe(values: Iterable[str]) -> list[str]:
    """Return unique values in original order."""
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def to_title(value: str) -> str:
    """Convert a kebab-case identifier to Title Case."""
    words = value.split("-")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def center_text(value: str, width: int) -> str:
    """Center text within the given width, padding with spaces."""
    if len(value) >= width:
        return value
    padding = (width - len(value)) // 2
    return " " * padding + value + " " * (width - padding - len(value))
