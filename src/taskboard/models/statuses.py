"""Todo positions and derived project statuses, with display metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TodoPosition(StrEnum):
    """Raw status column of a todo as stored by the backend."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class ProjectStatus(StrEnum):
    """Status derived client-side from a project's todos."""

    TODO = "Todo"
    IN_PROGRESS = "In-Progress"
    DONE = "Done"
    NO_TODOS = "No-Todos"


@dataclass(frozen=True)
class StatusStyle:
    """Display metadata for one status badge/column."""

    key: str
    label: str
    color: str


TODO_POSITION_STYLES: tuple[StatusStyle, ...] = (
    StatusStyle(TodoPosition.TODO, "To Do", "#ef4444"),
    StatusStyle(TodoPosition.IN_PROGRESS, "In Progress", "#3b82f6"),
    StatusStyle(TodoPosition.DONE, "Done", "#22c55e"),
)

PROJECT_STATUS_STYLES: tuple[StatusStyle, ...] = (
    StatusStyle(ProjectStatus.TODO, "Todo", "#ef4444"),
    StatusStyle(ProjectStatus.IN_PROGRESS, "In Progress", "#3b82f6"),
    StatusStyle(ProjectStatus.DONE, "Done", "#22c55e"),
    StatusStyle(ProjectStatus.NO_TODOS, "No ToDos", "#9ca3af"),
)

FALLBACK_COLOR = "#d1d5db"

_COLOR_BY_KEY: dict[str, str] = {
    style.key.lower(): style.color for style in (*TODO_POSITION_STYLES, *PROJECT_STATUS_STYLES)
}


def status_color(key: str) -> str:
    """Return the badge color for a todo position or project status (case-insensitive)."""
    return _COLOR_BY_KEY.get(key.lower(), FALLBACK_COLOR)


def parse_position(value: object) -> TodoPosition | None:
    """Map a raw backend value onto a known position, or ``None``."""
    if isinstance(value, TodoPosition):
        return value
    if not isinstance(value, str):
        return None
    try:
        return TodoPosition(value.strip().lower())
    except ValueError:
        return None
