"""Filter criteria for the todo and project lists.

A dimension is inactive when its value is ``None``, an empty string or the
literal ``"All"`` used by the select widgets.
"""

from __future__ import annotations

from pydantic import BaseModel

from taskboard.models.fields import OptionalDate

ALL = "All"


def is_active(value: object) -> bool:
    """Return True if a filter value constrains the result."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() not in ("", ALL)
    return True


class TodoFilter(BaseModel):
    """Compound todo predicate; every active dimension is ANDed."""

    position: str | None = None
    project: str | None = None
    assignee: str | None = None
    search: str = ""
    date_from: OptionalDate = None
    date_to: OptionalDate = None

    @property
    def active_dimensions(self) -> list[str]:
        return [
            name
            for name in ("position", "project", "assignee", "search", "date_from", "date_to")
            if is_active(getattr(self, name))
        ]


class ProjectFilter(BaseModel):
    """Project predicate on derived status and client membership."""

    status: str | None = None
    client: str | None = None
