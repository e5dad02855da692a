"""Edit-form input for create/update commands."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from taskboard.models.analytics import ProjectView
from taskboard.models.fields import RequiredDate
from taskboard.models.statuses import TodoPosition
from taskboard.models.todos import Todo


class TodoDraft(BaseModel):
    """Fields of the todo form. ``project``/``assignee`` are numeric ids."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    description_history: str = ""
    due_date: RequiredDate
    position: TodoPosition = TodoPosition.TODO
    project: int | None = None
    assignee: int | None = None

    @classmethod
    def from_todo(cls, todo: Todo) -> TodoDraft:
        """Unvalidated prefill for the edit form."""
        return cls.model_construct(
            title=todo.title,
            description=todo.description,
            description_history=todo.description_history,
            due_date=todo.due_date,
            position=todo.position or TodoPosition.TODO,
            project=todo.project.id if todo.project else None,
            assignee=todo.assignee.id if todo.assignee else None,
        )

    def to_payload(self, published_at: datetime | None = None) -> dict[str, Any]:
        moment = published_at or datetime.now(tz=UTC)
        return {
            "title": self.title,
            "description": self.description,
            "descriptionHistory": self.description_history,
            "dueDate": self.due_date.isoformat(),
            "position": str(self.position),
            "project": self.project,
            "assignee": self.assignee,
            "publishedAt": moment.isoformat().replace("+00:00", "Z"),
        }


class ProjectDraft(BaseModel):
    """Fields of the project form. ``clients`` holds client document ids."""

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    clients: list[str] = Field(default_factory=list)
    start_date: RequiredDate
    end_date: RequiredDate

    @classmethod
    def from_view(cls, view: ProjectView) -> ProjectDraft:
        """Unvalidated prefill for the edit form."""
        project = view.project
        return cls.model_construct(
            name=project.name,
            description=project.description,
            clients=[c.document_id for c in project.clients],
            start_date=project.start_date,
            end_date=project.end_date,
        )

    @classmethod
    def clone_of(cls, view: ProjectView) -> ProjectDraft:
        """Prefilled form for a new project copied from ``view``."""
        draft = cls.from_view(view)
        return draft.model_copy(update={"name": f"{draft.name} (Copy)"})

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "clients": list(self.clients),
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
        }
