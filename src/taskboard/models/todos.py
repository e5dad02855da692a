"""Todo models."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from taskboard.models.fields import BACKEND_MODEL_CONFIG, OptionalInstant, Text
from taskboard.models.projects import ProjectRef
from taskboard.models.statuses import TodoPosition


class UserRef(BaseModel):
    """A user as embedded in a todo payload (the assignee)."""

    model_config = BACKEND_MODEL_CONFIG

    id: int
    username: Text = ""


class Todo(BaseModel):
    """A task record as returned by ``GET /todos?populate=*``."""

    model_config = BACKEND_MODEL_CONFIG

    id: int
    document_id: str = Field(default="", alias="documentId")
    title: Text = ""
    description: Text = ""
    description_history: Text = Field(default="", alias="descriptionHistory")
    due_at: OptionalInstant = Field(default=None, alias="dueDate")
    position: Text = TodoPosition.TODO
    project: ProjectRef | None = None
    assignee: UserRef | None = None

    @property
    def due_date(self) -> date | None:
        """Calendar day of the due instant, as written by the backend."""
        return self.due_at.date() if self.due_at else None

    @property
    def is_done(self) -> bool:
        return self.position == TodoPosition.DONE

    @property
    def project_name(self) -> str:
        return self.project.name if self.project else ""

    @property
    def assignee_name(self) -> str:
        return self.assignee.username if self.assignee else ""

    def belongs_to(self, project_id: int) -> bool:
        return self.project is not None and self.project.id == project_id
