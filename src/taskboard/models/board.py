"""In-memory copy of the backend collections."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from taskboard.models.auth import User
from taskboard.models.projects import Client, Project
from taskboard.models.todos import Todo


class BoardSnapshot(BaseModel):
    """One consistent load of every collection; replaced wholesale on refresh."""

    projects: list[Project] = Field(default_factory=list)
    todos: list[Todo] = Field(default_factory=list)
    clients: list[Client] = Field(default_factory=list)
    users: list[User] = Field(default_factory=list)
    loaded_at: datetime | None = None
    request_token: int = 0
