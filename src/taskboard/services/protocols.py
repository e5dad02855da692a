"""Protocol definitions for services."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from result import Result

from taskboard.models.analytics import DashboardStats, ProjectView
from taskboard.models.auth import AuthSession
from taskboard.models.board import BoardSnapshot
from taskboard.models.drafts import ProjectDraft, TodoDraft
from taskboard.models.filters import ProjectFilter
from taskboard.models.todos import Todo


class AuthServiceProtocol(Protocol):
    """Interface for login/logout."""

    @property
    def session(self) -> AuthSession: ...

    async def start(self) -> AuthSession: ...

    async def login(self, identifier: str, password: str) -> Result[AuthSession, str]: ...

    async def logout(self) -> None: ...


class BoardServiceProtocol(Protocol):
    """Interface for loading the board snapshot."""

    @property
    def snapshot(self) -> BoardSnapshot: ...

    async def refresh(self) -> Result[BoardSnapshot, str]: ...

    def project_views(self) -> list[ProjectView]: ...

    def dashboard_stats(self) -> DashboardStats: ...


class TodoServiceProtocol(Protocol):
    """Interface for todo commands."""

    async def create(self, draft: TodoDraft) -> Result[None, str]: ...

    async def update(self, document_id: str, draft: TodoDraft) -> Result[None, str]: ...

    async def delete(self, document_id: str) -> Result[None, str]: ...

    async def move(self, document_id: str, position: str) -> Result[None, str]: ...


class ProjectServiceProtocol(Protocol):
    """Interface for project queries and commands."""

    def list_projects(self, criteria: ProjectFilter | None = None) -> list[ProjectView]: ...

    def get_project(self, document_id: str) -> Result[ProjectView, str]: ...

    async def create(self, draft: ProjectDraft) -> Result[None, str]: ...

    async def update(self, document_id: str, draft: ProjectDraft) -> Result[None, str]: ...

    async def delete(self, document_id: str) -> Result[None, str]: ...


class ExportServiceProtocol(Protocol):
    """Interface for exports."""

    def export_todos_csv(self, todos: Sequence[Todo]) -> Result[str, str]: ...

    def export_projects_xlsx(self, views: Sequence[ProjectView]) -> Result[bytes, str]: ...
