"""Project service: project views and manager-only write commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from result import Err, Ok, Result

from taskboard.data.api import PROJECTS
from taskboard.models.filters import ProjectFilter
from taskboard.services.filters import filter_projects

if TYPE_CHECKING:
    from taskboard.data.protocols import BackendProtocol
    from taskboard.models.analytics import ProjectView
    from taskboard.models.drafts import ProjectDraft
    from taskboard.services.auth_service import AuthService
    from taskboard.services.board_service import BoardService

NOT_PERMITTED = "Only a backoffice manager can change projects"


class ProjectService:
    """Service for project queries and commands."""

    def __init__(self, api: BackendProtocol, auth: AuthService, board: BoardService) -> None:
        self._api = api
        self._auth = auth
        self._board = board

    def list_projects(self, criteria: ProjectFilter | None = None) -> list[ProjectView]:
        """Projects from the current snapshot with derived status, optionally filtered."""
        views = self._board.project_views()
        if criteria is None:
            return views
        return filter_projects(views, criteria)

    def get_project(self, document_id: str) -> Result[ProjectView, str]:
        for view in self._board.project_views():
            if view.project.document_id == document_id:
                return Ok(view)
        return Err(f"Project {document_id} not found")

    async def create(self, draft: ProjectDraft) -> Result[None, str]:
        if not self._auth.session.can_edit_projects:
            return Err(NOT_PERMITTED)
        payload = draft.to_payload()
        return await self._board.run_command(
            "save project", lambda token: self._api.create(PROJECTS, payload, token)
        )

    async def update(self, document_id: str, draft: ProjectDraft) -> Result[None, str]:
        if not self._auth.session.can_edit_projects:
            return Err(NOT_PERMITTED)
        payload = draft.to_payload()
        return await self._board.run_command(
            "save project",
            lambda token: self._api.update(PROJECTS, document_id, payload, token),
        )

    async def delete(self, document_id: str) -> Result[None, str]:
        """Delete a project. Callers must have confirmed with the user first."""
        if not self._auth.session.can_edit_projects:
            return Err(NOT_PERMITTED)
        return await self._board.run_command(
            "delete project", lambda token: self._api.delete(PROJECTS, document_id, token)
        )
