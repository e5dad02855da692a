"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from taskboard.data.api import ApiClient
from taskboard.data.db import Database
from taskboard.data.repositories import AuthSessionRepository
from taskboard.services.auth_service import AuthService
from taskboard.services.board_service import BoardService
from taskboard.services.export_service import ExportService
from taskboard.services.project_service import ProjectService
from taskboard.services.todo_service import TodoService

if TYPE_CHECKING:
    from taskboard.config import Config


@dataclass
class ServiceContainer:
    """Holds all application services. Built once at startup, immutable."""

    db: Database
    api: ApiClient
    auth_service: AuthService
    board_service: BoardService
    todo_service: TodoService
    project_service: ProjectService
    export_service: ExportService

    @classmethod
    async def create(cls, config: Config) -> ServiceContainer:
        """Async factory that wires all dependencies and restores the stored session."""
        db = Database(config.db_path)
        await db.connect()

        api = ApiClient(config.base_url, timeout=config.request_timeout)
        auth_service = AuthService(api, AuthSessionRepository(db))
        await auth_service.start()

        board_service = BoardService(api, auth_service, page_size=config.page_size)
        todo_service = TodoService(api, board_service)
        project_service = ProjectService(api, auth_service, board_service)

        return cls(
            db=db,
            api=api,
            auth_service=auth_service,
            board_service=board_service,
            todo_service=todo_service,
            project_service=project_service,
            export_service=ExportService(),
        )

    async def close(self) -> None:
        """Shut down all services."""
        await self.api.close()
        await self.db.close()
