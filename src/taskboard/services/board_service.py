"""Board service: loads the backend collections and runs write commands.

Every write follows "command then full reload": the request is sent, and
only after it succeeds is the whole snapshot fetched again. Until that
reload completes the snapshot may be stale; nothing is updated
optimistically and a failed write is never rolled back locally.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from taskboard.data.api import CLIENTS, PROJECTS, TODOS, ApiError
from taskboard.models.analytics import DashboardStats, ProjectView
from taskboard.models.auth import User
from taskboard.models.board import BoardSnapshot
from taskboard.models.projects import Client, Project
from taskboard.models.todos import Todo
from taskboard.services._row_helpers import parse_records
from taskboard.services.rollup import build_dashboard_stats, build_project_views

if TYPE_CHECKING:
    from taskboard.data.protocols import BackendProtocol
    from taskboard.services.auth_service import AuthService

logger = logging.getLogger(__name__)

STALE_REFRESH = "stale refresh discarded"
LOAD_FAILED = "Failed to load todos/projects"
USERS_FAILED = "Failed to load users"


class BoardService:
    """Holds the latest snapshot and guards it against out-of-order refreshes.

    Each ``refresh`` takes a monotonically increasing request token. A
    response is applied only if no newer refresh has been applied already.
    """

    def __init__(self, api: BackendProtocol, auth: AuthService, page_size: int = 1000) -> None:
        self._api = api
        self._auth = auth
        self._page_size = page_size
        self._snapshot = BoardSnapshot()
        self._issued = 0
        self._applied = 0
        self._load_errors: list[str] = []

    @property
    def snapshot(self) -> BoardSnapshot:
        return self._snapshot

    @property
    def load_errors(self) -> list[str]:
        """Non-fatal problems from the last applied refresh (e.g. users unavailable)."""
        return list(self._load_errors)

    async def refresh(self) -> Result[BoardSnapshot, str]:
        """Fetch every collection and replace the snapshot."""
        self._issued += 1
        request_token = self._issued
        session = self._auth.session

        try:
            projects_raw, todos_raw, clients_raw = await asyncio.gather(
                self._api.list_collection(PROJECTS, self._page_size),
                self._api.list_collection(TODOS, self._page_size),
                self._api.list_collection(CLIENTS, self._page_size),
            )
        except ApiError as exc:
            logger.warning("Refresh #%d failed: %s", request_token, exc)
            return Err(LOAD_FAILED)

        errors: list[str] = []
        users_raw: list[dict[str, object]] = []
        if session.is_authenticated:
            try:
                users_raw = await self._api.get_users(session.token)
            except ApiError as exc:
                logger.warning("Refresh #%d could not load users: %s", request_token, exc)
                errors.append(USERS_FAILED)

        if request_token < self._applied:
            logger.debug(
                "Discarding refresh #%d; #%d already applied", request_token, self._applied
            )
            return Err(STALE_REFRESH)

        snapshot = BoardSnapshot(
            projects=parse_records(Project, projects_raw),
            todos=parse_records(Todo, todos_raw),
            clients=parse_records(Client, clients_raw),
            users=parse_records(User, users_raw),
            loaded_at=datetime.now(tz=UTC),
            request_token=request_token,
        )
        self._applied = request_token
        self._snapshot = snapshot
        self._load_errors = errors
        logger.info(
            "Loaded %d projects, %d todos, %d clients, %d users",
            len(snapshot.projects),
            len(snapshot.todos),
            len(snapshot.clients),
            len(snapshot.users),
        )
        return Ok(snapshot)

    def project_views(self) -> list[ProjectView]:
        return build_project_views(self._snapshot.projects, self._snapshot.todos)

    def dashboard_stats(self, now: datetime | None = None) -> DashboardStats:
        s = self._snapshot
        return build_dashboard_stats(s.projects, s.todos, s.users, now)

    async def run_command(
        self, label: str, write: Callable[[str], Awaitable[object]]
    ) -> Result[None, str]:
        """Send one write with the session token, then reload everything.

        ``label`` reads as a verb phrase ("save ToDo") and appears in the
        error message. A failed reload is logged but does not fail the command.
        """
        session = self._auth.session
        if not session.is_authenticated:
            return Err(f"Sign in to {label}.")
        try:
            await write(session.token)
        except ApiError as exc:
            logger.warning("Could not %s: %s", label, exc)
            return Err(f"Failed to {label}.")

        reloaded = await self.refresh()
        if isinstance(reloaded, Err):
            logger.warning("Reload after '%s' failed: %s", label, reloaded.err_value)
        return Ok(None)
