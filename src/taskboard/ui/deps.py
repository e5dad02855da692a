"""Dependency access for UI pages."""

from __future__ import annotations

from nicegui import app, ui
from result import Err

from taskboard.models.auth import AuthSession
from taskboard.services.board_service import STALE_REFRESH
from taskboard.services.container import ServiceContainer

_CONTAINER_KEY = "taskboard_services"


def set_services(container: ServiceContainer) -> None:
    """Store the service container in NiceGUI app state."""
    setattr(app.state, _CONTAINER_KEY, container)


def get_services() -> ServiceContainer:
    """Retrieve the service container from NiceGUI app state."""
    container = getattr(app.state, _CONTAINER_KEY, None)
    if container is None:
        msg = "ServiceContainer not initialized"
        raise RuntimeError(msg)
    return container  # type: ignore[return-value]


def require_session(*, projects: bool = False, kanban: bool = False) -> AuthSession | None:
    """Return the session if it may open the page; otherwise redirect and return ``None``.

    Guests go to the login page; signed-in users without the role go to the dashboard.
    """
    session = get_services().auth_service.session
    if not session.is_authenticated:
        ui.navigate.to("/login")
        return None
    if (projects and not session.can_view_projects) or (kanban and not session.can_view_kanban):
        ui.navigate.to("/")
        return None
    return session


async def load_board() -> str | None:
    """Refresh the board snapshot; return an error message to show, if any.

    A stale refresh is not an error: a newer snapshot is already in place.
    """
    result = await get_services().board_service.refresh()
    if isinstance(result, Err) and result.err_value != STALE_REFRESH:
        return result.err_value
    return None
