"""Shared page layout with header and role-gated navigation."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from nicegui import ui

from taskboard.models.auth import AuthSession
from taskboard.ui.deps import get_services
from taskboard.ui.theme import COLORS, role_label

NAV_ITEMS = [
    ("Dashboard", "/", "dashboard", "all"),
    ("Projects", "/projects", "folder", "projects"),
    ("Todo's", "/todos", "checklist", "all"),
    ("Timeline", "/timeline", "timeline", "projects"),
    ("Kanban", "/kanban", "view_kanban", "kanban"),
]


def visible_nav_items(session: AuthSession) -> list[tuple[str, str, str]]:
    """Navigation entries the session's role may see."""
    items: list[tuple[str, str, str]] = []
    for label, path, icon, gate in NAV_ITEMS:
        if gate == "projects" and not session.can_view_projects:
            continue
        if gate == "kanban" and not session.can_view_kanban:
            continue
        items.append((label, path, icon))
    return items


@contextmanager
def page_layout(session: AuthSession) -> Generator[None]:
    """Shared page shell with header, nav links, user badge and logout."""
    ui.colors(
        primary=COLORS["primary"],
        secondary=COLORS["secondary"],
        accent=COLORS["accent"],
        positive=COLORS["success"],
        warning=COLORS["warning"],
        negative=COLORS["error"],
    )

    async def do_logout() -> None:
        await get_services().auth_service.logout()
        ui.navigate.to("/login")

    with (
        ui.header()
        .classes("items-center justify-between px-4 q-py-sm")
        .style(f"background-color: {COLORS['surface']}; color: {COLORS['text']}")
    ):
        with ui.row().classes("items-center gap-1"):
            for label, path, icon in visible_nav_items(session):
                ui.button(
                    label, icon=icon, on_click=lambda _e=None, p=path: ui.navigate.to(p)
                ).props("flat dense no-caps")

        with ui.row().classes("items-center gap-3"):
            name = session.user.display_name if session.user else "User"
            ui.label(f"👋 {name}").classes("text-sm")
            ui.badge(role_label(session.role)).props("outline")
            ui.button("Logout", on_click=do_logout).props("flat dense color=negative no-caps")

    with ui.column().classes("w-full max-w-7xl mx-auto p-4 gap-4"):
        yield


def error_banner(message: str) -> None:
    """Display an error banner."""
    with (
        ui.card()
        .classes("w-full")
        .style(f"background-color: {COLORS['error']}22; border: 1px solid {COLORS['error']}")
    ):
        with ui.row().classes("items-center gap-2 p-2"):
            ui.icon("error").style(f"color: {COLORS['error']}")
            ui.label(message).style(f"color: {COLORS['error']}")


def status_badge(key: str, color: str) -> None:
    """Small colored chip for a todo position or project status."""
    ui.badge(key).style(f"background-color: {color} !important; color: white")


async def confirm(message: str) -> bool:
    """Ask the user to confirm a destructive action."""
    with ui.dialog() as dialog, ui.card():
        ui.label(message)
        with ui.row().classes("justify-end w-full"):
            ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
            ui.button("Delete", on_click=lambda: dialog.submit(True)).props("color=negative")
    confirmed = bool(await dialog)
    dialog.delete()
    return confirmed
