"""Dashboard page: stat cards, charts, overdue todos and the CSV download."""

from __future__ import annotations

from datetime import date

from nicegui import ui
from result import Err

from taskboard.models.statuses import status_color
from taskboard.services.export_service import TODOS_CSV_FILENAME
from taskboard.ui.components.charts import render_leaderboard, render_todo_breakdown
from taskboard.ui.components.stat_card import stat_card
from taskboard.ui.deps import get_services, load_board, require_session
from taskboard.ui.layout import page_layout, status_badge
from taskboard.ui.theme import COLORS, format_due


def setup() -> None:
    """Register the dashboard page."""

    @ui.page("/")
    async def dashboard_page() -> None:
        session = require_session()
        if session is None:
            return
        svc = get_services()

        with page_layout(session):
            ui.label("Dashboard").classes("text-2xl font-bold mb-2")

            # read failures are logged by the board service; render what is loaded
            await load_board()

            stats = svc.board_service.dashboard_stats()
            todos = svc.board_service.snapshot.todos

            def download_csv() -> None:
                result = svc.export_service.export_todos_csv(todos)
                if isinstance(result, Err):
                    ui.notify(result.err_value, type="negative")
                    return
                ui.download(result.ok_value.encode("utf-8"), TODOS_CSV_FILENAME)

            with ui.row().classes("w-full justify-end"):
                ui.button("Download Todos CSV", icon="download", on_click=download_csv)

            ui.label("Projects").classes("font-bold")
            with ui.row().classes("w-full gap-4 flex-wrap"):
                stat_card("To Do", stats.projects.todo, "pending", status_color("Todo"))
                stat_card(
                    "In Progress",
                    stats.projects.in_progress,
                    "autorenew",
                    status_color("In-Progress"),
                )
                stat_card("Done", stats.projects.done, "task_alt", status_color("Done"))
                stat_card(
                    "No Todos",
                    stats.projects_without_todos,
                    "block",
                    status_color("No-Todos"),
                )

            ui.label("Todos").classes("font-bold")
            with ui.row().classes("w-full gap-4 flex-wrap"):
                stat_card("To Do", stats.todos.todo, "radio_button_unchecked", COLORS["error"])
                stat_card("In Progress", stats.todos.in_progress, "autorenew", COLORS["primary"])
                stat_card("Done", stats.todos.done, "check_circle", COLORS["success"])
                stat_card("Users", stats.user_count, "group", COLORS["secondary"])
                stat_card("Overdue", stats.overdue_count, "warning", COLORS["warning"])

            with ui.row().classes("w-full gap-4"):
                with (
                    ui.card().classes("flex-1 p-4").style(f"background-color: {COLORS['surface']}")
                ):
                    render_todo_breakdown(stats.todos)
                with (
                    ui.card().classes("flex-1 p-4").style(f"background-color: {COLORS['surface']}")
                ):
                    render_leaderboard(stats.leaderboard)

            with ui.card().classes("w-full p-4").style(f"background-color: {COLORS['surface']}"):
                ui.label("Overdue Todos").classes("font-bold mb-2")
                if not stats.overdue:
                    ui.label("Nothing overdue").classes("opacity-60")
                today = date.today()
                for todo in stats.overdue:
                    with ui.row().classes("w-full items-center justify-between"):
                        with ui.column().classes("gap-0"):
                            ui.label(todo.title).classes("font-medium")
                            ui.label(f"{todo.project_name} · {todo.assignee_name}").classes(
                                "text-xs opacity-60"
                            )
                        with ui.row().classes("items-center gap-2"):
                            status_badge(todo.position, status_color(todo.position))
                            ui.label(format_due(todo.due_date, today)).style(
                                f"color: {COLORS['error']}"
                            )
