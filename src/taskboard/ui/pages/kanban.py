"""Kanban page: todos in three status columns, moved between columns by button."""

from __future__ import annotations

from nicegui import ui
from result import Err

from taskboard.models.statuses import TODO_POSITION_STYLES, StatusStyle
from taskboard.models.todos import Todo
from taskboard.services.rollup import todos_in_column
from taskboard.ui.deps import get_services, load_board, require_session
from taskboard.ui.layout import page_layout
from taskboard.ui.theme import COLORS, format_date

_COLUMN_KEYS = [str(style.key) for style in TODO_POSITION_STYLES]


def setup() -> None:
    """Register the kanban page."""

    @ui.page("/kanban")
    async def kanban_page() -> None:
        session = require_session(kanban=True)
        if session is None:
            return
        svc = get_services()

        with page_layout(session):
            ui.label("Kanban").classes("text-2xl font-bold mb-2")

            await load_board()

            board_row = ui.row().classes("w-full gap-4 no-wrap items-start")

            def render() -> None:
                board_row.clear()
                todos = svc.board_service.snapshot.todos
                with board_row:
                    for style in TODO_POSITION_STYLES:
                        render_column(style, todos_in_column(todos, style.key))

            def render_column(style: StatusStyle, todos: list[Todo]) -> None:
                with (
                    ui.column()
                    .classes("flex-1 p-3 gap-2 rounded")
                    .style(f"background-color: {COLORS['timeline_track']}")
                ):
                    with ui.row().classes("items-center gap-2"):
                        ui.element("div").classes("w-3 h-3 rounded-full").style(
                            f"background-color: {style.color}"
                        )
                        ui.label(f"{style.label} ({len(todos)})").classes("font-bold")
                    for todo in todos:
                        render_card(todo, str(style.key))

            def render_card(todo: Todo, column: str) -> None:
                index = _COLUMN_KEYS.index(column)
                with (
                    ui.card()
                    .classes("w-full p-3")
                    .style(f"background-color: {COLORS['surface']}")
                ):
                    ui.label(todo.title).classes("font-medium")
                    ui.label(todo.project_name or "No project").classes("text-xs opacity-60")
                    with ui.row().classes("w-full items-center justify-between"):
                        ui.label(todo.assignee_name or "Unassigned").classes("text-xs")
                        ui.label(format_date(todo.due_date, "")).classes("text-xs")
                    with ui.row().classes("w-full justify-between"):
                        if index > 0:
                            ui.button(
                                icon="chevron_left",
                                on_click=lambda _e=None, t=todo, k=_COLUMN_KEYS[index - 1]: (
                                    move(t, k)
                                ),
                            ).props("flat dense round")
                        else:
                            ui.space()
                        if index < len(_COLUMN_KEYS) - 1:
                            ui.button(
                                icon="chevron_right",
                                on_click=lambda _e=None, t=todo, k=_COLUMN_KEYS[index + 1]: (
                                    move(t, k)
                                ),
                            ).props("flat dense round")

            async def move(todo: Todo, position: str) -> None:
                result = await svc.todo_service.move(todo.document_id, position)
                if isinstance(result, Err):
                    ui.notify(result.err_value, type="negative")
                    return
                render()

            render()
