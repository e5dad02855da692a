"""Todos page: compound filters, done-last list, add/edit/delete dialogs."""

from __future__ import annotations

from datetime import date

from nicegui import ui
from result import Err, Result

from taskboard.models.drafts import TodoDraft
from taskboard.models.filters import ALL, TodoFilter
from taskboard.models.statuses import TODO_POSITION_STYLES, TodoPosition, status_color
from taskboard.models.todos import Todo
from taskboard.services.filters import filter_todos
from taskboard.ui.components.forms import todo_dialog
from taskboard.ui.deps import get_services, load_board, require_session
from taskboard.ui.layout import confirm, error_banner, page_layout, status_badge
from taskboard.ui.theme import COLORS, format_due


def setup() -> None:
    """Register the todos page."""

    @ui.page("/todos")
    async def todos_page() -> None:
        session = require_session()
        if session is None:
            return
        svc = get_services()
        board = svc.board_service

        with page_layout(session):
            ui.label("Todo's").classes("text-2xl font-bold mb-2")

            failure = await load_board()
            if failure:
                error_banner(failure)
            for warning in board.load_errors:
                error_banner(warning)

            snapshot = board.snapshot
            position_options = {ALL: "All Statuses"} | {
                str(s.key): s.label for s in TODO_POSITION_STYLES
            }
            project_options = {ALL: "All Projects"} | {
                p.document_id: p.name for p in snapshot.projects
            }
            assignee_options = {ALL: "All Assignees"} | {
                str(u.id): u.display_name for u in snapshot.users
            }

            with ui.row().classes("w-full gap-4 items-end flex-wrap"):
                search_input = ui.input(
                    "Search", on_change=lambda: render()
                ).props("clearable").classes("min-w-64")
                position_select = ui.select(
                    position_options, value=ALL, label="Status", on_change=lambda: render()
                ).classes("min-w-40")
                project_select = ui.select(
                    project_options, value=ALL, label="Project", on_change=lambda: render()
                ).classes("min-w-40")
                assignee_select = ui.select(
                    assignee_options, value=ALL, label="Assignee", on_change=lambda: render()
                ).classes("min-w-40")
                from_input = (
                    ui.input("Due from", on_change=lambda: render())
                    .props("type=date stack-label")
                    .classes("min-w-36")
                )
                to_input = (
                    ui.input("Due to", on_change=lambda: render())
                    .props("type=date stack-label")
                    .classes("min-w-36")
                )
                ui.space()
                ui.button("Add ToDo", icon="add", on_click=lambda: create_todo())

            list_container = ui.column().classes("w-full gap-2")

            def current_filter() -> TodoFilter:
                return TodoFilter(
                    position=position_select.value,
                    project=project_select.value,
                    assignee=assignee_select.value,
                    search=search_input.value or "",
                    date_from=from_input.value or None,
                    date_to=to_input.value or None,
                )

            def render() -> None:
                list_container.clear()
                criteria = current_filter()
                todos = filter_todos(board.snapshot.todos, criteria)
                today = date.today()
                with list_container:
                    active = len(criteria.active_dimensions)
                    summary = f"{len(todos)} todos"
                    if active:
                        summary += f" · {active} filter{'s' if active > 1 else ''} active"
                    ui.label(summary).classes("text-sm").style(f"color: {COLORS['text_muted']}")
                    if not todos:
                        ui.label("No todos found").classes("opacity-60")
                    for todo in todos:
                        render_todo(todo, today)

            def render_todo(todo: Todo, today: date) -> None:
                muted = "opacity-60 line-through" if todo.is_done else ""
                with (
                    ui.card()
                    .classes("w-full p-3")
                    .style(
                        f"background-color: {COLORS['surface']}; "
                        f"border-left: 4px solid {status_color(todo.position)}"
                    )
                ):
                    with ui.row().classes("w-full items-center no-wrap gap-3"):
                        with ui.column().classes("gap-0 flex-1"):
                            ui.label(todo.title).classes(f"font-medium {muted}")
                            ui.label(todo.description).classes("text-xs opacity-70")
                            ui.label(
                                f"{todo.project_name or 'No project'} · "
                                f"{todo.assignee_name or 'Unassigned'}"
                            ).classes("text-xs opacity-60")
                        status_badge(todo.position, status_color(todo.position))
                        ui.label(format_due(todo.due_date, today)).classes("text-xs w-24")
                        ui.button(
                            icon="edit", on_click=lambda _e=None, t=todo: edit_todo(t)
                        ).props("flat dense round")
                        ui.button(
                            icon="delete", on_click=lambda _e=None, t=todo: delete_todo(t)
                        ).props("flat dense round color=negative")

            async def create_todo() -> None:
                empty = TodoDraft.model_construct(
                    title="",
                    description="",
                    description_history="",
                    due_date=None,
                    position=TodoPosition.TODO,
                    project=None,
                    assignee=None,
                )
                draft = await todo_dialog(
                    "Add ToDo",
                    empty,
                    projects=board.snapshot.projects,
                    users=board.snapshot.users,
                )
                if draft is None:
                    return
                result = await svc.todo_service.create(draft)
                notify_and_render(result, "ToDo saved")

            async def edit_todo(todo: Todo) -> None:
                draft = await todo_dialog(
                    "Edit ToDo",
                    TodoDraft.from_todo(todo),
                    projects=board.snapshot.projects,
                    users=board.snapshot.users,
                )
                if draft is None:
                    return
                result = await svc.todo_service.update(todo.document_id, draft)
                notify_and_render(result, "ToDo saved")

            async def delete_todo(todo: Todo) -> None:
                if not await confirm(f"Delete '{todo.title}'?"):
                    return
                result = await svc.todo_service.delete(todo.document_id)
                notify_and_render(result, "ToDo deleted")

            def notify_and_render(result: Result[None, str], success: str) -> None:
                if isinstance(result, Err):
                    ui.notify(result.err_value, type="negative")
                    return
                ui.notify(success, type="positive")
                render()

            render()
