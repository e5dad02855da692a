"""Projects page: status/client filters, drill-down into todos, manager editing."""

from __future__ import annotations

from collections.abc import Awaitable

from nicegui import ui
from result import Err, Result

from taskboard.models.analytics import ProjectView
from taskboard.models.drafts import ProjectDraft
from taskboard.models.filters import ALL, ProjectFilter
from taskboard.models.statuses import PROJECT_STATUS_STYLES, status_color
from taskboard.services.export_service import PROJECTS_XLSX_FILENAME
from taskboard.services.rollup import project_status_counts
from taskboard.ui.components.forms import project_dialog
from taskboard.ui.deps import get_services, load_board, require_session
from taskboard.ui.layout import confirm, error_banner, page_layout, status_badge
from taskboard.ui.theme import COLORS, format_date


def setup() -> None:
    """Register the projects page."""

    @ui.page("/projects")
    async def projects_page() -> None:
        session = require_session(projects=True)
        if session is None:
            return
        svc = get_services()
        can_edit = session.can_edit_projects

        with page_layout(session):
            ui.label("Projects").classes("text-2xl font-bold mb-2")

            failure = await load_board()
            if failure:
                error_banner(failure)

            status_options = {ALL: "All Statuses"} | {
                str(s.key): s.label for s in PROJECT_STATUS_STYLES
            }
            client_options = {ALL: "All Clients"} | {
                c.document_id: c.name for c in svc.board_service.snapshot.clients
            }

            with ui.row().classes("w-full gap-4 items-end"):
                status_select = ui.select(
                    status_options, value=ALL, label="Status", on_change=lambda: render()
                ).classes("min-w-48")
                client_select = ui.select(
                    client_options, value=ALL, label="Client", on_change=lambda: render()
                ).classes("min-w-48")
                ui.space()
                if can_edit:
                    ui.button("New Project", icon="add", on_click=lambda: create_project())
                    ui.button(
                        "Export xlsx", icon="download", on_click=lambda: export_xlsx()
                    ).props("outline")

            list_container = ui.column().classes("w-full gap-2")

            def render() -> None:
                list_container.clear()
                criteria = ProjectFilter(status=status_select.value, client=client_select.value)
                views = svc.project_service.list_projects(criteria)
                counts, without_todos = project_status_counts(views)
                with list_container:
                    with ui.row().classes("gap-4 text-sm").style(
                        f"color: {COLORS['text_muted']}"
                    ):
                        ui.label(f"{len(views)} projects")
                        ui.label(f"To Do: {counts.todo}")
                        ui.label(f"In Progress: {counts.in_progress}")
                        ui.label(f"Done: {counts.done}")
                        ui.label(f"No Todos: {without_todos}")
                    if not views:
                        ui.label("No projects found").classes("opacity-60")
                    for view in views:
                        render_project(view)

            def render_project(view: ProjectView) -> None:
                project = view.project
                with (
                    ui.expansion()
                    .classes("w-full")
                    .style(
                        f"background-color: {COLORS['surface']}; "
                        f"border: 1px solid {COLORS['border']}"
                    ) as panel
                ):
                    with panel.add_slot("header"):
                        with ui.row().classes("w-full items-center gap-3 no-wrap"):
                            ui.label(project.name).classes("font-bold flex-1")
                            ui.label(project.client_names).classes("text-xs opacity-60")
                            status_badge(view.status, status_color(view.status))
                            ui.linear_progress(
                                value=view.progress / 100, show_value=False
                            ).classes("w-32")
                            ui.label(f"{view.progress}%").classes("text-xs w-10")

                    ui.label(project.description or "No description").classes("text-sm")
                    ui.label(
                        f"{format_date(project.start_date)} → {format_date(project.end_date)}"
                    ).classes("text-xs opacity-60")

                    if can_edit:
                        with ui.row().classes("gap-2"):
                            ui.button(
                                "Edit", icon="edit", on_click=lambda _e=None, v=view: edit(v)
                            ).props("flat dense")
                            ui.button(
                                "Clone",
                                icon="content_copy",
                                on_click=lambda _e=None, v=view: clone(v),
                            ).props("flat dense")
                            ui.button(
                                "Delete",
                                icon="delete",
                                on_click=lambda _e=None, v=view: delete(v),
                            ).props("flat dense color=negative")

                    ui.label(f"Todos ({len(view.todos)})").classes("font-medium mt-2")
                    if not view.todos:
                        ui.label("No todos for this project").classes("text-xs opacity-60")
                    for todo in view.todos:
                        with ui.row().classes("w-full items-center gap-2"):
                            status_badge(todo.position, status_color(todo.position))
                            ui.label(todo.title).classes("flex-1")
                            ui.label(todo.assignee_name or "Unassigned").classes(
                                "text-xs opacity-60"
                            )
                            ui.label(format_date(todo.due_date, "")).classes("text-xs")

            async def save(pending: Awaitable[Result[None, str]], success: str) -> None:
                result = await pending
                if isinstance(result, Err):
                    ui.notify(result.err_value, type="negative")
                    return
                ui.notify(success, type="positive")
                render()

            async def create_project() -> None:
                draft = await project_dialog(
                    "New Project",
                    ProjectDraft.model_construct(
                        name="", description="", clients=[], start_date=None, end_date=None
                    ),
                    clients=svc.board_service.snapshot.clients,
                )
                if draft is not None:
                    await save(svc.project_service.create(draft), "Project created")

            async def edit(view: ProjectView) -> None:
                draft = await project_dialog(
                    f"Edit {view.name}",
                    ProjectDraft.from_view(view),
                    clients=svc.board_service.snapshot.clients,
                )
                if draft is not None:
                    await save(
                        svc.project_service.update(view.project.document_id, draft),
                        "Project updated",
                    )

            async def clone(view: ProjectView) -> None:
                draft = await project_dialog(
                    f"Clone {view.name}",
                    ProjectDraft.clone_of(view),
                    clients=svc.board_service.snapshot.clients,
                )
                if draft is not None:
                    await save(svc.project_service.create(draft), "Project cloned")

            async def delete(view: ProjectView) -> None:
                if not await confirm(f"Delete project '{view.name}'?"):
                    return
                await save(svc.project_service.delete(view.project.document_id), "Project deleted")

            def export_xlsx() -> None:
                views = svc.project_service.list_projects(
                    ProjectFilter(status=status_select.value, client=client_select.value)
                )
                result = svc.export_service.export_projects_xlsx(views)
                if isinstance(result, Err):
                    ui.notify(result.err_value, type="negative")
                    return
                ui.download(result.ok_value, PROJECTS_XLSX_FILENAME)

            render()
