"""Timeline page: projects as Gantt bars grouped by client."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from nicegui import ui

from taskboard.models.analytics import ProjectView
from taskboard.models.filters import ALL, ProjectFilter
from taskboard.models.statuses import PROJECT_STATUS_STYLES, status_color
from taskboard.models.timeline import TimelineBar, TimelineLayout, TimelineView
from taskboard.services.timeline import compute_timeline, step_reference, zoom_in, zoom_out
from taskboard.ui.deps import get_services, load_board, require_session
from taskboard.ui.layout import page_layout, status_badge
from taskboard.ui.theme import COLORS, format_date

_NAME_COLUMN_PX = 220
_ROW_HEIGHT_PX = 32
_MIN_LABEL_SPACING_PX = 40


@dataclass
class _Viewport:
    reference: date
    view: TimelineView = TimelineView.MONTH
    zoom: float = 1.0


def _label_step(pixels_per_day: float) -> int:
    return max(1, math.ceil(_MIN_LABEL_SPACING_PX / pixels_per_day))


def setup() -> None:
    """Register the timeline page."""

    @ui.page("/timeline")
    async def timeline_page() -> None:
        session = require_session(projects=True)
        if session is None:
            return
        svc = get_services()

        with page_layout(session):
            ui.label("Timeline").classes("text-2xl font-bold mb-2")

            await load_board()

            port = _Viewport(reference=date.today())
            status_options = {ALL: "All Statuses"} | {
                str(s.key): s.label for s in PROJECT_STATUS_STYLES
            }
            client_options = {ALL: "All Clients"} | {
                c.document_id: c.name for c in svc.board_service.snapshot.clients
            }

            def update(**changes: object) -> None:
                for key, value in changes.items():
                    setattr(port, key, value)
                render()

            with ui.row().classes("w-full gap-2 items-end flex-wrap"):
                ui.toggle(
                    {TimelineView.MONTH: "Month", TimelineView.WEEK: "Week"},
                    value=TimelineView.MONTH,
                    on_change=lambda e: update(view=TimelineView(e.value)),
                )
                ui.button(icon="chevron_left", on_click=lambda: page(-1)).props("flat round")
                ui.button("Today", on_click=lambda: update(reference=date.today())).props(
                    "outline"
                )
                ui.button(icon="chevron_right", on_click=lambda: page(1)).props("flat round")
                ui.button(
                    icon="zoom_out",
                    on_click=lambda: update(zoom=zoom_out(port.zoom)),
                ).props("flat round")
                ui.button(
                    icon="zoom_in",
                    on_click=lambda: update(zoom=zoom_in(port.zoom)),
                ).props("flat round")
                status_select = ui.select(
                    status_options, value=ALL, label="Status", on_change=lambda: render()
                ).classes("min-w-40")
                client_select = ui.select(
                    client_options, value=ALL, label="Client", on_change=lambda: render()
                ).classes("min-w-40")

            range_label = ui.label("").classes("font-medium")
            chart = ui.column().classes("w-full gap-1 overflow-x-auto")

            def page(direction: int) -> None:
                update(reference=step_reference(port.reference, port.view, direction))

            def render() -> None:
                criteria = ProjectFilter(status=status_select.value, client=client_select.value)
                views = svc.project_service.list_projects(criteria)
                clients = svc.board_service.snapshot.clients
                if client_select.value and client_select.value != ALL:
                    clients = [c for c in clients if c.matches(client_select.value)]
                layout = compute_timeline(
                    reference=port.reference,
                    view=port.view,
                    zoom=port.zoom,
                    today=date.today(),
                    clients=clients,
                    projects=views,
                )
                range_label.set_text(
                    f"{layout.range_start:%b %d, %Y} – {layout.range_end:%b %d, %Y}"
                    f" · zoom {layout.zoom:.2f}x"
                )
                chart.clear()
                with chart:
                    render_axis(layout)
                    if not layout.groups:
                        ui.label("No scheduled projects for these filters").classes(
                            "opacity-60"
                        )
                    for group in layout.groups:
                        with ui.expansion(
                            f"{group.client.name} ({len(group.bars)})", value=True
                        ).classes("w-full"):
                            if not group.bars:
                                ui.label("No projects with start and end dates").classes(
                                    "text-xs opacity-60"
                                )
                            for bar in group.bars:
                                render_bar(bar, layout)

            def render_axis(layout: TimelineLayout) -> None:
                width = layout.content_width_px
                step = _label_step(layout.pixels_per_day)
                with ui.row().classes("no-wrap gap-0"):
                    ui.element("div").style(f"min-width: {_NAME_COLUMN_PX}px")
                    with ui.element("div").style(
                        f"position: relative; height: 20px; min-width: {width}px"
                    ):
                        for i, text in enumerate(layout.day_labels):
                            if i % step:
                                continue
                            ui.label(text).classes("text-xs").style(
                                f"position: absolute; left: {i * layout.pixels_per_day}px; "
                                f"color: {COLORS['text_muted']}; white-space: nowrap"
                            )

            def render_bar(bar: TimelineBar, layout: TimelineLayout) -> None:
                view = bar.view
                color = status_color(view.status)
                with ui.row().classes("no-wrap gap-0 items-center"):
                    ui.label(view.name).classes("text-sm truncate").style(
                        f"min-width: {_NAME_COLUMN_PX}px; max-width: {_NAME_COLUMN_PX}px"
                    )
                    with ui.element("div").style(
                        f"position: relative; height: {_ROW_HEIGHT_PX}px; "
                        f"min-width: {layout.content_width_px}px; overflow: hidden; "
                        f"background-color: {COLORS['timeline_track']}"
                    ):
                        ui.element("div").style(
                            f"position: absolute; left: {layout.today_px}px; top: 0; "
                            f"bottom: 0; width: 2px; background-color: {COLORS['today_marker']}"
                        )
                        with (
                            ui.element("div")
                            .classes("cursor-pointer rounded")
                            .style(
                                f"position: absolute; left: {bar.left_px}px; top: 4px; "
                                f"height: {_ROW_HEIGHT_PX - 8}px; width: {bar.width_px}px; "
                                f"background-color: {color}66; overflow: hidden"
                            )
                            .on("click", lambda _e=None, v=view: show_details(v))
                        ):
                            ui.element("div").style(
                                f"height: 100%; width: {view.progress}%; "
                                f"background-color: {color}"
                            )
                            ui.label(f"{view.progress}%").classes("text-xs").style(
                                "position: absolute; left: 6px; top: 3px; color: white"
                            )

            def show_details(view: ProjectView) -> None:
                project = view.project
                with ui.dialog() as dialog, ui.card().classes("w-96 gap-2"):
                    ui.label(project.name).classes("text-lg font-bold")
                    with ui.row().classes("items-center gap-2"):
                        status_badge(view.status, status_color(view.status))
                        ui.label(f"{view.progress}% done").classes("text-sm")
                    ui.label(project.description or "No description").classes("text-sm")
                    ui.label(f"Clients: {project.client_names}").classes("text-xs")
                    ui.label(
                        f"{format_date(project.start_date)} → {format_date(project.end_date)}"
                    ).classes("text-xs opacity-60")
                    ui.label(f"Todos ({len(view.todos)})").classes("font-medium")
                    for todo in view.todos:
                        with ui.row().classes("items-center gap-2"):
                            status_badge(todo.position, status_color(todo.position))
                            ui.label(todo.title).classes("text-sm")
                    ui.button("Close", on_click=dialog.close).props("flat")
                dialog.on("hide", dialog.delete)
                dialog.open()

            render()
