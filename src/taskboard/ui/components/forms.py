"""Edit dialogs for todos and projects.

Each dialog resolves to a validated draft, or ``None`` when cancelled.
"""

from __future__ import annotations

from typing import Any

from nicegui import ui
from pydantic import ValidationError

from taskboard.models.auth import User
from taskboard.models.drafts import ProjectDraft, TodoDraft
from taskboard.models.projects import Client, Project
from taskboard.models.statuses import TODO_POSITION_STYLES
from taskboard.services.history import append_entry, move_entry, remove_entry, split_history
from taskboard.ui.theme import COLORS


def _date_input(label: str, value: object) -> ui.input:
    text = value.isoformat() if hasattr(value, "isoformat") else ""
    return ui.input(label, value=text).props("type=date stack-label").classes("flex-1")


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err["loc"]) or "form"
    return f"{field}: {err['msg']}"


async def todo_dialog(
    title: str,
    draft: TodoDraft,
    *,
    projects: list[Project],
    users: list[User],
) -> TodoDraft | None:
    """Open the todo form; the history list supports add, remove and reorder."""
    history = {"text": draft.description_history}
    project_options: dict[Any, str] = {p.id: p.name for p in projects}
    user_options: dict[Any, str] = {u.id: u.display_name for u in users}
    position_options = {str(s.key): s.label for s in TODO_POSITION_STYLES}

    with ui.dialog() as dialog, ui.card().classes("w-[36rem] gap-2"):
        ui.label(title).classes("text-lg font-bold")
        title_input = ui.input("Title", value=draft.title).classes("w-full")
        description_input = ui.textarea("Description", value=draft.description).classes(
            "w-full"
        )
        with ui.row().classes("w-full gap-2"):
            due_input = _date_input("Due date", draft.due_date)
            position_select = ui.select(
                position_options, value=str(draft.position), label="Status"
            ).classes("flex-1")
        with ui.row().classes("w-full gap-2"):
            project_select = ui.select(
                project_options, value=draft.project, label="Project", clearable=True
            ).classes("flex-1")
            assignee_select = ui.select(
                user_options, value=draft.assignee, label="Assignee", clearable=True
            ).classes("flex-1")

        ui.label("Description history").classes("font-medium mt-2")
        history_box = ui.column().classes("w-full gap-1")

        def render_history() -> None:
            history_box.clear()
            entries = split_history(history["text"])
            with history_box:
                if not entries:
                    ui.label("No history yet").classes("text-xs opacity-60")
                for index, entry in enumerate(entries):
                    with ui.row().classes("w-full items-center no-wrap gap-1"):
                        ui.label(entry).classes("text-sm flex-1")
                        ui.button(
                            icon="arrow_upward", on_click=lambda _e=None, i=index: shift(i, -1)
                        ).props("flat dense round size=sm")
                        ui.button(
                            icon="arrow_downward", on_click=lambda _e=None, i=index: shift(i, 1)
                        ).props("flat dense round size=sm")
                        ui.button(
                            icon="delete", on_click=lambda _e=None, i=index: drop(i)
                        ).props("flat dense round size=sm color=negative")

        def shift(index: int, offset: int) -> None:
            history["text"] = move_entry(history["text"], index, offset)
            render_history()

        def drop(index: int) -> None:
            history["text"] = remove_entry(history["text"], index)
            render_history()

        def add_note() -> None:
            history["text"] = append_entry(history["text"], note_input.value or "")
            note_input.set_value("")
            render_history()

        with ui.row().classes("w-full items-center gap-2"):
            note_input = ui.input("Add note").classes("flex-1")
            ui.button("Add", on_click=add_note).props("outline")
        render_history()

        def submit() -> None:
            try:
                result = TodoDraft(
                    title=(title_input.value or "").strip(),
                    description=(description_input.value or "").strip(),
                    description_history=history["text"],
                    due_date=due_input.value or None,
                    position=position_select.value,
                    project=project_select.value,
                    assignee=assignee_select.value,
                )
            except ValidationError as exc:
                error_label.set_text(_first_error(exc))
                return
            dialog.submit(result)

        error_label = ui.label("").style(f"color: {COLORS['error']}")
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancel", on_click=lambda: dialog.submit(None)).props("flat")
            ui.button("Save", on_click=submit)

    result = await dialog
    dialog.delete()
    return result if isinstance(result, TodoDraft) else None


async def project_dialog(
    title: str, draft: ProjectDraft, *, clients: list[Client]
) -> ProjectDraft | None:
    """Open the project form."""
    client_options = {c.document_id: c.name for c in clients}

    with ui.dialog() as dialog, ui.card().classes("w-[32rem] gap-2"):
        ui.label(title).classes("text-lg font-bold")
        name_input = ui.input("Name", value=draft.name).classes("w-full")
        description_input = ui.textarea("Description", value=draft.description).classes(
            "w-full"
        )
        clients_select = ui.select(
            client_options,
            value=[key for key in draft.clients if key in client_options],
            label="Clients",
            multiple=True,
        ).classes("w-full").props("use-chips")
        with ui.row().classes("w-full gap-2"):
            start_input = _date_input("Start date", draft.start_date)
            end_input = _date_input("End date", draft.end_date)

        def submit() -> None:
            try:
                result = ProjectDraft(
                    name=(name_input.value or "").strip(),
                    description=(description_input.value or "").strip(),
                    clients=list(clients_select.value or []),
                    start_date=start_input.value or None,
                    end_date=end_input.value or None,
                )
            except ValidationError as exc:
                error_label.set_text(_first_error(exc))
                return
            dialog.submit(result)

        error_label = ui.label("").style(f"color: {COLORS['error']}")
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancel", on_click=lambda: dialog.submit(None)).props("flat")
            ui.button("Save", on_click=submit)

    result = await dialog
    dialog.delete()
    return result if isinstance(result, ProjectDraft) else None
