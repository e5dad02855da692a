"""Export service: CSV and spreadsheet export of in-memory board data."""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence

import pandas as pd
from result import Err, Ok, Result

from taskboard.models.analytics import ProjectView
from taskboard.models.todos import Todo

logger = logging.getLogger(__name__)

TODO_CSV_COLUMNS = ["title", "position", "dueDate", "project", "assignee"]
PROJECT_SHEET_COLUMNS = [
    "Project",
    "Description",
    "Clients",
    "StartDate",
    "EndDate",
    "Position",
    "TodoTitle",
    "TodoStatus",
    "TodoDueDate",
    "TodoAssignee",
]
PROJECT_SHEET_NAME = "Projects & Todos"
TODOS_CSV_FILENAME = "todos_export.csv"
PROJECTS_XLSX_FILENAME = "projects_and_todos.xlsx"


def _iso(value: object) -> str:
    return value.isoformat() if hasattr(value, "isoformat") else ""


def todo_rows(todos: Sequence[Todo]) -> list[dict[str, str]]:
    return [
        {
            "title": t.title,
            "position": t.position,
            "dueDate": _iso(t.due_date),
            "project": t.project_name,
            "assignee": t.assignee_name,
        }
        for t in todos
    ]


def project_rows(views: Sequence[ProjectView]) -> list[dict[str, str]]:
    """One row per project/todo pair; projects without todos get one row with blanks."""
    rows: list[dict[str, str]] = []
    for view in views:
        p = view.project
        base = {
            "Project": p.name,
            "Description": p.description,
            "Clients": p.client_names,
            "StartDate": _iso(p.start_date),
            "EndDate": _iso(p.end_date),
            "Position": str(view.status),
        }
        if not view.todos:
            rows.append(
                {**base, "TodoTitle": "", "TodoStatus": "", "TodoDueDate": "", "TodoAssignee": ""}
            )
            continue
        for todo in view.todos:
            rows.append(
                {
                    **base,
                    "TodoTitle": todo.title,
                    "TodoStatus": todo.position,
                    "TodoDueDate": _iso(todo.due_date),
                    "TodoAssignee": todo.assignee_name or "Unassigned",
                }
            )
    return rows


class ExportService:
    """Service for exporting board data. No network round-trip is involved."""

    def export_todos_csv(self, todos: Sequence[Todo]) -> Result[str, str]:
        """Export todos as CSV text."""
        frame = pd.DataFrame(todo_rows(todos), columns=TODO_CSV_COLUMNS)
        return Ok(frame.to_csv(index=False))

    def export_projects_xlsx(self, views: Sequence[ProjectView]) -> Result[bytes, str]:
        """Export projects and their todos as an xlsx workbook."""
        frame = pd.DataFrame(project_rows(views), columns=PROJECT_SHEET_COLUMNS)
        buffer = io.BytesIO()
        try:
            with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
                frame.to_excel(writer, sheet_name=PROJECT_SHEET_NAME, index=False)
        except (ImportError, ValueError) as exc:
            logger.exception("Spreadsheet export failed")
            return Err(f"Spreadsheet export failed: {exc}")
        return Ok(buffer.getvalue())
