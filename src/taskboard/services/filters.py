"""In-memory filter engine for todo and project lists."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from taskboard.models.analytics import ProjectView
from taskboard.models.filters import ProjectFilter, TodoFilter, is_active
from taskboard.models.todos import Todo


def _matches_search(todo: Todo, query: str) -> bool:
    needle = query.lower()
    return any(
        needle in field.lower()
        for field in (todo.title, todo.description, todo.description_history)
    )


def todo_matches(todo: Todo, criteria: TodoFilter) -> bool:
    """Evaluate the compound predicate for one todo."""
    if is_active(criteria.position) and todo.position != criteria.position:
        return False
    if is_active(criteria.project):
        ref = todo.project
        if ref is None or criteria.project not in (ref.document_id, str(ref.id)):
            return False
    if is_active(criteria.assignee):
        if todo.assignee is None or str(todo.assignee.id) != criteria.assignee:
            return False
    if criteria.date_from is not None:
        if todo.due_date is None or todo.due_date < criteria.date_from:
            return False
    if criteria.date_to is not None:
        if todo.due_date is None or todo.due_date > criteria.date_to:
            return False
    if criteria.search and not _matches_search(todo, criteria.search):
        return False
    return True


def done_last(todos: Iterable[Todo]) -> list[Todo]:
    """Stable partition: non-done todos first, then done, each group in input order."""
    pending: list[Todo] = []
    done: list[Todo] = []
    for todo in todos:
        (done if todo.is_done else pending).append(todo)
    return pending + done


def filter_todos(todos: Sequence[Todo], criteria: TodoFilter) -> list[Todo]:
    """Apply ``criteria`` and move done todos after the rest."""
    return done_last(t for t in todos if todo_matches(t, criteria))


def project_matches(view: ProjectView, criteria: ProjectFilter) -> bool:
    if is_active(criteria.status) and view.status.lower() != str(criteria.status).lower():
        return False
    if is_active(criteria.client) and not view.project.has_client(str(criteria.client)):
        return False
    return True


def filter_projects(views: Sequence[ProjectView], criteria: ProjectFilter) -> list[ProjectView]:
    """Projects matching ``criteria``, in input order."""
    return [v for v in views if project_matches(v, criteria)]
