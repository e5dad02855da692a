"""Derived project status, overdue detection and dashboard aggregation.

All functions are pure: they never mutate their inputs and are recomputed in
full on every refresh.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from taskboard.models.analytics import ContributorStat, DashboardStats, ProjectView, StatusCounts
from taskboard.models.auth import User
from taskboard.models.projects import Project
from taskboard.models.statuses import ProjectStatus, TodoPosition
from taskboard.models.todos import Todo


def classify_project(todos: Sequence[Todo]) -> ProjectStatus:
    """Derive a project's status from its todos.

    Precedence is fixed and evaluated top-down: Done (non-empty and every
    todo done), In-Progress (any in progress), Todo (any todo), No-Todos.
    """
    all_done = len(todos) > 0 and all(t.position == TodoPosition.DONE for t in todos)
    any_in_progress = any(t.position == TodoPosition.IN_PROGRESS for t in todos)
    any_todo = any(t.position == TodoPosition.TODO for t in todos)

    if all_done:
        return ProjectStatus.DONE
    if any_in_progress:
        return ProjectStatus.IN_PROGRESS
    if any_todo:
        return ProjectStatus.TODO
    return ProjectStatus.NO_TODOS


def project_progress(todos: Sequence[Todo]) -> int:
    """Percentage of done todos, rounded half-up; 0 when there are none."""
    total = len(todos)
    if total == 0:
        return 0
    done = sum(1 for t in todos if t.is_done)
    return (200 * done + total) // (2 * total)


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


def is_overdue(todo: Todo, now: datetime | None = None) -> bool:
    """True if the todo's due instant is strictly before ``now`` and it is not done.

    A date-only due date is the instant at midnight UTC of that day; full
    timestamps are compared as instants.
    """
    if todo.due_at is None or todo.is_done:
        return False
    current = _as_utc(now) if now is not None else datetime.now(tz=UTC)
    return todo.due_at < current


def overdue_todos(todos: Iterable[Todo], now: datetime | None = None) -> list[Todo]:
    """Overdue todos in input order."""
    current = now if now is not None else datetime.now(tz=UTC)
    return [t for t in todos if is_overdue(t, current)]


def todos_for_project(project: Project, todos: Iterable[Todo]) -> list[Todo]:
    """Todos whose project reference points at ``project``, in input order."""
    return [t for t in todos if t.belongs_to(project.id)]


def build_project_views(projects: Iterable[Project], todos: Sequence[Todo]) -> list[ProjectView]:
    """Join every project with its todos and attach derived status and progress."""
    views: list[ProjectView] = []
    for project in projects:
        related = todos_for_project(project, todos)
        views.append(
            ProjectView(
                project=project,
                todos=related,
                status=classify_project(related),
                progress=project_progress(related),
            )
        )
    return views


def todo_counts_by_position(todos: Iterable[Todo]) -> dict[str, int]:
    """Per-position counts, e.g. for a project's summary line."""
    counts: dict[str, int] = {}
    for todo in todos:
        counts[todo.position] = counts.get(todo.position, 0) + 1
    return counts


def todos_in_column(todos: Iterable[Todo], position: str) -> list[Todo]:
    """Kanban column contents in snapshot order; todos with other positions are left out."""
    return [t for t in todos if t.position == position]


def todo_status_counts(todos: Iterable[Todo]) -> StatusCounts:
    counts = todo_counts_by_position(todos)
    return StatusCounts(
        todo=counts.get(TodoPosition.TODO, 0),
        in_progress=counts.get(TodoPosition.IN_PROGRESS, 0),
        done=counts.get(TodoPosition.DONE, 0),
    )


def project_status_counts(views: Iterable[ProjectView]) -> tuple[StatusCounts, int]:
    """Three-way split of projects by derived status, plus the No-Todos count."""
    counts = StatusCounts()
    without_todos = 0
    for view in views:
        match view.status:
            case ProjectStatus.TODO:
                counts.todo += 1
            case ProjectStatus.IN_PROGRESS:
                counts.in_progress += 1
            case ProjectStatus.DONE:
                counts.done += 1
            case _:
                without_todos += 1
    return counts, without_todos


def contributor_leaderboard(users: Iterable[User], todos: Sequence[Todo]) -> list[ContributorStat]:
    """Assigned and done counts per user, sorted by done count descending.

    ``sorted`` is stable, so users with equal done counts keep their input order.
    """
    stats: list[ContributorStat] = []
    for user in users:
        assigned = [t for t in todos if t.assignee is not None and t.assignee.id == user.id]
        stats.append(
            ContributorStat(
                user_id=user.id,
                name=user.username,
                total=len(assigned),
                done=sum(1 for t in assigned if t.is_done),
            )
        )
    return sorted(stats, key=lambda s: s.done, reverse=True)


def build_dashboard_stats(
    projects: Sequence[Project],
    todos: Sequence[Todo],
    users: Sequence[User],
    now: datetime | None = None,
) -> DashboardStats:
    """Compute every dashboard counter from one snapshot of raw records."""
    project_counts, without_todos = project_status_counts(build_project_views(projects, todos))
    return DashboardStats(
        projects=project_counts,
        projects_without_todos=without_todos,
        todos=todo_status_counts(todos),
        user_count=len(users),
        overdue=overdue_todos(todos, now),
        leaderboard=contributor_leaderboard(users, todos),
    )
