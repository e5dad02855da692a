"""Tests for derived project status, overdue detection and dashboard stats."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from conftest import PROJECT_ROWS, TODO_ROWS, USER_ROWS, make_todo

from taskboard.models.auth import User
from taskboard.models.projects import Project
from taskboard.models.statuses import ProjectStatus
from taskboard.models.todos import Todo
from taskboard.services.rollup import (
    build_dashboard_stats,
    build_project_views,
    classify_project,
    contributor_leaderboard,
    is_overdue,
    overdue_todos,
    project_progress,
    project_status_counts,
    todos_in_column,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def _sample() -> tuple[list[Project], list[Todo], list[User]]:
    return (
        [Project.model_validate(p) for p in PROJECT_ROWS],
        [Todo.model_validate(t) for t in TODO_ROWS],
        [User.model_validate(u) for u in USER_ROWS],
    )


@pytest.mark.parametrize(
    ("positions", "expected"),
    [
        ([], ProjectStatus.NO_TODOS),
        (["done", "done"], ProjectStatus.DONE),
        (["done", "in-progress", "todo"], ProjectStatus.IN_PROGRESS),
        (["todo", "done"], ProjectStatus.TODO),
        (["archived"], ProjectStatus.NO_TODOS),
        (["done", "archived"], ProjectStatus.NO_TODOS),
    ],
)
def test_classify_project_precedence(positions: list[str], expected: ProjectStatus) -> None:
    todos = [make_todo(p, id=i) for i, p in enumerate(positions)]
    assert classify_project(todos) is expected


@pytest.mark.parametrize(
    ("done", "total", "expected"),
    [(0, 0, 0), (1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 3, 100)],
)
def test_project_progress_rounds_half_up(done: int, total: int, expected: int) -> None:
    todos = [make_todo("done" if i < done else "todo", id=i) for i in range(total)]
    assert project_progress(todos) == expected


def test_overdue_is_strictly_before_midnight_utc() -> None:
    todo = make_todo("todo", dueDate="2026-10-18")
    assert not is_overdue(todo, datetime(2026, 10, 18, 0, 0, tzinfo=UTC))
    assert is_overdue(todo, datetime(2026, 10, 18, 0, 0, 1, tzinfo=UTC))
    # naive "now" is read as UTC
    assert is_overdue(todo, datetime(2026, 10, 18, 0, 0, 1))


def test_timestamp_due_is_compared_as_an_instant() -> None:
    evening = make_todo("todo", dueDate="2026-10-18T18:00:00Z")
    assert not is_overdue(evening, datetime(2026, 10, 18, 12, 0, tzinfo=UTC))
    assert is_overdue(evening, datetime(2026, 10, 18, 18, 0, 1, tzinfo=UTC))


def test_offset_timestamp_due_keeps_its_offset() -> None:
    # 23:00 at -05:00 is 04:00Z on the next day
    todo = make_todo("todo", dueDate="2026-10-18T23:00:00-05:00")
    assert not is_overdue(todo, datetime(2026, 10, 19, 2, 0, tzinfo=UTC))
    assert is_overdue(todo, datetime(2026, 10, 19, 4, 0, 1, tzinfo=UTC))


def test_done_or_undated_todos_are_never_overdue() -> None:
    assert not is_overdue(make_todo("done", dueDate="2020-01-01"), NOW)
    assert not is_overdue(make_todo("todo"), NOW)


def test_overdue_todos_keeps_input_order() -> None:
    _projects, todos, _users = _sample()
    assert [t.document_id for t in overdue_todos(todos, NOW)] == ["t-deploy", "t-misc"]


def test_leaderboard_sorted_by_done_descending() -> None:
    users = [User(id=1, username="u1"), User(id=2, username="u2")]
    todos = [
        make_todo("done", id=1, assignee={"id": 1, "username": "u1"}),
        make_todo("todo", id=2, assignee={"id": 1, "username": "u1"}),
        make_todo("done", id=3, assignee={"id": 2, "username": "u2"}),
        make_todo("done", id=4, assignee={"id": 2, "username": "u2"}),
    ]
    board = contributor_leaderboard(users, todos)
    assert [row.name for row in board] == ["u2", "u1"]
    assert (board[1].total, board[1].done) == (2, 1)


def test_leaderboard_ties_keep_user_order() -> None:
    users = [User(id=1, username="u1"), User(id=2, username="u2"), User(id=3, username="u3")]
    board = contributor_leaderboard(users, [])
    assert [row.user_id for row in board] == [1, 2, 3]


def test_project_views_join_todos_and_derive_status() -> None:
    projects, todos, _users = _sample()
    views = {v.project.document_id: v for v in build_project_views(projects, todos)}

    website = views["p-web"]
    assert website.status is ProjectStatus.IN_PROGRESS
    assert website.progress == 50
    assert [t.document_id for t in website.todos] == ["t-copy", "t-deploy"]

    assert views["p-app"].status is ProjectStatus.DONE
    assert views["p-app"].progress == 100
    assert views["p-audit"].status is ProjectStatus.NO_TODOS
    assert views["p-audit"].progress == 0

    counts, without_todos = project_status_counts(views.values())
    assert (counts.todo, counts.in_progress, counts.done) == (0, 1, 1)
    assert without_todos == 1


def test_dashboard_stats_from_snapshot() -> None:
    projects, todos, users = _sample()
    stats = build_dashboard_stats(projects, todos, users, NOW)
    assert stats.projects.in_progress == 1
    assert stats.projects.done == 1
    assert stats.projects_without_todos == 1
    assert (stats.todos.todo, stats.todos.in_progress, stats.todos.done) == (1, 1, 2)
    assert stats.user_count == 2
    assert stats.overdue_count == 2
    assert [row.name for row in stats.leaderboard] == ["alice", "bob"]


def test_todos_in_column_filters_by_position() -> None:
    _projects, todos, _users = _sample()
    assert [t.document_id for t in todos_in_column(todos, "done")] == ["t-copy", "t-login"]
    assert todos_in_column(todos, "blocked") == []
    assert todos[2].due_date == date(2026, 10, 25)


def test_todo_due_yesterday_is_overdue_until_done() -> None:
    todo = make_todo("in-progress", dueDate="2026-10-18")
    assert is_overdue(todo, NOW)
    finished = todo.model_copy(update={"position": "done"})
    assert not is_overdue(finished, NOW)
    assert overdue_todos([todo, finished], NOW) == [todo]
