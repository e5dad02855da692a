"""Shared fixtures for Taskboard tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncGenerator
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from taskboard.data.api import CLIENTS, PROJECTS, TODOS, ApiError
from taskboard.data.db import Database
from taskboard.models.auth import AuthSession, User
from taskboard.models.todos import Todo
from taskboard.services.auth_service import AuthService
from taskboard.services.board_service import BoardService
from taskboard.services.project_service import ProjectService
from taskboard.services.todo_service import TodoService

CLIENT_ROWS: list[dict[str, Any]] = [
    {"id": 1, "documentId": "c1", "Client": "Acme"},
    {"id": 2, "documentId": "c2", "Client": "Globex"},
]

PROJECT_ROWS: list[dict[str, Any]] = [
    {
        "id": 10,
        "documentId": "p-web",
        "name": "Website",
        "description": "Marketing site relaunch",
        "startDate": "2026-10-01",
        "endDate": "2026-10-31",
        "clients": [CLIENT_ROWS[0]],
    },
    {
        "id": 11,
        "documentId": "p-app",
        "name": "Mobile App",
        "description": "Field app",
        "startDate": "2026-09-15",
        "endDate": "2026-11-15",
        "clients": [CLIENT_ROWS[0], CLIENT_ROWS[1]],
    },
    {
        "id": 12,
        "documentId": "p-audit",
        "name": "Audit",
        "description": None,
        "startDate": None,
        "endDate": None,
        "clients": [],
    },
]

TODO_ROWS: list[dict[str, Any]] = [
    {
        "id": 100,
        "documentId": "t-copy",
        "title": "Write copy",
        "description": "Landing page text",
        "descriptionHistory": "[2026-10-02 09:00:00] drafted",
        "dueDate": "2026-10-10",
        "position": "done",
        "project": {"id": 10, "documentId": "p-web", "name": "Website"},
        "assignee": {"id": 1, "username": "alice"},
    },
    {
        "id": 101,
        "documentId": "t-deploy",
        "title": "Deploy staging",
        "description": "CI pipeline",
        "descriptionHistory": None,
        "dueDate": "2026-10-05",
        "position": "in-progress",
        "project": {"id": 10, "documentId": "p-web", "name": "Website"},
        "assignee": {"id": 2, "username": "bob"},
    },
    {
        "id": 102,
        "documentId": "t-login",
        "title": "Login screen",
        "description": "OAuth flow",
        "descriptionHistory": "",
        "dueDate": "2026-10-25T00:00:00.000Z",
        "position": "done",
        "project": {"id": 11, "documentId": "p-app", "name": "Mobile App"},
        "assignee": {"id": 2, "username": "bob"},
    },
    {
        "id": 103,
        "documentId": "t-misc",
        "title": "Order supplies",
        "description": "Office",
        "descriptionHistory": "",
        "dueDate": "2026-10-01",
        "position": "todo",
        "project": None,
        "assignee": None,
    },
]

USER_ROWS: list[dict[str, Any]] = [
    {"id": 1, "username": "alice", "email": "alice@example.com"},
    {"id": 2, "username": "bob", "email": "bob@example.com"},
]

MANAGER = "backoffice manager"
SPECIALIST = "backoffice specialist"


def make_todo(position: str = "todo", **overrides: Any) -> Todo:
    """Build a todo with sensible defaults for unit tests."""
    data: dict[str, Any] = {
        "id": overrides.pop("id", 1),
        "documentId": overrides.pop("document_id", "t1"),
        "title": "Task",
        "description": "",
        "position": position,
    }
    data.update(overrides)
    return Todo.model_validate(data)


def make_session(role: str = MANAGER, token: str = "jwt-token") -> AuthSession:
    user = User(id=1, username="alice", email="alice@example.com", role=role)
    return AuthSession(token=token, user=user, role=role)


class FakeBackend:
    """In-memory stand-in for ``ApiClient`` that records every call."""

    def __init__(self) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {
            PROJECTS: copy.deepcopy(PROJECT_ROWS),
            TODOS: copy.deepcopy(TODO_ROWS),
            CLIENTS: copy.deepcopy(CLIENT_ROWS),
        }
        self.users: list[dict[str, Any]] = copy.deepcopy(USER_ROWS)
        self.calls: list[tuple[Any, ...]] = []
        self.fail_collections: set[str] = set()
        self.fail_users = False
        self.fail_writes = False
        self.login_body: dict[str, Any] = {"jwt": "jwt-token", "user": {"id": 1}}
        self.user_with_role: dict[str, Any] = {
            "id": 1,
            "username": "alice",
            "email": "alice@example.com",
            "role": {"name": "Backoffice Manager"},
        }
        self.fail_login = False

    def writes(self) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] in ("create", "update", "delete")]

    def list_calls(self) -> int:
        return sum(1 for c in self.calls if c[0] == "list")

    async def list_collection(self, collection: str, page_size: int = 1000) -> list[dict[str, Any]]:
        self.calls.append(("list", collection, page_size))
        if collection in self.fail_collections:
            raise ApiError("unavailable", method="GET", path=f"/{collection}", status=500)
        return copy.deepcopy(self.collections[collection])

    async def get_users(self, token: str) -> list[dict[str, Any]]:
        self.calls.append(("users", token))
        if self.fail_users:
            raise ApiError("forbidden", method="GET", path="/users", status=403)
        return copy.deepcopy(self.users)

    async def get_user_with_role(self, user_id: int, token: str) -> dict[str, Any]:
        self.calls.append(("user_with_role", user_id, token))
        return copy.deepcopy(self.user_with_role)

    async def create(self, collection: str, data: dict[str, Any], token: str) -> Any:
        self.calls.append(("create", collection, data, token))
        if self.fail_writes:
            raise ApiError("rejected", method="POST", path=f"/{collection}", status=400)
        return {"data": data}

    async def update(
        self, collection: str, document_id: str, data: dict[str, Any], token: str
    ) -> Any:
        self.calls.append(("update", collection, document_id, data, token))
        if self.fail_writes:
            raise ApiError("rejected", method="PUT", path=f"/{collection}", status=400)
        return {"data": data}

    async def delete(self, collection: str, document_id: str, token: str) -> Any:
        self.calls.append(("delete", collection, document_id, token))
        if self.fail_writes:
            raise ApiError("rejected", method="DELETE", path=f"/{collection}", status=400)
        return None

    async def login(self, identifier: str, password: str) -> dict[str, Any]:
        self.calls.append(("login", identifier))
        if self.fail_login:
            raise ApiError("Invalid identifier or password", status=400)
        return copy.deepcopy(self.login_body)


class MemoryStore:
    """Session store kept in a plain attribute."""

    def __init__(self, session: AuthSession | None = None) -> None:
        self.session = session or AuthSession()
        self.saved: list[AuthSession] = []
        self.cleared = 0

    async def load(self) -> AuthSession:
        return self.session

    async def save(self, session: AuthSession) -> None:
        self.saved.append(session)
        self.session = session

    async def clear(self) -> None:
        self.cleared += 1
        self.session = AuthSession()


async def build_services(
    session: AuthSession | None = None, backend: FakeBackend | None = None
) -> SimpleNamespace:
    """Wire the services around a fake backend, like ``ServiceContainer.create`` does."""
    api = backend or FakeBackend()
    store = MemoryStore(session)
    auth = AuthService(api, store)  # type: ignore[arg-type]
    await auth.start()
    board = BoardService(api, auth)  # type: ignore[arg-type]
    return SimpleNamespace(
        api=api,
        store=store,
        auth=auth,
        board=board,
        todos=TodoService(api, board),  # type: ignore[arg-type]
        projects=ProjectService(api, auth, board),  # type: ignore[arg-type]
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def manager_services(backend: FakeBackend) -> SimpleNamespace:
    """Services signed in as a backoffice manager, with the board loaded."""
    services = await build_services(make_session(MANAGER), backend)
    await services.board.refresh()
    return services


@pytest.fixture
async def test_db(tmp_path: Path) -> AsyncGenerator[Database]:
    """A fresh on-disk test database."""
    db_path = tmp_path / "test.db"
    db = Database(db_path)
    await db.__aenter__()
    yield db  # type: ignore[misc]
    await db.__aexit__(None, None, None)


@pytest.fixture
async def in_memory_db() -> AsyncGenerator[Database]:
    """SQLite in-memory database for fast unit/integration tests."""
    db = Database(Path(":memory:"))
    await db.__aenter__()
    yield db  # type: ignore[misc]
    await db.__aexit__(None, None, None)
