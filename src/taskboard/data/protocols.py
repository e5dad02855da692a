"""Protocol definitions for data access."""

from __future__ import annotations

from typing import Any, Protocol

from taskboard.models.auth import AuthSession


class BackendProtocol(Protocol):
    """Interface of the REST backend client used by the services."""

    async def list_collection(
        self, collection: str, page_size: int = 1000
    ) -> list[dict[str, Any]]: ...

    async def get_users(self, token: str) -> list[dict[str, Any]]: ...

    async def get_user_with_role(self, user_id: int, token: str) -> dict[str, Any]: ...

    async def create(self, collection: str, data: dict[str, Any], token: str) -> Any: ...

    async def update(
        self, collection: str, document_id: str, data: dict[str, Any], token: str
    ) -> Any: ...

    async def delete(self, collection: str, document_id: str, token: str) -> Any: ...

    async def login(self, identifier: str, password: str) -> dict[str, Any]: ...


class SessionStoreProtocol(Protocol):
    """Durable storage for the signed-in user's credentials."""

    async def load(self) -> AuthSession: ...

    async def save(self, session: AuthSession) -> None: ...

    async def clear(self) -> None: ...
