"""Async REST client for the content-management backend."""

from __future__ import annotations

import asyncio
import json
import logging
from types import TracebackType
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

PROJECTS = "projects"
TODOS = "todos"
CLIENTS = "clients"


class ApiError(Exception):
    """Transport failure or non-2xx response.

    The client does not distinguish auth, not-found or validation failures;
    ``status`` is kept for logging only.
    """

    def __init__(
        self, message: str, *, method: str = "", path: str = "", status: int | None = None
    ) -> None:
        super().__init__(message)
        self.method = method
        self.path = path
        self.status = status

    def __str__(self) -> str:
        where = f"{self.method} {self.path}".strip()
        code = f" [{self.status}]" if self.status is not None else ""
        base = super().__str__()
        return f"{where}{code}: {base}" if where else base


class ApiClient:
    """Thin JSON client. Mutations and ``/users`` require a bearer token."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str = "",
        params: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (``None`` when empty)."""
        method = method.upper()
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with self.session.request(
                method, url, params=params, json=json_body, headers=headers
            ) as resp:
                text = await resp.text()
                if resp.status >= 400:
                    raise ApiError(
                        _error_message(text), method=method, path=path, status=resp.status
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ApiError(str(exc) or type(exc).__name__, method=method, path=path) from exc

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise ApiError("Invalid JSON response", method=method, path=path) from exc

    # ── Reads ──

    async def list_collection(self, collection: str, page_size: int = 1000) -> list[dict[str, Any]]:
        """``GET /<collection>?pagination[pageSize]=N&populate=*``, unwrapped from ``data``."""
        body = await self.request(
            "GET",
            f"/{collection}",
            params={"pagination[pageSize]": str(page_size), "populate": "*"},
        )
        return _unwrap_list(body)

    async def get_users(self, token: str) -> list[dict[str, Any]]:
        """``GET /users`` returns a bare list rather than a ``data`` envelope."""
        return _unwrap_list(await self.request("GET", "/users", token=token))

    async def get_user_with_role(self, user_id: int, token: str) -> dict[str, Any]:
        body = await self.request(
            "GET", f"/users/{user_id}", token=token, params={"populate": "role"}
        )
        if not isinstance(body, dict):
            raise ApiError("Unexpected user payload", method="GET", path=f"/users/{user_id}")
        return body

    # ── Writes ──

    async def create(self, collection: str, data: dict[str, Any], token: str) -> Any:
        return await self.request("POST", f"/{collection}", token=token, json_body={"data": data})

    async def update(
        self, collection: str, document_id: str, data: dict[str, Any], token: str
    ) -> Any:
        return await self.request(
            "PUT", f"/{collection}/{document_id}", token=token, json_body={"data": data}
        )

    async def delete(self, collection: str, document_id: str, token: str) -> Any:
        return await self.request("DELETE", f"/{collection}/{document_id}", token=token)

    # ── Auth ──

    async def login(self, identifier: str, password: str) -> dict[str, Any]:
        """``POST /auth/local``; returns ``{"jwt": ..., "user": {...}}``."""
        body = await self.request(
            "POST", "/auth/local", json_body={"identifier": identifier, "password": password}
        )
        if not isinstance(body, dict):
            raise ApiError("Unexpected login payload", method="POST", path="/auth/local")
        return body


def _unwrap_list(body: Any) -> list[dict[str, Any]]:
    if isinstance(body, dict):
        body = body.get("data")
    if body is None:
        return []
    if not isinstance(body, list):
        msg = f"Expected a list, got {type(body).__name__}"
        raise ApiError(msg)
    return [item for item in body if isinstance(item, dict)]


def _error_message(text: str) -> str:
    """Pull the backend's ``error.message`` out of an error body when present."""
    try:
        body = json.loads(text)
    except ValueError:
        return text.strip()[:200] or "Request failed"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "Request failed"
