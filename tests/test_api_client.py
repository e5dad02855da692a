"""Tests for the REST client against a fake aiohttp session."""

from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from taskboard.data.api import ApiClient, ApiError


class FakeResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        return None

    async def text(self) -> str:
        return self._body


class FakeSession:
    """Records requests and replays queued responses."""

    def __init__(self, *responses: FakeResponse | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    async def close(self) -> None:
        self.closed = True


def _client(*responses: FakeResponse | Exception) -> tuple[ApiClient, FakeSession]:
    session = FakeSession(*responses)
    client = ApiClient("http://cms.test/api/", session=session)  # type: ignore[arg-type]
    return client, session


@pytest.mark.asyncio
async def test_list_collection_sends_pagination_and_unwraps_data() -> None:
    body = {"data": [{"id": 1, "name": "Website"}, "junk"], "meta": {}}
    client, session = _client(FakeResponse(200, json.dumps(body)))

    rows = await client.list_collection("projects", page_size=1000)

    assert rows == [{"id": 1, "name": "Website"}]
    sent = session.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == "http://cms.test/api/projects"
    assert sent["params"] == {"pagination[pageSize]": "1000", "populate": "*"}
    assert "Authorization" not in sent["headers"]


@pytest.mark.asyncio
async def test_users_listing_is_a_bare_list_and_needs_a_token() -> None:
    client, session = _client(FakeResponse(200, json.dumps([{"id": 1, "username": "a"}])))
    rows = await client.get_users("secret")
    assert rows == [{"id": 1, "username": "a"}]
    assert session.requests[0]["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_writes_wrap_payload_in_data_envelope() -> None:
    client, session = _client(
        FakeResponse(201, json.dumps({"data": {"id": 5}})),
        FakeResponse(200, json.dumps({"data": {"id": 5}})),
        FakeResponse(204, ""),
    )
    await client.create("todos", {"title": "x"}, "tok")
    await client.update("todos", "doc-5", {"position": "done"}, "tok")
    deleted = await client.delete("todos", "doc-5", "tok")

    assert [r["method"] for r in session.requests] == ["POST", "PUT", "DELETE"]
    assert session.requests[0]["json"] == {"data": {"title": "x"}}
    assert session.requests[1]["url"].endswith("/todos/doc-5")
    assert session.requests[1]["json"] == {"data": {"position": "done"}}
    assert deleted is None


@pytest.mark.asyncio
async def test_error_status_raises_with_backend_message() -> None:
    error = {"data": None, "error": {"status": 400, "message": "Invalid identifier or password"}}
    client, _ = _client(FakeResponse(400, json.dumps(error)))

    with pytest.raises(ApiError) as info:
        await client.login("alice", "wrong")

    assert info.value.status == 400
    assert info.value.path == "/auth/local"
    assert "Invalid identifier or password" in str(info.value)


@pytest.mark.asyncio
async def test_transport_errors_become_api_errors() -> None:
    client, _ = _client(aiohttp.ClientConnectionError("connection refused"))
    with pytest.raises(ApiError) as info:
        await client.list_collection("todos")
    assert info.value.status is None
    assert "connection refused" in str(info.value)


@pytest.mark.asyncio
async def test_invalid_json_and_unexpected_shapes_raise() -> None:
    client, _ = _client(FakeResponse(200, "<html>"), FakeResponse(200, json.dumps({"data": 3})))
    with pytest.raises(ApiError, match="Invalid JSON"):
        await client.list_collection("todos")
    with pytest.raises(ApiError, match="Expected a list"):
        await client.list_collection("todos")


@pytest.mark.asyncio
async def test_user_with_role_populates_role() -> None:
    body = {"id": 1, "username": "alice", "role": {"name": "Backoffice Manager"}}
    client, session = _client(FakeResponse(200, json.dumps(body)))
    assert await client.get_user_with_role(1, "tok") == body
    assert session.requests[0]["params"] == {"populate": "role"}


@pytest.mark.asyncio
async def test_close_leaves_injected_session_open() -> None:
    client, session = _client()
    async with client:
        assert client.base_url == "http://cms.test/api"
    assert session.closed is False


def test_api_error_str_without_location() -> None:
    assert str(ApiError("boom")) == "boom"
    assert str(ApiError("boom", method="GET", path="/todos", status=500)) == "GET /todos [500]: boom"
