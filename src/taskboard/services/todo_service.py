"""Todo service: create, update, delete and move todos."""

from __future__ import annotations

from typing import TYPE_CHECKING

from result import Err, Ok, Result

from taskboard.data.api import TODOS
from taskboard.models.statuses import TodoPosition, parse_position

if TYPE_CHECKING:
    from taskboard.data.protocols import BackendProtocol
    from taskboard.models.drafts import TodoDraft
    from taskboard.services.board_service import BoardService


class TodoService:
    """Write commands for todos; each one reloads the board on success."""

    def __init__(self, api: BackendProtocol, board: BoardService) -> None:
        self._api = api
        self._board = board

    async def create(self, draft: TodoDraft) -> Result[None, str]:
        payload = draft.to_payload()
        return await self._board.run_command(
            "save ToDo", lambda token: self._api.create(TODOS, payload, token)
        )

    async def update(self, document_id: str, draft: TodoDraft) -> Result[None, str]:
        if not document_id:
            return Err("Missing ToDo id")
        payload = draft.to_payload()
        return await self._board.run_command(
            "save ToDo", lambda token: self._api.update(TODOS, document_id, payload, token)
        )

    async def delete(self, document_id: str) -> Result[None, str]:
        """Delete a todo. Callers must have confirmed with the user first."""
        if not document_id:
            return Err("Missing ToDo id")
        return await self._board.run_command(
            "delete ToDo", lambda token: self._api.delete(TODOS, document_id, token)
        )

    async def move(self, document_id: str, position: str | TodoPosition) -> Result[None, str]:
        """Kanban move: update only the position of a todo."""
        target = parse_position(position)
        if target is None:
            return Err(f"Unknown position: {position}")
        current = next(
            (t for t in self._board.snapshot.todos if t.document_id == document_id), None
        )
        if current is None:
            return Err(f"Could not find ToDo {document_id}")
        if current.position == target:
            return Ok(None)
        return await self._board.run_command(
            "update ToDo position",
            lambda token: self._api.update(TODOS, document_id, {"position": str(target)}, token),
        )
