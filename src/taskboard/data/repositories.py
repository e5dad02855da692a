"""Repository layer for the persisted login session."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import ValidationError

from taskboard.models.auth import AuthSession, User

if TYPE_CHECKING:
    from taskboard.data.db import Database

logger = logging.getLogger(__name__)

_SLOT = "current"


class AuthSessionRepository:
    """Loads, saves and clears the single stored ``AuthSession``."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def load(self) -> AuthSession:
        """Return the stored session, or a guest session when none is stored."""
        row = await self._db.fetch_one(
            "SELECT token, user_json, role FROM auth_session WHERE slot = ?", (_SLOT,)
        )
        if row is None:
            return AuthSession()

        user: User | None = None
        if row["user_json"]:
            try:
                user = User.model_validate(json.loads(row["user_json"]))
            except (ValueError, ValidationError):
                logger.warning("Discarding unreadable stored user record")
        return AuthSession(token=row["token"] or "", user=user, role=row["role"] or "")

    async def save(self, session: AuthSession) -> None:
        """Store ``session``; a guest session clears the slot instead."""
        if not session.is_authenticated:
            await self.clear()
            return
        user_json = session.user.model_dump_json() if session.user else None
        await self._db.execute(
            """INSERT OR REPLACE INTO auth_session (slot, token, user_json, role, saved_at)
               VALUES (?, ?, ?, ?, ?)""",
            (_SLOT, session.token, user_json, session.role, datetime.now(tz=UTC).isoformat()),
        )
        await self._db.commit()

    async def clear(self) -> None:
        await self._db.execute("DELETE FROM auth_session WHERE slot = ?", (_SLOT,))
        await self._db.commit()
