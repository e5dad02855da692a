"""Auth service: login, logout and the current session object."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from result import Err, Ok, Result

from taskboard.data.api import ApiError
from taskboard.models.auth import ROLE_DEFAULT, AuthSession, User
from taskboard.services._row_helpers import row_int

if TYPE_CHECKING:
    from taskboard.data.protocols import BackendProtocol, SessionStoreProtocol

logger = logging.getLogger(__name__)


class AuthService:
    """Owns the ``AuthSession``: loaded on start, replaced on login, cleared on logout."""

    def __init__(self, api: BackendProtocol, store: SessionStoreProtocol) -> None:
        self._api = api
        self._store = store
        self._session = AuthSession()

    @property
    def session(self) -> AuthSession:
        return self._session

    async def start(self) -> AuthSession:
        """Restore the persisted session, if any."""
        self._session = await self._store.load()
        if self._session.is_authenticated:
            user = self._session.user
            logger.info("Restored session for %s", user.display_name if user else "unknown user")
        return self._session

    async def login(self, identifier: str, password: str) -> Result[AuthSession, str]:
        """Authenticate, then resolve the user's role with a second request."""
        if not identifier.strip() or not password:
            return Err("Identifier and password are required")
        try:
            body = await self._api.login(identifier.strip(), password)
            token = str(body.get("jwt") or "")
            raw_user = body.get("user")
            user_id = row_int(raw_user, "id") if isinstance(raw_user, dict) else None
            if not token or user_id is None:
                return Err("Login failed: malformed response")
            full_user = await self._api.get_user_with_role(user_id, token)
            user = User.model_validate(full_user)
        except ApiError as exc:
            logger.warning("Login failed for %s: %s", identifier, exc)
            return Err("Login failed! Check your credentials.")
        except ValidationError as exc:
            logger.warning("Login returned an unreadable user: %s", exc)
            return Err("Login failed: malformed response")

        role = (user.role or ROLE_DEFAULT).lower()
        session = AuthSession(token=token, user=user.model_copy(update={"role": role}), role=role)
        await self._store.save(session)
        self._session = session
        logger.info("Logged in as %s | Role: %s", user.username, role)
        return Ok(session)

    async def logout(self) -> None:
        self._session = AuthSession()
        await self._store.clear()
