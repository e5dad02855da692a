"""User and login-session models."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from taskboard.models.fields import BACKEND_MODEL_CONFIG, Text

ROLE_MANAGER = "backoffice manager"
ROLE_SPECIALIST = "backoffice specialist"
ROLE_DEFAULT = "authenticated"


class User(BaseModel):
    """A backend user. ``role`` is the lowercased role name when populated."""

    model_config = BACKEND_MODEL_CONFIG

    id: int
    username: Text = ""
    email: Text = ""
    role: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_role(cls, data: object) -> object:
        # GET /users/:id?populate=role embeds the role as {"name": ...}
        if isinstance(data, dict) and isinstance(data.get("role"), dict):
            data = {**data, "role": data["role"].get("name")}
        return data

    @property
    def display_name(self) -> str:
        return self.username or self.email or "User"


class AuthSession(BaseModel):
    """Credentials of the signed-in user. An empty token means guest."""

    token: str = ""
    user: User | None = None
    role: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def normalized_role(self) -> str:
        return self.role.strip().lower()

    @property
    def is_superuser(self) -> bool:
        return self.is_authenticated and self.normalized_role == ROLE_MANAGER

    @property
    def is_specialist(self) -> bool:
        return self.is_authenticated and self.normalized_role == ROLE_SPECIALIST

    @property
    def can_view_projects(self) -> bool:
        """Projects and timeline pages."""
        return self.is_superuser or self.is_specialist

    @property
    def can_view_kanban(self) -> bool:
        return self.is_superuser

    @property
    def can_edit_projects(self) -> bool:
        """Project create/edit/clone/delete and spreadsheet export."""
        return self.is_superuser


class LoginResult(BaseModel):
    """Parsed ``POST /auth/local`` response."""

    jwt: str
    user: User
