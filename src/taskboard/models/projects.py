"""Project and client models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from taskboard.models.fields import BACKEND_MODEL_CONFIG, OptionalDate, Text


class Client(BaseModel):
    """A client a project is delivered for."""

    model_config = BACKEND_MODEL_CONFIG

    id: int
    document_id: str = Field(default="", alias="documentId")
    name: Text = Field(default="", alias="Client")

    def matches(self, key: str) -> bool:
        """True if ``key`` is this client's document id or numeric id."""
        return key in (self.document_id, str(self.id))


class ProjectRef(BaseModel):
    """A project as embedded in a todo payload."""

    model_config = BACKEND_MODEL_CONFIG

    id: int
    document_id: str = Field(default="", alias="documentId")
    name: Text = ""


class Project(BaseModel):
    """A project record as returned by ``GET /projects?populate=*``."""

    model_config = BACKEND_MODEL_CONFIG

    id: int
    document_id: str = Field(default="", alias="documentId")
    name: Text = ""
    description: Text = ""
    start_date: OptionalDate = Field(default=None, alias="startDate")
    end_date: OptionalDate = Field(default=None, alias="endDate")
    clients: list[Client] = Field(default_factory=list)

    @property
    def client_names(self) -> str:
        return ", ".join(c.name for c in self.clients) or "N/A"

    def has_client(self, key: str) -> bool:
        return any(c.matches(key) for c in self.clients)
