"""Reusable annotated field types for backend payloads."""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from typing import Annotated

from pydantic import BeforeValidator, ConfigDict


def coerce_date(value: object) -> date | None:
    """Parse a backend date value, accepting ``YYYY-MM-DD`` or full ISO timestamps.

    Empty strings and ``None`` become ``None``; anything unparseable raises
    ``ValueError`` so pydantic reports it against the field.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    msg = f"Unsupported date value: {value!r}"
    raise ValueError(msg)


def coerce_instant(value: object) -> datetime | None:
    """Parse a backend due value into an aware UTC-comparable instant.

    A bare ``YYYY-MM-DD`` is midnight UTC of that day; a full ISO timestamp
    keeps its time and offset, and a naive timestamp is read as UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        moment = datetime.fromisoformat(value.strip())
    else:
        msg = f"Unsupported timestamp value: {value!r}"
        raise ValueError(msg)
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


def coerce_text(value: object) -> str:
    """Backend text fields may be ``null``; normalize to an empty string."""
    if value is None:
        return ""
    return str(value)


OptionalDate = Annotated[date | None, BeforeValidator(coerce_date)]
RequiredDate = Annotated[date, BeforeValidator(coerce_date)]
OptionalInstant = Annotated[datetime | None, BeforeValidator(coerce_instant)]
Text = Annotated[str, BeforeValidator(coerce_text)]

BACKEND_MODEL_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")
