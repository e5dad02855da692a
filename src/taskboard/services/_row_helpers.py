"""Shared payload-to-model conversion helpers for service modules."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_records(model: type[M], rows: Iterable[dict[str, Any]]) -> list[M]:
    """Validate backend records, skipping (and logging) any that do not fit ``model``."""
    parsed: list[M] = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed %s record id=%s: %s",
                model.__name__,
                row.get("id"),
                exc.errors()[0]["msg"] if exc.errors() else exc,
            )
    return parsed


def row_int(row: dict[str, Any], key: str) -> int | None:
    """Extract an optional integer id from a backend record."""
    v = row.get(key)
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        try:
            return int(v)
        except ValueError:
            return None
    return None
