"""Helpers for the newline-joined description history of a todo.

The saved value is one opaque string; the edit form works on its lines.
"""

from __future__ import annotations

from datetime import datetime

HISTORY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def split_history(history: str) -> list[str]:
    if not history:
        return []
    return history.split("\n")


def join_history(entries: list[str]) -> str:
    return "\n".join(entries)


def format_entry(note: str, when: datetime | None = None) -> str:
    moment = when or datetime.now()
    return f"[{moment.strftime(HISTORY_TIMESTAMP_FORMAT)}] {note.strip()}"


def append_entry(history: str, note: str, when: datetime | None = None) -> str:
    """Append a timestamped entry; blank notes leave the history unchanged."""
    if not note.strip():
        return history
    entry = format_entry(note, when)
    return f"{history}\n{entry}" if history else entry


def remove_entry(history: str, index: int) -> str:
    """Drop the line at ``index``; out-of-range indexes are ignored."""
    entries = split_history(history)
    if not 0 <= index < len(entries):
        return history
    del entries[index]
    return join_history(entries)


def move_entry(history: str, index: int, offset: int) -> str:
    """Move the line at ``index`` by ``offset`` positions, clamped to the ends."""
    entries = split_history(history)
    if not 0 <= index < len(entries):
        return history
    target = max(0, min(len(entries) - 1, index + offset))
    entry = entries.pop(index)
    entries.insert(target, entry)
    return join_history(entries)
