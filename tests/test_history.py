"""Tests for description-history editing helpers."""

from __future__ import annotations

from datetime import datetime

from taskboard.services.history import (
    append_entry,
    format_entry,
    join_history,
    move_entry,
    remove_entry,
    split_history,
)

WHEN = datetime(2026, 10, 19, 14, 5, 9)


def test_format_entry_prefixes_timestamp() -> None:
    assert format_entry("  called client ", WHEN) == "[2026-10-19 14:05:09] called client"


def test_append_entry_to_empty_and_existing_history() -> None:
    first = append_entry("", "kickoff", WHEN)
    assert first == "[2026-10-19 14:05:09] kickoff"
    second = append_entry(first, "follow-up", WHEN)
    assert split_history(second) == [
        "[2026-10-19 14:05:09] kickoff",
        "[2026-10-19 14:05:09] follow-up",
    ]


def test_blank_note_leaves_history_unchanged() -> None:
    assert append_entry("a\nb", "   ", WHEN) == "a\nb"


def test_remove_entry_and_out_of_range_index() -> None:
    assert remove_entry("a\nb\nc", 1) == "a\nc"
    assert remove_entry("a\nb\nc", 5) == "a\nb\nc"
    assert remove_entry("only", 0) == ""


def test_move_entry_clamps_to_ends() -> None:
    assert move_entry("a\nb\nc", 2, -1) == "a\nc\nb"
    assert move_entry("a\nb\nc", 0, -1) == "a\nb\nc"
    assert move_entry("a\nb\nc", 0, 10) == "b\nc\na"
    assert move_entry("a\nb\nc", -1, 1) == "a\nb\nc"


def test_split_and_join_are_inverse_for_lines() -> None:
    assert split_history("") == []
    assert join_history(split_history("x\ny")) == "x\ny"
