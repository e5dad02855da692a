"""Theme, color definitions and display formatting utilities."""

from __future__ import annotations

import math
from datetime import date
from fractions import Fraction

# ── Color palette: light theme with blue accents ──

COLORS = {
    "primary": "#2563EB",
    "secondary": "#60A5FA",
    "accent": "#F59E0B",
    "success": "#22C55E",
    "warning": "#EAB308",
    "error": "#EF4444",
    "bg": "#F9FAFB",
    "surface": "#FFFFFF",
    "border": "#E5E7EB",
    "text": "#1F2937",
    "text_muted": "#6B7280",
    "timeline_track": "#F1F5F9",
    "today_marker": "#DC2626",
}

CHART_COLORS = ["#f87171", "#60a5fa", "#4ade80"]

COUNTER_DURATION_MS = 800
COUNTER_FRAME_MS = 20


def counter_frames(
    value: int, duration_ms: int = COUNTER_DURATION_MS, frame_ms: int = COUNTER_FRAME_MS
) -> list[int]:
    """Values shown by the animated stat counter, one per frame, ending at ``value``.

    Each frame adds ``value / (duration / frame)`` and displays the ceiling,
    so the last frame is exactly ``value``.
    """
    if value <= 0:
        return [value]
    steps = max(1, duration_ms // frame_ms)
    return [math.ceil(Fraction(value * i, steps)) for i in range(1, steps + 1)]


def format_date(value: date | None, empty: str = "N/A") -> str:
    """ISO date or a placeholder."""
    return value.isoformat() if value else empty


def format_due(due: date | None, today: date) -> str:
    """Human-friendly due label, e.g. "Due today", "Due in 3d", "2d overdue"."""
    if due is None:
        return "No due date"
    delta = (due - today).days
    if delta == 0:
        return "Due today"
    if delta > 0:
        return f"Due in {delta}d"
    return f"{-delta}d overdue"


def role_label(role: str) -> str:
    """Title-case a lowercased role name for the header badge."""
    return role.strip().title() if role.strip() else "Guest"
