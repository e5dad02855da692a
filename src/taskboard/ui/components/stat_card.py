"""Stat card component with an animated counter."""

from __future__ import annotations

from nicegui import ui

from taskboard.ui.theme import COLORS, COUNTER_FRAME_MS, counter_frames


def stat_card(label: str, value: int, icon: str = "info", color: str = "") -> None:
    """Render a statistic card whose value counts up from zero."""
    icon_color = color or COLORS["primary"]
    frames = counter_frames(value)
    with (
        ui.card()
        .classes("p-4 flex-1 min-w-48")
        .style(f"background-color: {COLORS['surface']}; border: 1px solid {COLORS['border']}")
    ):
        with ui.row().classes("items-center gap-3"):
            ui.icon(icon).classes("text-3xl").style(f"color: {icon_color}")
            with ui.column().classes("gap-0"):
                number = ui.label("0" if len(frames) > 1 else str(value))
                number.classes("text-2xl font-bold")
                ui.label(label).classes("text-xs").style(f"color: {COLORS['text_muted']}")

    if len(frames) <= 1:
        return
    pending = iter(frames)

    def tick() -> None:
        shown = next(pending, None)
        if shown is None:
            timer.deactivate()
            return
        number.set_text(str(shown))

    timer = ui.timer(COUNTER_FRAME_MS / 1000, tick)
