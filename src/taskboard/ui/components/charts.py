"""Dashboard charts using Plotly."""

from __future__ import annotations

from nicegui import ui

from taskboard.models.analytics import ContributorStat, StatusCounts
from taskboard.ui.theme import CHART_COLORS, COLORS

_LAYOUT_BASE = {
    "paper_bgcolor": "rgba(0,0,0,0)",
    "plot_bgcolor": "rgba(0,0,0,0)",
    "font": {"color": COLORS["text"]},
    "margin": {"t": 40, "b": 40, "l": 40, "r": 20},
}


def render_todo_breakdown(counts: StatusCounts, title: str = "Todos Breakdown") -> None:
    """Render a pie chart of todos per status column."""
    if counts.total == 0:
        ui.label("No todos yet").classes("text-sm opacity-60")
        return

    fig = {
        "data": [
            {
                "labels": ["To Do", "In Progress", "Done"],
                "values": [counts.todo, counts.in_progress, counts.done],
                "type": "pie",
                "marker": {"colors": CHART_COLORS},
                "textinfo": "label+value",
            }
        ],
        "layout": {
            **_LAYOUT_BASE,
            "title": title,
            "showlegend": True,
            "legend": {"orientation": "h", "y": -0.1},
        },
    }
    ui.plotly(fig).classes("w-full h-80")


def render_leaderboard(rows: list[ContributorStat], title: str = "Top Contributors") -> None:
    """Render done vs. assigned todos per user as grouped bars."""
    if not rows:
        ui.label("No contributors yet").classes("text-sm opacity-60")
        return

    names = [row.name for row in rows]
    fig = {
        "data": [
            {
                "x": names,
                "y": [row.total for row in rows],
                "name": "Assigned",
                "type": "bar",
                "marker": {"color": CHART_COLORS[1]},
            },
            {
                "x": names,
                "y": [row.done for row in rows],
                "name": "Done",
                "type": "bar",
                "marker": {"color": CHART_COLORS[2]},
            },
        ],
        "layout": {
            **_LAYOUT_BASE,
            "title": title,
            "barmode": "group",
            "yaxis": {"title": "Todos"},
            "legend": {"orientation": "h", "y": -0.2},
        },
    }
    ui.plotly(fig).classes("w-full h-80")
