"""Tests for timeline window, paging, zoom and bar geometry."""

from __future__ import annotations

from datetime import date

import pytest
from conftest import CLIENT_ROWS, PROJECT_ROWS, TODO_ROWS

from taskboard.models.analytics import ProjectView
from taskboard.models.projects import Client, Project
from taskboard.models.timeline import TimelineView
from taskboard.models.todos import Todo
from taskboard.services.rollup import build_project_views
from taskboard.services.timeline import (
    MAX_ZOOM,
    MIN_ZOOM,
    TIMELINE_WIDTH_PX,
    compute_timeline,
    day_labels,
    step_reference,
    visible_range,
    zoom_in,
    zoom_out,
)


def _views() -> list[ProjectView]:
    return build_project_views(
        [Project.model_validate(p) for p in PROJECT_ROWS],
        [Todo.model_validate(t) for t in TODO_ROWS],
    )


def _clients() -> list[Client]:
    return [Client.model_validate(c) for c in CLIENT_ROWS]


def test_month_range_spans_first_to_last_day() -> None:
    assert visible_range(date(2026, 2, 14), TimelineView.MONTH) == (
        date(2026, 2, 1),
        date(2026, 2, 28),
    )
    assert visible_range(date(2028, 2, 3), "month")[1] == date(2028, 2, 29)


def test_week_range_is_seven_days_either_side() -> None:
    assert visible_range(date(2026, 10, 19), TimelineView.WEEK) == (
        date(2026, 10, 12),
        date(2026, 10, 26),
    )


@pytest.mark.parametrize(
    ("reference", "view", "direction", "expected"),
    [
        (date(2026, 1, 31), "month", 1, date(2026, 2, 28)),
        (date(2026, 3, 31), "month", -1, date(2026, 2, 28)),
        (date(2026, 12, 15), "month", 1, date(2027, 1, 15)),
        (date(2026, 10, 19), "week", 1, date(2026, 10, 26)),
        (date(2026, 10, 19), "week", -1, date(2026, 10, 12)),
    ],
)
def test_step_reference(reference: date, view: str, direction: int, expected: date) -> None:
    assert step_reference(reference, view, direction) == expected


def test_zoom_steps_are_clamped() -> None:
    assert zoom_in(1.0) == 1.25
    assert zoom_out(1.0) == 0.75
    assert zoom_in(MAX_ZOOM) == MAX_ZOOM
    assert zoom_out(MIN_ZOOM) == MIN_ZOOM


def test_full_month_project_fills_the_width() -> None:
    layout = compute_timeline(
        reference=date(2026, 10, 19),
        view=TimelineView.MONTH,
        zoom=1.0,
        today=date(2026, 10, 19),
        clients=_clients(),
        projects=_views(),
    )
    assert layout.range_start == date(2026, 10, 1)
    assert layout.total_days == 30
    assert layout.pixels_per_day == pytest.approx(TIMELINE_WIDTH_PX / 30)
    assert layout.today_px == pytest.approx(18 * TIMELINE_WIDTH_PX / 30)

    acme = layout.groups[0]
    website = next(b for b in acme.bars if b.view.name == "Website")
    assert website.left_px == 0
    assert website.width_px == pytest.approx(TIMELINE_WIDTH_PX)


def test_bars_starting_before_the_window_are_pinned_to_the_left_edge() -> None:
    layout = compute_timeline(
        reference=date(2026, 10, 19),
        view="month",
        zoom=2.0,
        today=date(2026, 10, 19),
        clients=_clients(),
        projects=_views(),
    )
    app_bar = next(b for b in layout.groups[1].bars if b.view.name == "Mobile App")
    assert app_bar.offset_days == 0
    assert app_bar.duration_days == 61
    assert layout.content_width_px == pytest.approx(2 * TIMELINE_WIDTH_PX)


def test_today_before_window_clamps_marker_to_zero() -> None:
    layout = compute_timeline(
        reference=date(2027, 3, 10),
        view="week",
        zoom=1.0,
        today=date(2026, 10, 19),
        clients=[],
        projects=[],
    )
    assert layout.today_px == 0
    assert layout.groups == []


def test_projects_are_listed_under_every_client() -> None:
    layout = compute_timeline(
        reference=date(2026, 10, 19),
        view="month",
        zoom=1.0,
        today=date(2026, 10, 19),
        clients=_clients(),
        projects=_views(),
    )
    grouped = {g.client.name: [b.view.name for b in g.bars] for g in layout.groups}
    assert grouped == {"Acme": ["Website", "Mobile App"], "Globex": ["Mobile App"]}


def test_out_of_range_zoom_is_clamped_in_layout() -> None:
    layout = compute_timeline(
        reference=date(2026, 10, 19),
        view="month",
        zoom=10.0,
        today=date(2026, 10, 19),
        clients=[],
        projects=[],
    )
    assert layout.zoom == MAX_ZOOM


def test_day_labels_include_both_ends() -> None:
    assert day_labels(date(2026, 10, 30), 2) == ["Oct 30", "Oct 31", "Nov 1"]
