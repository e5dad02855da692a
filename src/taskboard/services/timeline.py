"""Timeline geometry: maps project date ranges onto a fixed-width pixel axis."""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from datetime import date, timedelta

from taskboard.models.analytics import ProjectView
from taskboard.models.projects import Client
from taskboard.models.timeline import ClientGroup, TimelineBar, TimelineLayout, TimelineView

TIMELINE_WIDTH_PX = 1000
MIN_ZOOM = 0.5
MAX_ZOOM = 3.0
ZOOM_STEP = 0.25
WEEK_SPAN_DAYS = 7


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return (end - start).days


def visible_range(reference: date, view: TimelineView | str) -> tuple[date, date]:
    """First and last visible day for the view around ``reference``."""
    if TimelineView(view) is TimelineView.MONTH:
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return reference.replace(day=1), reference.replace(day=last_day)
    span = timedelta(days=WEEK_SPAN_DAYS)
    return reference - span, reference + span


def add_months(reference: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month's length."""
    index = reference.year * 12 + reference.month - 1 + months
    year, month = divmod(index, 12)
    month += 1
    day = min(reference.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def step_reference(reference: date, view: TimelineView | str, direction: int) -> date:
    """Move the reference date one page backward (``-1``) or forward (``+1``)."""
    step = 1 if direction > 0 else -1
    if TimelineView(view) is TimelineView.MONTH:
        return add_months(reference, step)
    return reference + timedelta(days=WEEK_SPAN_DAYS * step)


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(zoom, MAX_ZOOM))


def zoom_in(zoom: float) -> float:
    return clamp_zoom(zoom + ZOOM_STEP)


def zoom_out(zoom: float) -> float:
    return clamp_zoom(zoom - ZOOM_STEP)


def pixels_per_day(total_days: int, zoom: float) -> float:
    return (TIMELINE_WIDTH_PX / total_days) * zoom


def project_bar(view: ProjectView, range_start: date, ppd: float) -> TimelineBar | None:
    """Geometry for one project, or ``None`` when it lacks a start or end date."""
    start = view.project.start_date
    end = view.project.end_date
    if start is None or end is None:
        return None
    offset_days = max(0, days_between(range_start, start))
    duration_days = max(1, days_between(start, end))
    return TimelineBar(
        view=view,
        offset_days=offset_days,
        duration_days=duration_days,
        left_px=offset_days * ppd,
        width_px=duration_days * ppd,
    )


def group_by_client(
    clients: Sequence[Client], views: Sequence[ProjectView], range_start: date, ppd: float
) -> list[ClientGroup]:
    """One group per client that has matching projects, in client order.

    A project linked to several clients is listed under each of them.
    """
    groups: list[ClientGroup] = []
    for client in clients:
        members = [v for v in views if v.project.has_client(client.document_id or str(client.id))]
        if not members:
            continue
        bars = [bar for v in members if (bar := project_bar(v, range_start, ppd)) is not None]
        groups.append(ClientGroup(client=client, bars=bars))
    return groups


def day_labels(range_start: date, total_days: int) -> list[str]:
    """Axis labels such as ``"Oct 19"``, one per day including both ends."""
    labels: list[str] = []
    for i in range(total_days + 1):
        day = range_start + timedelta(days=i)
        labels.append(f"{day:%b} {day.day}")
    return labels


def compute_timeline(
    *,
    reference: date,
    view: TimelineView | str,
    zoom: float,
    today: date,
    clients: Sequence[Client],
    projects: Sequence[ProjectView],
) -> TimelineLayout:
    """Compute the full layout for the visible window.

    The today marker is clamped to the left edge when today is before the
    visible range.
    """
    range_start, range_end = visible_range(reference, view)
    total_days = max(1, days_between(range_start, range_end))
    effective_zoom = clamp_zoom(zoom)
    ppd = pixels_per_day(total_days, effective_zoom)
    return TimelineLayout(
        range_start=range_start,
        range_end=range_end,
        total_days=total_days,
        zoom=effective_zoom,
        pixels_per_day=ppd,
        today_px=max(0, days_between(range_start, today)) * ppd,
        day_labels=day_labels(range_start, total_days),
        groups=group_by_client(clients, projects, range_start, ppd),
    )
