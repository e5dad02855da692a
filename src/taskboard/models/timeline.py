"""Timeline (Gantt) layout models."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

from taskboard.models.analytics import ProjectView
from taskboard.models.projects import Client


class TimelineView(StrEnum):
    MONTH = "month"
    WEEK = "week"


class TimelineBar(BaseModel):
    """Pixel geometry of one project bar."""

    view: ProjectView
    offset_days: int
    duration_days: int
    left_px: float
    width_px: float


class ClientGroup(BaseModel):
    """Projects listed under one client. A project may appear in several groups."""

    client: Client
    bars: list[TimelineBar] = Field(default_factory=list)


class TimelineLayout(BaseModel):
    """Computed geometry for the visible timeline window."""

    range_start: date
    range_end: date
    total_days: int
    zoom: float
    pixels_per_day: float
    today_px: float
    day_labels: list[str] = Field(default_factory=list)
    groups: list[ClientGroup] = Field(default_factory=list)

    @property
    def content_width_px(self) -> float:
        return self.pixels_per_day * self.total_days
