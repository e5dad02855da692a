"""Pydantic models for Taskboard."""

from taskboard.models.analytics import ContributorStat, DashboardStats, ProjectView, StatusCounts
from taskboard.models.auth import (
    ROLE_DEFAULT,
    ROLE_MANAGER,
    ROLE_SPECIALIST,
    AuthSession,
    LoginResult,
    User,
)
from taskboard.models.board import BoardSnapshot
from taskboard.models.drafts import ProjectDraft, TodoDraft
from taskboard.models.filters import ALL, ProjectFilter, TodoFilter
from taskboard.models.projects import Client, Project, ProjectRef
from taskboard.models.statuses import (
    PROJECT_STATUS_STYLES,
    TODO_POSITION_STYLES,
    ProjectStatus,
    TodoPosition,
    status_color,
)
from taskboard.models.timeline import ClientGroup, TimelineBar, TimelineLayout, TimelineView
from taskboard.models.todos import Todo, UserRef

__all__ = [
    "ALL",
    "AuthSession",
    "BoardSnapshot",
    "Client",
    "ClientGroup",
    "ContributorStat",
    "DashboardStats",
    "LoginResult",
    "Project",
    "ProjectDraft",
    "ProjectFilter",
    "ProjectRef",
    "ProjectStatus",
    "ProjectView",
    "StatusCounts",
    "TimelineBar",
    "TimelineLayout",
    "TimelineView",
    "Todo",
    "TodoDraft",
    "TodoFilter",
    "TodoPosition",
    "User",
    "UserRef",
    "PROJECT_STATUS_STYLES",
    "ROLE_DEFAULT",
    "ROLE_MANAGER",
    "ROLE_SPECIALIST",
    "TODO_POSITION_STYLES",
    "status_color",
]
