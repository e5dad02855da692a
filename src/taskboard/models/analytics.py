"""Dashboard rollup models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from taskboard.models.projects import Project
from taskboard.models.statuses import ProjectStatus
from taskboard.models.todos import Todo


class StatusCounts(BaseModel):
    """Three-way split of items by status."""

    todo: int = 0
    in_progress: int = 0
    done: int = 0

    @property
    def total(self) -> int:
        return self.todo + self.in_progress + self.done


class ContributorStat(BaseModel):
    """Leaderboard row for one user."""

    user_id: int
    name: str
    total: int = 0
    done: int = 0


class ProjectView(BaseModel):
    """A project joined with its todos and the client-side derived fields."""

    project: Project
    todos: list[Todo] = Field(default_factory=list)
    status: ProjectStatus = ProjectStatus.NO_TODOS
    progress: int = 0

    @property
    def id(self) -> int:
        return self.project.id

    @property
    def name(self) -> str:
        return self.project.name


class DashboardStats(BaseModel):
    """Everything the dashboard renders, recomputed on every refresh."""

    projects: StatusCounts = Field(default_factory=StatusCounts)
    projects_without_todos: int = 0
    todos: StatusCounts = Field(default_factory=StatusCounts)
    user_count: int = 0
    overdue: list[Todo] = Field(default_factory=list)
    leaderboard: list[ContributorStat] = Field(default_factory=list)

    @property
    def overdue_count(self) -> int:
        return len(self.overdue)
