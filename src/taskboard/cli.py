"""Typer CLI for Taskboard: serve, summary, export, login and logout commands."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from result import Err

from taskboard.config import DEFAULT_API_URL, Config

EXPORT_NOT_PERMITTED = "Only a backoffice manager can export projects"

app = typer.Typer(
    name="taskboard",
    help="Taskboard: project and task dashboard over a CMS backend.",
    invoke_without_command=True,
)

ApiUrlOption = Annotated[
    str,
    typer.Option("--api-url", envvar="TASKBOARD_API_URL", help="Backend API base URL"),
]
CacheDirOption = Annotated[
    Path | None,
    typer.Option("--cache-dir", help="Directory for the stored login session"),
]


class ExportKind(StrEnum):
    TODOS = "todos"
    PROJECTS = "projects"


def _config(api_url: str, cache_dir: Path | None) -> Config:
    if cache_dir is None:
        return Config(api_url=api_url)
    return Config(api_url=api_url, cache_dir=cache_dir)


@app.callback(invoke_without_command=True)
def serve(
    ctx: typer.Context,
    api_url: ApiUrlOption = DEFAULT_API_URL,
    cache_dir: CacheDirOption = None,
    port: Annotated[int, typer.Option("--port", help="Port for the web UI")] = 8765,
) -> None:
    """Start the Taskboard web application."""
    if ctx.invoked_subcommand is not None:
        return
    from taskboard.ui.app import run_app

    run_app(replace(_config(api_url, cache_dir), port=port))


@app.command()
def summary(api_url: ApiUrlOption = DEFAULT_API_URL, cache_dir: CacheDirOption = None) -> None:
    """Print dashboard counters and the contributor leaderboard."""
    asyncio.run(_do_summary(_config(api_url, cache_dir)))


@app.command()
def export(
    kind: Annotated[ExportKind, typer.Argument(help="What to export")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Destination file")],
    api_url: ApiUrlOption = DEFAULT_API_URL,
    cache_dir: CacheDirOption = None,
) -> None:
    """Export todos as CSV or projects as an xlsx spreadsheet."""
    asyncio.run(_do_export(_config(api_url, cache_dir), kind, output))


@app.command()
def login(
    identifier: Annotated[str, typer.Option("--identifier", prompt=True)],
    password: Annotated[str, typer.Option("--password", prompt=True, hide_input=True)],
    api_url: ApiUrlOption = DEFAULT_API_URL,
    cache_dir: CacheDirOption = None,
) -> None:
    """Sign in and store the session for later commands."""
    asyncio.run(_do_login(_config(api_url, cache_dir), identifier, password))


@app.command()
def logout(api_url: ApiUrlOption = DEFAULT_API_URL, cache_dir: CacheDirOption = None) -> None:
    """Forget the stored session."""
    asyncio.run(_do_logout(_config(api_url, cache_dir)))


async def _do_summary(config: Config) -> None:
    from taskboard.services.container import ServiceContainer

    container = await ServiceContainer.create(config)
    try:
        loaded = await container.board_service.refresh()
        if isinstance(loaded, Err):
            typer.echo(loaded.err_value, err=True)
            raise typer.Exit(code=1)
        stats = container.board_service.dashboard_stats()
    finally:
        await container.close()

    typer.echo(
        f"Projects  todo={stats.projects.todo} in-progress={stats.projects.in_progress} "
        f"done={stats.projects.done} no-todos={stats.projects_without_todos}"
    )
    typer.echo(
        f"Todos     todo={stats.todos.todo} in-progress={stats.todos.in_progress} "
        f"done={stats.todos.done}"
    )
    typer.echo(f"Users     {stats.user_count}")
    typer.echo(f"Overdue   {stats.overdue_count}")
    for todo in stats.overdue:
        typer.echo(f"  - {todo.title} ({todo.position}) due {todo.due_date}")
    if stats.leaderboard:
        typer.echo("Top contributors:")
        for row in stats.leaderboard:
            typer.echo(f"  {row.name}: {row.done}/{row.total} done")


async def _do_export(config: Config, kind: ExportKind, output: Path) -> None:
    from taskboard.services.container import ServiceContainer

    container = await ServiceContainer.create(config)
    try:
        if kind is ExportKind.PROJECTS and not container.auth_service.session.can_edit_projects:
            typer.echo(EXPORT_NOT_PERMITTED, err=True)
            raise typer.Exit(code=1)
        loaded = await container.board_service.refresh()
        if isinstance(loaded, Err):
            typer.echo(loaded.err_value, err=True)
            raise typer.Exit(code=1)
        exporter = container.export_service
        if kind is ExportKind.TODOS:
            csv_result = exporter.export_todos_csv(loaded.ok_value.todos)
            if isinstance(csv_result, Err):
                typer.echo(csv_result.err_value, err=True)
                raise typer.Exit(code=1)
            output.write_text(csv_result.ok_value, encoding="utf-8")
        else:
            xlsx_result = exporter.export_projects_xlsx(container.board_service.project_views())
            if isinstance(xlsx_result, Err):
                typer.echo(xlsx_result.err_value, err=True)
                raise typer.Exit(code=1)
            output.write_bytes(xlsx_result.ok_value)
    finally:
        await container.close()
    typer.echo(f"Wrote {output}")


async def _do_login(config: Config, identifier: str, password: str) -> None:
    from taskboard.services.container import ServiceContainer

    container = await ServiceContainer.create(config)
    try:
        result = await container.auth_service.login(identifier, password)
    finally:
        await container.close()
    if isinstance(result, Err):
        typer.echo(result.err_value, err=True)
        raise typer.Exit(code=1)
    session = result.ok_value
    name = session.user.display_name if session.user else identifier
    typer.echo(f"Logged in as {name} ({session.role})")


async def _do_logout(config: Config) -> None:
    from taskboard.services.container import ServiceContainer

    container = await ServiceContainer.create(config)
    try:
        await container.auth_service.logout()
    finally:
        await container.close()
    typer.echo("Logged out")
