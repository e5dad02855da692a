"""NiceGUI application bootstrap: service init, page registration, run_app()."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nicegui import app, ui

from taskboard.services.container import ServiceContainer
from taskboard.ui.deps import get_services, set_services
from taskboard.ui.pages import dashboard, kanban, login, projects, timeline, todos

if TYPE_CHECKING:
    from taskboard.config import Config

logger = logging.getLogger(__name__)

PAGE_MODULES = (login, dashboard, projects, todos, kanban, timeline)


def register_pages() -> None:
    for module in PAGE_MODULES:
        module.setup()


def run_app(config: Config) -> None:
    """Build services on startup and serve the web UI until interrupted."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    async def startup() -> None:
        logger.info("Connecting to %s", config.base_url)
        set_services(await ServiceContainer.create(config))

    async def shutdown() -> None:
        try:
            container = get_services()
        except RuntimeError:
            return
        await container.close()

    app.on_startup(startup)
    app.on_shutdown(shutdown)
    register_pages()

    ui.run(
        host=config.host,
        port=config.port,
        title="Taskboard",
        reload=False,
        show=False,
    )
