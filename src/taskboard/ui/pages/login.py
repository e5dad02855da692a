"""Login page."""

from __future__ import annotations

from nicegui import ui
from result import Err

from taskboard.ui.deps import get_services
from taskboard.ui.theme import COLORS


def setup() -> None:
    """Register the login page."""

    @ui.page("/login")
    async def login_page() -> None:
        svc = get_services()
        if svc.auth_service.session.is_authenticated:
            ui.navigate.to("/")
            return

        with ui.column().classes("w-full items-center justify-center min-h-screen"):
            with (
                ui.card()
                .classes("w-96 p-6 gap-3")
                .style(f"background-color: {COLORS['surface']}")
            ):
                ui.label("Sign in").classes("text-2xl font-bold")
                identifier = ui.input("Email or username").classes("w-full")
                password = ui.input(
                    "Password", password=True, password_toggle_button=True
                ).classes("w-full")
                message = ui.label("").style(f"color: {COLORS['error']}")

                async def do_login() -> None:
                    button.disable()
                    try:
                        result = await svc.auth_service.login(
                            identifier.value or "", password.value or ""
                        )
                    finally:
                        button.enable()
                    if isinstance(result, Err):
                        message.set_text(result.err_value)
                        return
                    ui.navigate.to("/")

                password.on("keydown.enter", do_login)
                button = ui.button("Login", on_click=do_login).classes("w-full")
