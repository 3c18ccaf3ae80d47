"""Quick-navigation bar built from route placement flags."""

from __future__ import annotations

from typing import Iterable

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button

from ..navigation import Route


class NavBar(Horizontal):
    """One button per route; pressing a button posts ``NavBar.Selected``."""

    DEFAULT_CSS = """
    NavBar { height: auto; }
    NavBar Button { min-width: 8; margin-right: 1; }
    """

    class Selected(Message):
        def __init__(self, route_key: str) -> None:
            self.route_key = route_key
            super().__init__()

    def __init__(self, routes: Iterable[Route], *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._nav_routes = list(routes)

    def compose(self) -> ComposeResult:
        for route in self._nav_routes:
            label = f"{route.icon} {route.label}".strip()
            yield Button(label, id=f"nav-{route.key}", classes="nav-item")

    def set_active(self, route_key: str) -> None:
        for button in self.query(Button):
            button.variant = "primary" if button.id == f"nav-{route_key}" else "default"

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("nav-"):
            event.stop()
            self.post_message(self.Selected(button_id[4:]))
