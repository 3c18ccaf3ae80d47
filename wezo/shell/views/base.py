"""Base view mounted into the shell outlet for a committed route."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Label, Static

if TYPE_CHECKING:
    from ..controller import Location


class RouteView(Vertical):
    """Simple base view with a title and helper copy taken from its route."""

    DEFAULT_CSS = """
    RouteView { height: auto; padding: 1 2; }
    RouteView .view-title { text-style: bold; color: $accent; margin-bottom: 1; }
    RouteView .view-help { color: $text-muted; margin-bottom: 1; }
    """

    def __init__(self, location: "Location") -> None:
        super().__init__(classes=f"view-{location.key}")
        self.location = location

    @property
    def params(self) -> Mapping[str, Any]:
        return self.location.params

    def compose(self) -> ComposeResult:
        yield Label(self.location.route.label, classes="view-title")
        yield Static(self.location.route.description, classes="view-help")
        yield from self.compose_body()

    def compose_body(self) -> ComposeResult:
        return ()

    def navigate(self, route_key: str, params: Mapping[str, Any] | None = None) -> None:
        self.app.navigate(route_key, params)
