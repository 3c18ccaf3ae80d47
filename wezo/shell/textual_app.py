"""Textual-based application shell for the Wezo villa manager."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header

from ..config.settings import Settings, settings as default_settings
from ..services.error_mapper import map_exception
from .controller import (
    Location,
    NavigationController,
    NavigationEvent,
    NavigationResult,
    NavigationSuperseded,
    location_from_address,
)
from .dialogs import DialogError, DialogHost
from .hooks import install_default_hooks
from .navigation import NavigationError, RouteTable, filter_routes_by_role
from .paths import BasePath
from .routes import CONFIRM_BEFORE_ENTERING, build_route_table
from .screens import TextualDialogPresenter
from .services.state_store import StateStore
from .session import Session
from .widgets import Breadcrumb, NavBar, RoutePicker, StatusBar

logger = structlog.get_logger(__name__)


class WezoShellApp(App[None]):
    """Interactive shell: routed views, navigation hooks and promise dialogs."""

    CSS = """
    #breadcrumb {
        padding: 0 2;
    }

    #outlet {
        height: 1fr;
    }

    #footer-links {
        height: auto;
        padding: 0 1;
    }

    #status-bar {
        height: 1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("b", "navigate_back", "Back"),
        Binding("ctrl+k", "open_route_picker", "Palette"),
        Binding("question_mark", "show_support", "Help"),
        Binding("h", "show_home", "Home"),
        Binding("d", "show_dashboard", "Dashboard"),
    ]

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        session: Optional[Session] = None,
        routes: Optional[RouteTable] = None,
        address: Optional[str] = None,
        state_store: Optional[StateStore] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or default_settings
        shell = self.settings.shell
        self.session = session or Session()
        self.routes = routes or build_route_table()
        self.state_store = state_store or StateStore(shell.state_file)
        self.shell_state = self.state_store.load()

        if address is None and shell.restore_last_address:
            address = self.shell_state.last_address
        start = location_from_address(
            self.routes,
            address,
            fallback=shell.initial_route,
            base=BasePath.from_config(shell.base_path),
        )

        self.dialogs = DialogHost(
            TextualDialogPresenter(self), default_timeout=shell.dialog_timeout
        )
        self.navigation = NavigationController.from_settings(
            self.routes, shell, initial=start
        )
        install_default_hooks(
            self.navigation,
            session=self.session,
            dialogs=self.dialogs,
            app=self,
            app_name=shell.title,
            prompts=CONFIRM_BEFORE_ENTERING,
            store=self.state_store,
            state=self.shell_state,
        )
        self.navigation.subscribe(self._on_route_committed)
        self.title = f"{start.route.label} - {shell.title}"

    def compose(self) -> ComposeResult:
        yield Header()
        yield NavBar(self.routes.placed("header"), id="nav-bar")
        yield Breadcrumb(id="breadcrumb")
        yield VerticalScroll(id="outlet")
        yield NavBar(
            self.routes.placed("footer", limit=self.settings.shell.footer_max_items),
            id="footer-links",
        )
        yield StatusBar(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self._render_location(self.navigation.current)
        self.set_interval(0.5, self._refresh_status)

    def _on_route_committed(self, event: NavigationEvent) -> None:
        self._render_location(event.target)

    def _render_location(self, location: Location) -> None:
        outlet = self.query_one("#outlet", VerticalScroll)
        outlet.remove_children()
        outlet.mount(location.route.component(location))

        trail = [self.routes.require("home").label] if "home" in self.routes else []
        if location.key != "home":
            trail.append(location.route.label)
        self.query_one("#breadcrumb", Breadcrumb).set_trail(*trail)
        for nav in self.query(NavBar):
            nav.set_active(location.key)
        self._refresh_status()

    def _refresh_status(self) -> None:
        self.query_one("#status-bar", StatusBar).set_states(
            role=self.session.role or "Guest",
            phase=self.navigation.phase.value,
            dialogs=len(self.dialogs.active),
            address=self.navigation.address,
        )

    def _notify_error(self, error: BaseException) -> None:
        mapped = map_exception(error)
        message = f"{mapped.message}\n{mapped.hint}" if mapped.hint else mapped.message
        self.notify(message, title="Navigation", severity=mapped.severity)

    def navigate(self, route_key: str, params: Optional[Mapping[str, Any]] = None) -> None:
        """Request navigation from a UI action without blocking the message loop."""
        self.run_worker(self.navigate_and_report(route_key, params), group="navigation")

    async def navigate_and_report(
        self, route_key: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[NavigationResult]:
        try:
            result = await self.navigation.navigate_to(route_key, params)
        except NavigationSuperseded:
            return None
        except NavigationError as exc:
            logger.warning("Navigation failed", route=route_key, error=str(exc))
            self._notify_error(exc)
            return None
        finally:
            self._refresh_status()
        for warning in result.warnings:
            self.notify(warning, title="Navigation", severity="warning")
        return result

    async def _navigate_back(self) -> None:
        try:
            await self.navigation.navigate_back()
        except NavigationSuperseded:
            return
        except NavigationError as exc:
            self._notify_error(exc)

    async def _pick_route(self) -> None:
        routes = filter_routes_by_role(
            self.routes.placed("nav"), self.session.role, self.session.is_authenticated
        )
        try:
            route_key = await self.dialogs.open_dialog(
                lambda close: RoutePicker(routes, close)
            )
        except DialogError as exc:
            self._notify_error(exc)
            return
        if route_key:
            await self.navigate_and_report(route_key)

    def on_nav_bar_selected(self, message: NavBar.Selected) -> None:
        self.navigate(message.route_key)

    def action_navigate_back(self) -> None:
        if not self.navigation.can_navigate_back:
            self.notify("Nothing to go back to.", severity="information")
            return
        self.run_worker(self._navigate_back(), group="navigation")

    def action_open_route_picker(self) -> None:
        self.run_worker(self._pick_route(), group="dialogs")

    def action_show_home(self) -> None:
        self.navigate("home")

    def action_show_dashboard(self) -> None:
        self.navigate("dashboard")

    def action_show_support(self) -> None:
        self.navigate("support")
