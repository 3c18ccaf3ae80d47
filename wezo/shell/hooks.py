"""Stock before/after-navigate hooks used by the shell."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Mapping, Optional

import structlog

from .controller import AfterNavigateHook, BeforeNavigateHook, Location, NavigationController, Proceed
from .dialogs import DialogHost
from .logging import log_shell_event
from .navigation import has_route_access
from .services.state_store import StateStore
from .session import Session
from .state import ShellState
from .widgets.dialog_content import confirm

logger = structlog.get_logger(__name__)


def make_access_guard(
    session: Session,
    *,
    login_route: str = "login",
    register_route: str = "register",
    home_route: str = "home",
) -> BeforeNavigateHook:
    """Redirect according to sign-in state and the active role."""
    guest_only = {login_route, register_route}

    def access_guard(proceed: Proceed, target: Location, source: Location) -> None:
        if session.is_authenticated and target.key in guest_only:
            proceed(home_route)
            return
        if has_route_access(target.route, session.role, session.is_authenticated):
            proceed()
            return
        if not session.is_authenticated:
            proceed(login_route, {"next": target.key})
            return
        logger.info("Route not available for role", route=target.key, role=session.role)
        proceed(home_route)

    return access_guard


def make_confirmation_guard(
    dialogs: DialogHost,
    prompts: Mapping[str, str],
    *,
    on_decline: Optional[Callable[[], Any]] = None,
) -> BeforeNavigateHook:
    """Ask before entering the routes listed in ``prompts``.

    A declined prompt never calls ``proceed``; ``on_decline`` lets the caller
    release the suspended navigation.
    """

    async def confirmation_guard(proceed: Proceed, target: Location, source: Location) -> None:
        message = prompts.get(target.key)
        if message is None or source.key == target.key:
            proceed()
            return
        if await confirm(dialogs, message, title=target.route.label, confirm_label="Open"):
            proceed()
            return
        logger.info("Navigation declined", route=target.key)
        if on_decline is not None:
            on_decline()

    return confirmation_guard


def make_title_hook(app: Any, app_name: str) -> AfterNavigateHook:
    def update_title(target: Location, source: Location) -> None:
        app.title = f"{target.route.label} - {app_name}"

    return update_title


def make_navigation_logger(controller: NavigationController) -> AfterNavigateHook:
    def log_navigation(target: Location, source: Location) -> None:
        log_shell_event(
            "navigation_completed",
            source=source.key,
            target=target.key,
            params=dict(target.params),
            address=controller.address,
        )

    return log_navigation


def make_state_persister(
    controller: NavigationController, store: StateStore, state: ShellState
) -> AfterNavigateHook:
    async def persist_location(target: Location, source: Location) -> None:
        state.remember(controller.address, target.key)
        await asyncio.to_thread(store.save, state)

    return persist_location


def install_default_hooks(
    controller: NavigationController,
    *,
    session: Session,
    dialogs: DialogHost,
    app: Any,
    app_name: str,
    prompts: Optional[Mapping[str, str]] = None,
    store: Optional[StateStore] = None,
    state: Optional[ShellState] = None,
) -> List[Callable[[], None]]:
    """Register the shell's guards and after-navigate hooks, in order."""
    unregister = [
        controller.add_before_navigate(make_access_guard(session), name="access_guard"),
    ]
    if prompts:
        unregister.append(
            controller.add_before_navigate(
                make_confirmation_guard(
                    dialogs, prompts, on_decline=controller.cancel_pending
                ),
                name="confirmation_guard",
            )
        )
    unregister.append(
        controller.add_after_navigate(make_title_hook(app, app_name), name="update_title")
    )
    unregister.append(
        controller.add_after_navigate(
            make_navigation_logger(controller), name="log_navigation"
        )
    )
    if store is not None and state is not None:
        unregister.append(
            controller.add_after_navigate(
                make_state_persister(controller, store, state), name="persist_location"
            )
        )
    return unregister
