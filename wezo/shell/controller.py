"""Navigation controller: before/after hook chains, route commit and back-stack.

A navigation request moves the controller from ``idle`` (or ``committed``)
into ``resolving`` while the before-navigate hooks run in registration order.
Each hook receives a one-shot ``proceed`` continuation; the route is only
committed once every hook has called it. A hook may instead redirect by
calling ``proceed(route_key, params)``, which restarts the chain toward the
new target. Once committed, listeners mount the new view and after-navigate
hooks run; their failures are reported as warnings and never roll back.

Overlapping requests follow a supersede policy: a request arriving while
another is still resolving abandons the earlier one, whose caller receives
``NavigationSuperseded``.
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Tuple

import structlog

from .navigation import NavigationError, Route, RouteTable
from .paths import BasePath, build_address, get_base_path, parse_address, route_key_to_path

logger = structlog.get_logger(__name__)


class NavigationSuperseded(NavigationError):
    """Raised to a requester whose navigation was replaced by a newer one."""


class NavigationCancelled(NavigationError):
    """Raised to a requester whose pending navigation was cancelled."""


class NavigationTimeout(NavigationError):
    """Raised when the before-navigate chain does not finish in time."""


class RedirectLoopError(NavigationError):
    """Raised when before-navigate hooks keep redirecting."""


class BeforeNavigateHookError(NavigationError):
    """Raised when a before-navigate hook fails; the transition is aborted."""

    def __init__(self, hook_name: str, error: BaseException):
        super().__init__(f"Before-navigate hook '{hook_name}' failed: {error}")
        self.hook_name = hook_name
        self.error = error


class NavigationPhase(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    COMMITTED = "committed"


@dataclass(frozen=True)
class Location:
    """A route together with the parameters it was requested with."""

    route: Route
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def key(self) -> str:
        return self.route.key

    @property
    def path(self) -> str:
        return route_key_to_path(self.route.key)


@dataclass(frozen=True)
class NavigationEvent:
    source: Location
    target: Location
    timestamp: float
    sequence: int


@dataclass
class NavigationResult:
    event: NavigationEvent
    address: str
    warnings: List[str] = field(default_factory=list)


Proceed = Callable[..., None]
BeforeNavigateHook = Callable[[Proceed, Location, Location], Optional[Awaitable[None]]]
AfterNavigateHook = Callable[[Location, Location], Optional[Awaitable[None]]]
CommitListener = Callable[[NavigationEvent], None]


@dataclass(frozen=True, eq=False)
class _Hook:
    name: str
    fn: Callable[..., Any]


@dataclass(frozen=True)
class _Redirect:
    route_key: str
    params: Optional[Mapping[str, Any]]


class _PendingNavigation:
    def __init__(self, target: Location, resolution: "asyncio.Future[Location]"):
        self.target = target
        self.resolution = resolution
        self.reason: Optional[NavigationError] = None

    def abandon(self, reason: NavigationError) -> None:
        if self.reason is None:
            self.reason = reason
        self.resolution.cancel()


def _callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


def location_from_address(
    routes: RouteTable,
    address: Optional[str],
    *,
    fallback: str,
    base: Optional[BasePath] = None,
) -> Location:
    """Resolve a start location from an absolute address, falling back on unknown keys."""
    if address:
        route_key, params = parse_address(address, base)
        route = routes.get(route_key)
        if route is not None:
            return Location(route, params)
        logger.warning(
            "Address does not match a route, using fallback",
            address=address,
            route=route_key,
            fallback=fallback,
        )
    return Location(routes.require(fallback))


class NavigationController:
    """Owns the single active route and runs every transition toward a new one."""

    def __init__(
        self,
        routes: RouteTable,
        *,
        initial: Optional[Location] = None,
        initial_route: Optional[str] = None,
        base_path: Optional[BasePath] = None,
        hook_timeout: Optional[float] = None,
        after_hook_timeout: float = 5.0,
        max_redirects: int = 10,
        history_limit: int = 50,
    ):
        if not len(routes):
            raise ValueError("Route table is empty")
        self._routes = routes
        if initial is None:
            initial = Location(routes.require(initial_route or routes.keys()[0]))
        self._current = initial
        self._phase = NavigationPhase.IDLE
        self._has_committed = False
        self._base_path = base_path
        self._hook_timeout = hook_timeout
        self._after_hook_timeout = after_hook_timeout
        self._max_redirects = max_redirects
        self._history_limit = history_limit
        self._history: List[Location] = []
        self._before_hooks: List[_Hook] = []
        self._after_hooks: List[_Hook] = []
        self._listeners: List[CommitListener] = []
        self._pending: Optional[_PendingNavigation] = None
        self._sequence = itertools.count(1)

    @classmethod
    def from_settings(
        cls,
        routes: RouteTable,
        shell_settings: Any,
        *,
        initial: Optional[Location] = None,
    ) -> "NavigationController":
        return cls(
            routes,
            initial=initial,
            initial_route=shell_settings.initial_route,
            base_path=BasePath.from_config(shell_settings.base_path),
            hook_timeout=shell_settings.hook_timeout,
            after_hook_timeout=shell_settings.after_hook_timeout,
            max_redirects=shell_settings.max_redirects,
            history_limit=shell_settings.history_limit,
        )

    @property
    def routes(self) -> RouteTable:
        return self._routes

    @property
    def current(self) -> Location:
        return self._current

    @property
    def phase(self) -> NavigationPhase:
        return self._phase

    @property
    def base_path(self) -> BasePath:
        return self._base_path or get_base_path()

    @property
    def address(self) -> str:
        return build_address(self._current.path, self._current.params, self.base_path)

    @property
    def history(self) -> Tuple[Location, ...]:
        return tuple(self._history)

    @property
    def can_navigate_back(self) -> bool:
        return bool(self._history)

    @property
    def pending_target(self) -> Optional[Location]:
        return self._pending.target if self._pending else None

    def is_current(self, route_key: str) -> bool:
        return self._current.key == route_key

    def add_before_navigate(
        self, hook: BeforeNavigateHook, *, name: Optional[str] = None
    ) -> Callable[[], None]:
        return self._register(self._before_hooks, hook, name)

    def add_after_navigate(
        self, hook: AfterNavigateHook, *, name: Optional[str] = None
    ) -> Callable[[], None]:
        return self._register(self._after_hooks, hook, name)

    def subscribe(self, listener: CommitListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @staticmethod
    def _register(
        hooks: List[_Hook], fn: Callable[..., Any], name: Optional[str]
    ) -> Callable[[], None]:
        entry = _Hook(name or _callable_name(fn), fn)
        hooks.append(entry)

        def unregister() -> None:
            if entry in hooks:
                hooks.remove(entry)

        return unregister

    async def navigate_to(
        self,
        route_key: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        replace: bool = False,
    ) -> NavigationResult:
        """Navigate to ``route_key``; raises ``UnknownRouteError`` before any state change."""
        target = Location(self._routes.require(route_key), params or {})
        return await self._navigate(target, "replace" if replace else "push")

    async def navigate_back(self) -> NavigationResult:
        if not self._history:
            raise NavigationError("No previous route to navigate back to")
        return await self._navigate(self._history[-1], "back")

    def cancel_pending(self) -> bool:
        """Abandon the navigation currently resolving, if any."""
        if self._pending is None:
            return False
        logger.info("Cancelling pending navigation", target=self._pending.target.key)
        self._pending.abandon(
            NavigationCancelled(f"Navigation to '{self._pending.target.key}' was cancelled")
        )
        return True

    def _settled_phase(self) -> NavigationPhase:
        return NavigationPhase.COMMITTED if self._has_committed else NavigationPhase.IDLE

    async def _navigate(self, target: Location, mode: str) -> NavigationResult:
        if self._pending is not None:
            logger.info(
                "Superseding pending navigation",
                pending=self._pending.target.key,
                target=target.key,
            )
            self._pending.abandon(
                NavigationSuperseded(
                    f"Navigation to '{self._pending.target.key}' was superseded "
                    f"by '{target.key}'"
                )
            )

        source = self._current
        pending = _PendingNavigation(
            target, asyncio.ensure_future(self._resolve(target, source))
        )
        self._pending = pending
        self._phase = NavigationPhase.RESOLVING
        logger.debug("Navigation resolving", source=source.key, target=target.key)

        try:
            try:
                resolved = await pending.resolution
            except asyncio.CancelledError:
                if pending.reason is not None:
                    raise pending.reason from None
                raise
            if pending.reason is not None:
                raise pending.reason
            event = self._commit(source, resolved, mode)
        finally:
            if self._pending is pending:
                self._pending = None
                if self._phase is NavigationPhase.RESOLVING:
                    self._phase = self._settled_phase()

        warnings = self._notify_listeners(event)
        warnings.extend(await self._run_after_hooks(event))
        return NavigationResult(event=event, address=self.address, warnings=warnings)

    async def _resolve(self, target: Location, source: Location) -> Location:
        chain = self._run_before_hooks(target, source)
        if self._hook_timeout is None:
            return await chain
        try:
            return await asyncio.wait_for(chain, self._hook_timeout)
        except asyncio.TimeoutError:
            raise NavigationTimeout(
                f"Navigation to '{target.key}' timed out after {self._hook_timeout}s "
                "waiting for before-navigate hooks"
            ) from None

    async def _run_before_hooks(self, target: Location, source: Location) -> Location:
        redirects = 0
        while True:
            redirect: Optional[_Redirect] = None
            for hook in list(self._before_hooks):
                decision = await self._call_before_hook(hook, target, source)
                if decision is None:
                    continue
                if decision.route_key != target.key or (
                    decision.params is not None and dict(decision.params) != dict(target.params)
                ):
                    redirect = decision
                    logger.info(
                        "Navigation redirected",
                        hook=hook.name,
                        requested=target.key,
                        target=decision.route_key,
                    )
                    break
            if redirect is None:
                return target

            redirects += 1
            if redirects > self._max_redirects:
                raise RedirectLoopError(
                    f"Navigation to '{target.key}' exceeded {self._max_redirects} redirects"
                )
            target = Location(self._routes.require(redirect.route_key), redirect.params or {})

    async def _call_before_hook(
        self, hook: _Hook, target: Location, source: Location
    ) -> Optional[_Redirect]:
        decision: "asyncio.Future[Optional[_Redirect]]" = (
            asyncio.get_running_loop().create_future()
        )

        def proceed(
            route_key: Optional[str] = None, params: Optional[Mapping[str, Any]] = None
        ) -> None:
            if decision.done():
                logger.debug("Ignoring repeated proceed call", hook=hook.name)
                return
            if route_key is None and params is None:
                decision.set_result(None)
            else:
                decision.set_result(_Redirect(route_key or target.key, params))

        try:
            outcome = hook.fn(proceed, target, source)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            logger.warning(
                "Before-navigate hook failed",
                hook=hook.name,
                target=target.key,
                error=str(exc),
            )
            raise BeforeNavigateHookError(hook.name, exc) from exc
        return await decision

    def _commit(self, source: Location, target: Location, mode: str) -> NavigationEvent:
        if mode == "push":
            self._history.append(source)
            if len(self._history) > self._history_limit:
                del self._history[0]
        elif mode == "back" and self._history:
            self._history.pop()

        self._current = target
        self._phase = NavigationPhase.COMMITTED
        self._has_committed = True
        event = NavigationEvent(
            source=source,
            target=target,
            timestamp=time.time(),
            sequence=next(self._sequence),
        )
        logger.info(
            "Navigation committed",
            source=source.key,
            target=target.key,
            sequence=event.sequence,
        )
        return event

    def _notify_listeners(self, event: NavigationEvent) -> List[str]:
        warnings: List[str] = []
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:
                name = _callable_name(listener)
                logger.warning("Navigation listener failed", listener=name, error=str(exc))
                warnings.append(f"Listener '{name}' failed: {exc}")
        return warnings

    async def _run_after_hooks(self, event: NavigationEvent) -> List[str]:
        warnings: List[str] = []
        for hook in list(self._after_hooks):
            try:
                outcome = hook.fn(event.target, event.source)
                if inspect.isawaitable(outcome):
                    await asyncio.wait_for(outcome, self._after_hook_timeout)
            except asyncio.TimeoutError:
                logger.warning("After-navigate hook timed out", hook=hook.name)
                warnings.append(
                    f"After-navigate hook '{hook.name}' timed out after "
                    f"{self._after_hook_timeout}s"
                )
            except Exception as exc:
                logger.warning(
                    "After-navigate hook failed", hook=hook.name, error=str(exc)
                )
                warnings.append(f"After-navigate hook '{hook.name}' failed: {exc}")
        return warnings
