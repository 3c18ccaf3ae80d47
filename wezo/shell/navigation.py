"""Typed route registry and role-based route access."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

TENANT = "Tenant"
HOME_OWNER = "HomeOwner"
MANAGER = "Manager"
ROLES: Tuple[str, ...] = (TENANT, HOME_OWNER, MANAGER)

PLACEMENTS = ("nav", "header", "footer")


class NavigationError(Exception):
    """Base class for failures reported to a navigation requester."""


class UnknownRouteError(NavigationError, LookupError):
    """Raised when a route key is not present in the route table."""

    def __init__(self, route_key: str):
        super().__init__(f"Unknown route '{route_key}'")
        self.route_key = route_key


@dataclass(frozen=True)
class Route:
    """Represents a named, navigable view."""

    key: str
    label: str
    component: Callable[..., Any]
    icon: str = ""
    description: str = ""
    show_in_nav: bool = True
    show_in_header: bool = True
    show_in_footer: bool = True
    roles: Tuple[str, ...] = ()

    @property
    def is_public(self) -> bool:
        return not self.roles

    def shown_in(self, placement: str) -> bool:
        if placement not in PLACEMENTS:
            raise ValueError(f"Unknown placement '{placement}'")
        return getattr(self, f"show_in_{placement}")


class RouteTable:
    """Read-only, insertion-ordered mapping of route keys to routes."""

    def __init__(self, routes: Iterable[Route]):
        table: Dict[str, Route] = {}
        for route in routes:
            if route.key in table:
                raise ValueError(f"Duplicate route key '{route.key}'")
            table[route.key] = route
        self._routes = MappingProxyType(table)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, route_key: object) -> bool:
        return route_key in self._routes

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._routes)

    def get(self, route_key: str) -> Optional[Route]:
        return self._routes.get(route_key)

    def require(self, route_key: str) -> Route:
        route = self._routes.get(route_key)
        if route is None:
            raise UnknownRouteError(route_key)
        return route

    def placed(self, placement: str, limit: Optional[int] = None) -> List[Route]:
        routes = [route for route in self if route.shown_in(placement)]
        return routes if limit is None else routes[:limit]


def has_route_access(route: Route, role: Optional[str], authenticated: bool) -> bool:
    """Public routes are open to everyone; others need a signed-in, listed role."""
    if route.is_public:
        return True
    return bool(authenticated and role and role in route.roles)


def filter_routes_by_role(
    routes: Iterable[Route], role: Optional[str], authenticated: bool
) -> List[Route]:
    return [route for route in routes if has_route_access(route, role, authenticated)]


def available_roles(base_role: str) -> List[str]:
    """Roles a user may switch into, given the role stored on their account."""
    if base_role not in ROLES:
        raise ValueError(f"Unknown role '{base_role}'")
    roles = [TENANT]
    if base_role in (HOME_OWNER, MANAGER):
        roles.append(HOME_OWNER)
    if base_role == MANAGER:
        roles.append(MANAGER)
    return roles
