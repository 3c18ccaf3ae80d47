"""Base-path aware path translation, link classification and query strings."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote, unquote

DEFAULT_ROUTE_KEY = "home"


class BasePathError(RuntimeError):
    """Raised when the process-wide base path is reconfigured."""


class LinkKind(str, Enum):
    EXTERNAL = "external"
    HASH = "hash"
    INTERNAL = "internal"


def normalize_base_path(value: Optional[str]) -> str:
    """Collapse the configured deployment base into a prefix.

    ``"/"`` and the empty string both mean the application is served from the
    origin root, which is an empty prefix. A trailing slash is dropped.
    """
    base = (value or "/").strip()
    if base == "/":
        return ""
    return base.rstrip("/")


def classify(path: str) -> LinkKind:
    lowered = path.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return LinkKind.EXTERNAL
    if path.startswith("#"):
        return LinkKind.HASH
    return LinkKind.INTERNAL


def is_external_path(path: str) -> bool:
    return classify(path) is LinkKind.EXTERNAL


def is_hash_path(path: str) -> bool:
    return classify(path) is LinkKind.HASH


@dataclass(frozen=True)
class BasePath:
    """An immutable deployment prefix with the path translations it implies."""

    prefix: str = ""

    @classmethod
    def from_config(cls, value: Optional[str]) -> "BasePath":
        return cls(normalize_base_path(value))

    def to_absolute(self, relative_path: str) -> str:
        if classify(relative_path) is not LinkKind.INTERNAL:
            return relative_path
        return self.prefix + relative_path

    def to_relative(self, absolute_path: str) -> str:
        """Strip the prefix when it matches whole segments; ``/app`` keeps ``/application``."""
        if not self.prefix or not absolute_path.startswith(self.prefix):
            return absolute_path
        rest = absolute_path[len(self.prefix):]
        if not rest:
            return "/"
        if rest[0] in "?#":
            return "/" + rest
        if rest[0] != "/":
            return absolute_path
        return rest


_base_path: Optional[BasePath] = None


def configure_base_path(value: Optional[str]) -> BasePath:
    """Set the process-wide base path. Only the first distinct value sticks."""
    global _base_path
    candidate = BasePath.from_config(value)
    if _base_path is not None and _base_path != candidate:
        raise BasePathError(
            f"Base path already configured as '{_base_path.prefix or '/'}'"
        )
    _base_path = candidate
    return _base_path


def get_base_path() -> BasePath:
    if _base_path is None:
        from ..config.settings import settings

        return configure_base_path(settings.shell.base_path)
    return _base_path


def _reset_base_path() -> None:
    global _base_path
    _base_path = None


def to_absolute(relative_path: str, base: Optional[BasePath] = None) -> str:
    return (base or get_base_path()).to_absolute(relative_path)


def to_relative(absolute_path: str, base: Optional[BasePath] = None) -> str:
    return (base or get_base_path()).to_relative(absolute_path)


def _coerce_query_value(raw: str) -> Any:
    if raw.startswith("{") or raw.startswith("["):
        try:
            return json.loads(raw)
        except ValueError:
            return raw
    if raw == "true":
        return True
    if raw == "false":
        return False
    if raw:
        try:
            return int(raw)
        except ValueError:
            pass
        try:
            number = float(raw)
        except ValueError:
            return raw
        if number == number and number not in (float("inf"), float("-inf")):
            return number
    return raw


def parse_query_params(search: str) -> Dict[str, Any]:
    """Decode ``?a=1&b=x`` into typed values (JSON, booleans, numbers, strings)."""
    params: Dict[str, Any] = {}
    query = search[1:] if search.startswith("?") else search
    if not query:
        return params
    for pair in query.split("&"):
        key, _, value = pair.partition("=")
        if not key:
            continue
        params[unquote(key.replace("+", " "))] = _coerce_query_value(
            unquote(value.replace("+", " "))
        )
    return params


def _serialize_query_value(value: Any) -> str:
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def serialize_query_params(params: Optional[Mapping[str, Any]]) -> str:
    if not params:
        return ""
    pairs = [
        f"{quote(str(key), safe='')}={quote(_serialize_query_value(value), safe='')}"
        for key, value in params.items()
        if value is not None
    ]
    return f"?{'&'.join(pairs)}" if pairs else ""


def route_key_to_path(route_key: str) -> str:
    return "/" if route_key == DEFAULT_ROUTE_KEY else f"/{route_key}"


def path_to_route_key(path: str) -> str:
    clean = path[1:] if path.startswith("/") else path
    return clean or DEFAULT_ROUTE_KEY


def build_address(
    path: str,
    params: Optional[Mapping[str, Any]] = None,
    base: Optional[BasePath] = None,
) -> str:
    """Absolute address (base prefix, path and query) shown for a location."""
    return to_absolute(path + serialize_query_params(params), base)


def parse_address(
    address: str, base: Optional[BasePath] = None
) -> Tuple[str, Dict[str, Any]]:
    """Recover ``(route_key, params)`` from an absolute address."""
    path, _, search = to_relative(address, base).partition("?")
    route_key = path_to_route_key(path.rstrip("/") or "/")
    return route_key, parse_query_params(search)


def is_same_path(first: str, second: str) -> bool:
    def _normalize(path: str) -> str:
        return path.split("?", 1)[0].rstrip("/") or "/"

    return _normalize(first) == _normalize(second)
