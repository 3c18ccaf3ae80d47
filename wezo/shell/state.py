"""Typed state models for shell persistence."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ShellState:
    last_address: Optional[str] = None
    recent_routes: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ShellState":
        data = payload if isinstance(payload, dict) else {}

        raw_address = data.get("last_address")
        last_address = (
            str(raw_address) if raw_address not in (None, "") else None
        )

        raw_recent = data.get("recent_routes", [])
        if not isinstance(raw_recent, list):
            raw_recent = []

        return cls(
            last_address=last_address,
            recent_routes=[str(key) for key in raw_recent if key],
        )

    def remember(self, address: str, route_key: str, limit: int = 10) -> None:
        self.last_address = address
        if route_key in self.recent_routes:
            self.recent_routes.remove(route_key)
        self.recent_routes.insert(0, route_key)
        del self.recent_routes[limit:]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
