"""Signed-in user and active role used for route access decisions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .navigation import ROLES, available_roles


@dataclass
class Session:
    user: Optional[str] = None
    base_role: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def roles(self) -> List[str]:
        return available_roles(self.base_role) if self.base_role else []

    def sign_in(self, user: str, base_role: str) -> None:
        if base_role not in ROLES:
            raise ValueError(f"Unknown role '{base_role}'")
        self.user = user
        self.base_role = base_role
        self.role = base_role

    def sign_out(self) -> None:
        self.user = None
        self.base_role = None
        self.role = None

    def switch_role(self, role: str) -> None:
        if role not in self.roles:
            raise ValueError(f"Role '{role}' is not available to {self.user or 'guests'}")
        self.role = role
