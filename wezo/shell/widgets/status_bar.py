"""Status bar widget for the application shell."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widgets import Static


def _badge(label: str, state: str) -> str:
    palette = {
        "ok": "green",
        "warn": "yellow",
        "error": "red",
        "unknown": "grey66",
    }
    color = palette.get(state, "grey66")
    return f"[{color}]●[/{color}] {label}"


_PHASE_STATES = {"idle": "unknown", "resolving": "warn", "committed": "ok"}


class StatusBar(Static):
    """Compact badges for session, navigation phase, open dialogs and address."""

    role = reactive("Guest")
    phase = reactive("idle")
    dialogs = reactive(0)
    address = reactive("/")

    def set_states(self, *, role: str, phase: str, dialogs: int, address: str) -> None:
        self.role = role
        self.phase = phase
        self.dialogs = dialogs
        self.address = address

    def _badges_markup(self) -> str:
        parts = [
            _badge(self.role, "ok" if self.role != "Guest" else "unknown"),
            _badge(f"Navigation: {self.phase}", _PHASE_STATES.get(self.phase, "unknown")),
            _badge(f"Dialogs: {self.dialogs}", "warn" if self.dialogs else "ok"),
            f"[dim]{self.address}[/dim]",
        ]
        return "   ".join(parts)

    def on_mount(self) -> None:
        self.update(self._badges_markup())

    def watch_role(self) -> None:
        self.update(self._badges_markup())

    def watch_phase(self) -> None:
        self.update(self._badges_markup())

    def watch_dialogs(self) -> None:
        self.update(self._badges_markup())

    def watch_address(self) -> None:
        self.update(self._badges_markup())
