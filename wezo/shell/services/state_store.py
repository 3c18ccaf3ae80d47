"""Atomic JSON persistence for shell state."""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog

from ..state import ShellState

logger = structlog.get_logger(__name__)


class StateStore:
    """Read/write the shell state file with backup and atomic replacement."""

    def __init__(self, path: str = "data/shell-state.json") -> None:
        self.path = Path(path).expanduser()

    def load(self) -> ShellState:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return ShellState()
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(
                "Shell state unreadable, using defaults",
                path=str(self.path),
                error=str(exc),
            )
            return ShellState()
        return ShellState.from_dict(payload)

    def save(self, state: ShellState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(state.to_dict(), indent=2, sort_keys=True) + "\n"

        if self.path.exists():
            backup_path = self.path.with_suffix(self.path.suffix + ".bak")
            backup_path.write_text(self.path.read_text(encoding="utf-8"), encoding="utf-8")

        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        fd = os.open(str(temp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(temp_path, self.path)
