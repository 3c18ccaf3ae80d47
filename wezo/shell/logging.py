"""Structured shell event logging."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog

from ..config.settings import settings

DEFAULT_LOG_FILE = "logs/shell-events.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
BACKUP_LOG_FILES = 5
_ROOT_LOGGER_NAME = "wezo"
_LOGGER_NAME = "wezo.shell.events"


def _resolve_log_path(configured_path: Optional[str] = None) -> Path:
    """Configured path, else ``logs/`` under the working directory."""
    if configured_path:
        return Path(configured_path).expanduser()
    return Path(DEFAULT_LOG_FILE)


def _select_renderer(log_format: str):
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def _configure_rotating_handler(
    log_path: Optional[Path] = None,
    logger_name: str = _ROOT_LOGGER_NAME,
    level: Optional[str] = None,
) -> logging.Logger:
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        return logger

    log_path = log_path or _resolve_log_path(settings.logging.file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=BACKUP_LOG_FILES,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level or settings.logging.level, logging.INFO))
    logger.propagate = False
    return logger


_configure_rotating_handler()
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        _select_renderer(settings.logging.format),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
_logger = structlog.get_logger(_LOGGER_NAME)


def log_shell_event(event: str, **payload: Any) -> None:
    """Emit a structured shell event."""
    _logger.info(event, **payload)
