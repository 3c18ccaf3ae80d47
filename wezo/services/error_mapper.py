"""Centralized exception mapping for consistent user-facing notifications."""

from dataclasses import dataclass
from typing import Any

from ..shell.controller import (
    BeforeNavigateHookError,
    NavigationCancelled,
    NavigationSuperseded,
    NavigationTimeout,
    RedirectLoopError,
)
from ..shell.dialogs import DialogRenderError, DialogTimeout
from ..shell.navigation import NavigationError, UnknownRouteError
from ..shell.paths import BasePathError


@dataclass(frozen=True)
class ErrorMapping:
    """Normalized user-facing error payload shown by the shell."""

    code: str
    message: str
    severity: str
    hint: str = ""
    retryable: bool = False


def _extract_message(error: Any) -> str:
    if error is None:
        return ""
    return str(error)


def map_exception(error: Any, *, default_severity: str = "error") -> ErrorMapping:
    """Map raw exceptions/messages into stable user-facing error semantics."""
    if isinstance(error, UnknownRouteError):
        return ErrorMapping(
            code="unknown_route",
            message=f"There is no page called '{error.route_key}'.",
            severity="error",
            hint="Open the command palette (Ctrl+K) to pick an available page.",
        )

    if isinstance(error, (NavigationSuperseded, NavigationCancelled)):
        return ErrorMapping(
            code="navigation_cancelled",
            message=str(error),
            severity="information",
        )

    if isinstance(error, NavigationTimeout):
        return ErrorMapping(
            code="navigation_timeout",
            message="The page took too long to open.",
            severity="warning",
            hint="Try again; a confirmation may have been left unanswered.",
            retryable=True,
        )

    if isinstance(error, RedirectLoopError):
        return ErrorMapping(
            code="redirect_loop",
            message="Navigation kept redirecting and was stopped.",
            severity="error",
            hint="Check the access rules for the requested page.",
        )

    if isinstance(error, BeforeNavigateHookError):
        return ErrorMapping(
            code="navigation_blocked",
            message="Navigation was stopped by a failing check.",
            severity="error",
            hint=f"Check '{error.hook_name}': {error.error}",
            retryable=True,
        )

    if isinstance(error, NavigationError):
        return ErrorMapping(
            code="navigation_error",
            message=_extract_message(error) or "Navigation failed",
            severity="warning",
        )

    if isinstance(error, DialogTimeout):
        return ErrorMapping(
            code="dialog_timeout",
            message="The dialog was closed after waiting too long for an answer.",
            severity="warning",
            retryable=True,
        )

    if isinstance(error, DialogRenderError):
        return ErrorMapping(
            code="dialog_failed",
            message="The dialog could not be displayed.",
            severity="error",
        )

    if isinstance(error, BasePathError):
        return ErrorMapping(
            code="configuration_error",
            message=_extract_message(error),
            severity="error",
            hint="Set SHELL_BASE_PATH (or APP_BASE) once, before the shell starts.",
        )

    if default_severity == "error":
        return ErrorMapping(
            code="internal_error",
            message="Something went wrong",
            severity="error",
        )

    return ErrorMapping(
        code="request_error",
        message=_extract_message(error).strip() or "Request failed",
        severity=default_severity,
    )
