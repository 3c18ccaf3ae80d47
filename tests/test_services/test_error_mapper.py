"""Tests for centralized exception mapping."""

from wezo.services.error_mapper import map_exception
from wezo.shell.controller import (
    BeforeNavigateHookError,
    NavigationCancelled,
    NavigationSuperseded,
    NavigationTimeout,
    RedirectLoopError,
)
from wezo.shell.dialogs import DialogRenderError, DialogTimeout
from wezo.shell.navigation import NavigationError, UnknownRouteError
from wezo.shell.paths import BasePathError


def test_maps_unknown_route():
    mapped = map_exception(UnknownRouteError("nowhere"))

    assert mapped.code == "unknown_route"
    assert mapped.severity == "error"
    assert "nowhere" in mapped.message


def test_cancelled_and_superseded_are_informational():
    for error in (NavigationCancelled("cancelled"), NavigationSuperseded("superseded")):
        mapped = map_exception(error)

        assert mapped.code == "navigation_cancelled"
        assert mapped.severity == "information"


def test_maps_navigation_timeout_as_retryable():
    mapped = map_exception(NavigationTimeout("slow guard"))

    assert mapped.code == "navigation_timeout"
    assert mapped.severity == "warning"
    assert mapped.retryable is True


def test_maps_redirect_loop():
    assert map_exception(RedirectLoopError("loop")).code == "redirect_loop"


def test_maps_failing_hook_with_hint():
    mapped = map_exception(BeforeNavigateHookError("access_guard", RuntimeError("db down")))

    assert mapped.code == "navigation_blocked"
    assert "access_guard" in mapped.hint
    assert "db down" in mapped.hint


def test_generic_navigation_error_keeps_message():
    mapped = map_exception(NavigationError("No previous route to navigate back to"))

    assert mapped.code == "navigation_error"
    assert mapped.message == "No previous route to navigate back to"


def test_maps_dialog_failures():
    assert map_exception(DialogTimeout("late")).code == "dialog_timeout"
    assert map_exception(DialogRenderError("broken")).code == "dialog_failed"


def test_maps_base_path_misconfiguration():
    mapped = map_exception(BasePathError("Base path already configured as '/app'"))

    assert mapped.code == "configuration_error"
    assert "/app" in mapped.message


def test_preserves_message_for_non_error_severity():
    mapped = map_exception("Invalid filter: beds", default_severity="warning")

    assert mapped.code == "request_error"
    assert mapped.severity == "warning"
    assert mapped.message == "Invalid filter: beds"


def test_hides_unknown_error_message():
    mapped = map_exception(RuntimeError("sensitive stack details"))

    assert mapped.code == "internal_error"
    assert mapped.message == "Something went wrong"


def test_plain_message_maps_to_request_error_when_not_fatal():
    mapped = map_exception("  Listing not found ", default_severity="warning")

    assert mapped.code == "request_error"
    assert mapped.message == "Listing not found"
    assert mapped.severity == "warning"


def test_empty_message_falls_back_to_generic_text():
    assert map_exception(None, default_severity="warning").message == "Request failed"
