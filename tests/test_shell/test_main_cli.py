"""CLI behavior tests for shell startup options."""

import sys

import pytest
from rich.console import Console

from wezo.shell import __main__ as cli


def _capture_run(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "run_shell", lambda **kwargs: calls.append(kwargs))
    return calls


def test_route_option_becomes_start_address(monkeypatch):
    calls = _capture_run(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["wezo", "--route", "properties", "--base-path", "/app"])

    cli.main()

    assert calls == [{"base_path": "/app", "address": "/app/properties", "role": None}]


def test_address_and_role_are_passed_through(monkeypatch):
    calls = _capture_run(monkeypatch)
    monkeypatch.setattr(
        sys, "argv", ["wezo", "--address", "/property-view?id=villa-101", "--role", "Manager"]
    )

    cli.main()

    assert calls == [
        {"base_path": None, "address": "/property-view?id=villa-101", "role": "Manager"}
    ]


def test_unknown_route_exits_with_usage_error(monkeypatch):
    _capture_run(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["wezo", "--route", "nowhere"])

    with pytest.raises(SystemExit):
        cli.main()


def test_list_routes_does_not_start_shell(monkeypatch):
    calls = _capture_run(monkeypatch)
    printed = []
    monkeypatch.setattr(cli, "list_routes", lambda: printed.append(True))
    monkeypatch.setattr(sys, "argv", ["wezo", "--list-routes"])

    cli.main()

    assert printed == [True]
    assert calls == []


def test_list_routes_prints_every_route():
    console = Console(record=True, width=160)

    cli.list_routes(console)

    output = console.export_text()
    assert "property-view" in output
    assert "/my-bookings" in output
    assert "hidden" in output
