"""
Pytest configuration and fixtures for Wezo shell tests.
"""

import pytest

from wezo.config.settings import Settings, ShellSettings
from wezo.shell.controller import NavigationController
from wezo.shell.navigation import HOME_OWNER, MANAGER, Route, RouteTable
from wezo.shell.paths import _reset_base_path


def _component(location):
    return location


@pytest.fixture
def route_table():
    """Small route table independent of the Textual views."""
    return RouteTable(
        [
            Route("home", "Home", _component),
            Route("properties", "Properties", _component),
            Route("property-view", "Property Details", _component, show_in_nav=False),
            Route("dashboard", "Dashboard", _component, roles=(HOME_OWNER, MANAGER)),
            Route("finance", "Finance", _component, show_in_footer=False, roles=(MANAGER,)),
            Route("login", "Sign In", _component, show_in_nav=False, show_in_header=False),
        ]
    )


@pytest.fixture
def controller(route_table):
    return NavigationController(route_table, initial_route="home")


@pytest.fixture
def shell_settings(tmp_path):
    """Shell settings that keep persisted state inside the test's tmp dir."""
    return ShellSettings(
        base_path="/",
        state_file=str(tmp_path / "shell-state.json"),
        restore_last_address=False,
    )


@pytest.fixture
def test_settings(shell_settings):
    return Settings(environment="test", shell=shell_settings)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables and a fresh process-wide base path."""
    monkeypatch.setenv("WEZO_ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("SHELL_BASE_PATH", raising=False)
    monkeypatch.delenv("APP_BASE", raising=False)

    _reset_base_path()
    yield
    _reset_base_path()
