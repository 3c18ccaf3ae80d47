"""Textual shell tests: bindings, routed views and modal dialogs."""

import pytest
from textual.widgets import Button, DataTable

from wezo.shell.dialogs import DialogInstance
from wezo.shell.navigation import MANAGER
from wezo.shell.screens import DialogScreen
from wezo.shell.services.state_store import StateStore
from wezo.shell.session import Session
from wezo.shell.textual_app import WezoShellApp
from wezo.shell.views import LandingView, PropertiesView


def _make_app(test_settings, tmp_path, **kwargs):
    return WezoShellApp(
        settings=test_settings,
        state_store=StateStore(str(tmp_path / "state.json")),
        **kwargs,
    )


def test_global_bindings_include_primary_shortcuts():
    keys = {binding.key for binding in WezoShellApp.BINDINGS}

    assert "q" in keys
    assert "b" in keys
    assert "ctrl+k" in keys
    assert "question_mark" in keys
    assert "h" in keys
    assert "d" in keys


def test_start_location_comes_from_address(test_settings, tmp_path):
    app = _make_app(test_settings, tmp_path, address="/properties?page=2")

    assert app.navigation.current.key == "properties"
    assert dict(app.navigation.current.params) == {"page": 2}
    assert app.title == "Properties - Wezo.ae"


def test_unknown_start_address_falls_back(test_settings, tmp_path):
    app = _make_app(test_settings, tmp_path, address="/nowhere")

    assert app.navigation.current.key == "home"


@pytest.mark.asyncio
async def test_home_view_is_mounted_on_start(test_settings, tmp_path):
    app = _make_app(test_settings, tmp_path)

    async with app.run_test() as pilot:
        await pilot.pause()

        assert len(app.query(LandingView)) == 1
        assert app.query_one("#nav-bar").query_one("#nav-home", Button).variant == "primary"


@pytest.mark.asyncio
async def test_navigation_swaps_routed_view(test_settings, tmp_path):
    app = _make_app(test_settings, tmp_path)

    async with app.run_test() as pilot:
        result = await app.navigate_and_report("properties")
        await pilot.pause()

        assert result is not None
        assert app.navigation.current.key == "properties"
        assert len(app.query(PropertiesView)) == 1
        assert len(app.query(LandingView)) == 0
        assert app.query_one("#properties-table", DataTable).row_count == 3
        assert app.title == "Properties - Wezo.ae"


@pytest.mark.asyncio
async def test_guest_is_redirected_to_login(test_settings, tmp_path):
    app = _make_app(test_settings, tmp_path)

    async with app.run_test() as pilot:
        await app.navigate_and_report("dashboard")
        await pilot.pause()

        assert app.navigation.current.key == "login"
        assert app.navigation.current.params["next"] == "dashboard"


@pytest.mark.asyncio
async def test_confirmation_dialog_accept_commits_route(test_settings, tmp_path):
    session = Session()
    session.sign_in("omar", MANAGER)
    app = _make_app(test_settings, tmp_path, session=session)

    async with app.run_test() as pilot:
        app.navigate("finance")
        await pilot.pause()

        assert isinstance(app.screen, DialogScreen)
        assert app.navigation.current.key == "home"

        app.screen.query_one("#dialog-confirm", Button).press()
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert not isinstance(app.screen, DialogScreen)
        assert app.navigation.current.key == "finance"
        assert app.dialogs.active == ()


@pytest.mark.asyncio
async def test_confirmation_dialog_escape_keeps_current_route(test_settings, tmp_path):
    session = Session()
    session.sign_in("omar", MANAGER)
    app = _make_app(test_settings, tmp_path, session=session)

    async with app.run_test() as pilot:
        app.navigate("finance")
        await pilot.pause()
        assert isinstance(app.screen, DialogScreen)

        await pilot.press("escape")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert not isinstance(app.screen, DialogScreen)
        assert app.navigation.current.key == "home"
        assert app.dialogs.active == ()


@pytest.mark.asyncio
async def test_open_dialog_resolves_from_modal_screen(test_settings, tmp_path):
    app = _make_app(test_settings, tmp_path)

    async with app.run_test() as pilot:
        worker = app.run_worker(app.dialogs.open_dialog(lambda close: "Pick a number"))
        await pilot.pause()

        dialog = app.dialogs.active[-1]
        assert isinstance(dialog, DialogInstance)
        assert app.screen.id == f"screen-{dialog.dialog_id}"

        dialog.close(42)
        await worker.wait()
        await pilot.pause()

        assert worker.result == 42
        assert not isinstance(app.screen, DialogScreen)


@pytest.mark.asyncio
async def test_back_binding_returns_to_previous_route(test_settings, tmp_path):
    app = _make_app(test_settings, tmp_path)

    async with app.run_test() as pilot:
        await app.navigate_and_report("properties")
        await pilot.pause()

        await pilot.press("b")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.navigation.current.key == "home"
        assert len(app.query(LandingView)) == 1
