"""Tests for the shell's stock navigation hooks."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from wezo.shell import hooks
from wezo.shell.controller import NavigationCancelled, NavigationController
from wezo.shell.dialogs import DialogHost
from wezo.shell.hooks import (
    install_default_hooks,
    make_access_guard,
    make_confirmation_guard,
    make_state_persister,
    make_title_hook,
)
from wezo.shell.navigation import HOME_OWNER, MANAGER, TENANT
from wezo.shell.services.state_store import StateStore
from wezo.shell.session import Session
from wezo.shell.state import ShellState


@pytest.mark.asyncio
async def test_guest_is_sent_to_login_with_next(controller):
    controller.add_before_navigate(make_access_guard(Session()))

    await controller.navigate_to("dashboard")

    assert controller.current.key == "login"
    assert dict(controller.current.params) == {"next": "dashboard"}


@pytest.mark.asyncio
async def test_signed_in_user_with_role_reaches_route(controller):
    session = Session()
    session.sign_in("noura", HOME_OWNER)
    controller.add_before_navigate(make_access_guard(session))

    await controller.navigate_to("dashboard")

    assert controller.current.key == "dashboard"


@pytest.mark.asyncio
async def test_signed_in_user_without_role_goes_home(controller):
    session = Session()
    session.sign_in("layla", TENANT)
    controller.add_before_navigate(make_access_guard(session))
    await controller.navigate_to("properties")

    await controller.navigate_to("finance")

    assert controller.current.key == "home"


@pytest.mark.asyncio
async def test_signed_in_user_skips_login(controller):
    session = Session()
    session.sign_in("omar", MANAGER)
    controller.add_before_navigate(make_access_guard(session))
    await controller.navigate_to("properties")

    await controller.navigate_to("login")

    assert controller.current.key == "home"


@pytest.mark.asyncio
async def test_confirmation_guard_proceeds_on_accept(controller, monkeypatch):
    ask = AsyncMock(return_value=True)
    monkeypatch.setattr(hooks, "confirm", ask)
    controller.add_before_navigate(
        make_confirmation_guard(DialogHost(), {"finance": "Open finance?"})
    )

    await controller.navigate_to("finance")

    assert controller.current.key == "finance"
    ask.assert_awaited_once()
    assert ask.await_args.args[1] == "Open finance?"


@pytest.mark.asyncio
async def test_confirmation_guard_decline_cancels_navigation(controller, monkeypatch):
    monkeypatch.setattr(hooks, "confirm", AsyncMock(return_value=False))
    controller.add_before_navigate(
        make_confirmation_guard(
            DialogHost(), {"finance": "Open finance?"}, on_decline=controller.cancel_pending
        )
    )

    with pytest.raises(NavigationCancelled):
        await controller.navigate_to("finance")
    assert controller.current.key == "home"


@pytest.mark.asyncio
async def test_confirmation_guard_ignores_unlisted_routes(controller, monkeypatch):
    ask = AsyncMock(return_value=False)
    monkeypatch.setattr(hooks, "confirm", ask)
    controller.add_before_navigate(make_confirmation_guard(DialogHost(), {"finance": "?"}))

    await controller.navigate_to("properties")

    assert controller.current.key == "properties"
    ask.assert_not_awaited()


@pytest.mark.asyncio
async def test_confirmation_guard_waits_on_open_dialog(controller):
    dialogs = DialogHost()
    controller.add_before_navigate(
        make_confirmation_guard(dialogs, {"finance": "Open finance?"})
    )

    pending = asyncio.ensure_future(controller.navigate_to("finance"))
    for _ in range(50):
        if dialogs.active:
            break
        await asyncio.sleep(0)

    assert controller.current.key == "home"
    dialog = dialogs.active[-1]
    dialog.close(True)

    result = await pending
    assert result.event.target.key == "finance"


@pytest.mark.asyncio
async def test_title_hook_updates_app_title(controller):
    app = SimpleNamespace(title="")
    controller.add_after_navigate(make_title_hook(app, "Wezo.ae"))

    await controller.navigate_to("properties")

    assert app.title == "Properties - Wezo.ae"


@pytest.mark.asyncio
async def test_state_persister_saves_last_address(controller, tmp_path):
    store = StateStore(str(tmp_path / "state.json"))
    state = ShellState()
    controller.add_after_navigate(make_state_persister(controller, store, state))

    await controller.navigate_to("property-view", {"id": "villa-101"})

    saved = store.load()
    assert saved.last_address == "/property-view?id=villa-101"
    assert saved.recent_routes == ["property-view"]


@pytest.mark.asyncio
async def test_install_default_hooks_registers_and_unregisters(route_table, tmp_path):
    controller = NavigationController(route_table)
    app = SimpleNamespace(title="")
    unregister = install_default_hooks(
        controller,
        session=Session(),
        dialogs=DialogHost(),
        app=app,
        app_name="Wezo.ae",
        prompts={"finance": "Open finance?"},
        store=StateStore(str(tmp_path / "state.json")),
        state=ShellState(),
    )

    assert len(unregister) == 5

    await controller.navigate_to("dashboard")
    assert controller.current.key == "login"
    assert app.title == "Sign In - Wezo.ae"

    for remove in unregister:
        remove()
    await controller.navigate_to("dashboard")
    assert controller.current.key == "dashboard"
