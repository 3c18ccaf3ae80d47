"""Content widgets rendered inside dialog overlays."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Label, OptionList, Static
from textual.widgets.option_list import Option

from ..dialogs import DialogHost
from ..navigation import Route


class ConfirmPrompt(Vertical):
    """Yes/no question that closes its dialog with a boolean."""

    DEFAULT_CSS = """
    ConfirmPrompt { height: auto; padding: 1 2; }
    ConfirmPrompt Horizontal { height: auto; margin-top: 1; }
    ConfirmPrompt Button { margin-right: 1; }
    """

    def __init__(
        self,
        message: str,
        close: Callable[[bool], None],
        *,
        title: str = "Please confirm",
        confirm_label: str = "Continue",
        cancel_label: str = "Cancel",
    ) -> None:
        super().__init__()
        self._prompt_text = message
        self._resolve = close
        self._heading = title
        self._accept_label = confirm_label
        self._decline_label = cancel_label

    def compose(self) -> ComposeResult:
        yield Label(self._heading, id="dialog-title")
        yield Static(self._prompt_text, id="dialog-message")
        with Horizontal():
            yield Button(self._accept_label, id="dialog-confirm", variant="primary")
            yield Button(self._decline_label, id="dialog-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._resolve(event.button.id == "dialog-confirm")


class RoutePicker(Vertical):
    """Command palette listing routes; closes with the chosen route key."""

    DEFAULT_CSS = """
    RoutePicker { height: auto; padding: 1 2; }
    RoutePicker OptionList { height: auto; max-height: 16; }
    """

    def __init__(self, routes: Iterable[Route], close: Callable[[Optional[str]], None]) -> None:
        super().__init__()
        self._choices = list(routes)
        self._resolve = close

    def compose(self) -> ComposeResult:
        yield Label("Go to", id="dialog-title")
        yield OptionList(
            *[
                Option(f"{route.icon} {route.label}".strip(), id=route.key)
                for route in self._choices
            ],
            id="route-options",
        )

    def on_mount(self) -> None:
        self.query_one(OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self._resolve(event.option.id)


async def confirm(
    dialogs: DialogHost,
    message: str,
    *,
    title: str = "Please confirm",
    confirm_label: str = "Continue",
    cancel_label: str = "Cancel",
) -> bool:
    """Ask a yes/no question; dismissing the dialog counts as no."""
    answer = await dialogs.open_dialog(
        lambda close: ConfirmPrompt(
            message,
            close,
            title=title,
            confirm_label=confirm_label,
            cancel_label=cancel_label,
        )
    )
    return bool(answer)
