"""Modal overlay screens and the presenter that drives them."""

from __future__ import annotations

from typing import Dict

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widget import Widget
from textual.widgets import Static

from ..dialogs import DialogInstance, DialogBase


class DialogScreen(ModalScreen[None]):
    """Hosts one dialog's rendered content above the shell."""

    DEFAULT_CSS = """
    DialogScreen {
        align: center middle;
        background: $background 60%;
    }

    #dialog-frame {
        width: 100%;
        max-width: 64;
        height: auto;
        max-height: 90%;
        border: round $accent;
        background: $surface;
    }
    """

    BINDINGS = [Binding("escape", "dismiss_dialog", "Close")]

    def __init__(self, dialog: DialogBase) -> None:
        super().__init__(id=f"screen-{dialog.dialog_id}")
        self.hosted_dialog = dialog
        self._close_requested = False

    def compose(self) -> ComposeResult:
        content = self.hosted_dialog.content
        with Container(id="dialog-frame"):
            if isinstance(content, Widget):
                yield content
            else:
                yield Static("" if content is None else str(content))

    def action_dismiss_dialog(self) -> None:
        if isinstance(self.hosted_dialog, DialogInstance):
            self.hosted_dialog.close(None)

    def request_close(self) -> None:
        """Leave the screen stack now, or as soon as this screen is on top."""
        self._close_requested = True
        if self.app.screen is self:
            self.app.pop_screen()

    def on_screen_resume(self) -> None:
        if self._close_requested and self.app.screen is self:
            self.app.pop_screen()


class TextualDialogPresenter:
    """Shows each dialog as a ``DialogScreen`` pushed onto the app."""

    def __init__(self, app: App) -> None:
        self._app = app
        self._screens: Dict[str, DialogScreen] = {}

    def show(self, dialog: DialogBase) -> None:
        screen = DialogScreen(dialog)
        self._screens[dialog.dialog_id] = screen
        self._app.push_screen(screen)

    def dismiss(self, dialog: DialogBase) -> None:
        screen = self._screens.pop(dialog.dialog_id, None)
        if screen is not None:
            screen.request_close()
