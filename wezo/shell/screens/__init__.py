"""Textual screen modules for the Wezo shell."""

from .dialog import DialogScreen, TextualDialogPresenter

__all__ = ["DialogScreen", "TextualDialogPresenter"]
