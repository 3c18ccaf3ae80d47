"""Shared Textual widgets for the Wezo shell."""

from .breadcrumb import Breadcrumb
from .dialog_content import ConfirmPrompt, RoutePicker, confirm
from .nav_bar import NavBar
from .status_bar import StatusBar

__all__ = [
    "Breadcrumb",
    "ConfirmPrompt",
    "NavBar",
    "RoutePicker",
    "StatusBar",
    "confirm",
]
