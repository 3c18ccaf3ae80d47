"""Service helpers for the shell runtime."""

from .state_store import StateStore

__all__ = ["StateStore"]
