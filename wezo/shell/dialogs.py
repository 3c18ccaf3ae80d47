"""Promise-style dialog host.

``open_dialog`` hands a renderer a one-shot ``close`` callback, shows whatever
the renderer returns as an overlay, and suspends the caller until ``close`` is
invoked. Presentation is delegated to a ``DialogPresenter`` so the host runs
headless in tests and as modal screens inside the Textual app.
"""

from __future__ import annotations

import asyncio
import itertools
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, List, Optional, Protocol, Tuple, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class DialogError(Exception):
    """Base class for dialog failures surfaced to the opener."""


class DialogRenderError(DialogError):
    """Raised when a dialog's renderer or presenter fails."""


class DialogTimeout(DialogError):
    """Raised when a dialog is not closed within its timeout."""


class DialogBase:
    def __init__(
        self, dialog_id: str, *, closeable: bool, release: Callable[["DialogBase"], None]
    ):
        self.dialog_id = dialog_id
        self.closeable = closeable
        self.content: Any = None
        self.shown = False
        self._closed = False
        self._release = release

    @property
    def closed(self) -> bool:
        return self._closed

    def _discard(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._release(self)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<{type(self).__name__} {self.dialog_id} {state}>"


class DialogInstance(DialogBase, Generic[T]):
    """An open dialog whose result resolves exactly once."""

    def __init__(
        self,
        dialog_id: str,
        result: "asyncio.Future[T]",
        release: Callable[[DialogBase], None],
    ):
        super().__init__(dialog_id, closeable=True, release=release)
        self._result = result

    def close(self, value: T) -> None:
        if self._closed:
            logger.debug("Ignoring repeated dialog close", dialog=self.dialog_id)
            return
        if not self._result.done():
            self._result.set_result(value)
        self._discard()

    def _discard(self) -> None:
        if not self._result.done():
            self._result.cancel()
        super()._discard()


class BlockingDialog(DialogBase):
    """A non-closeable overlay, such as a loading notice, released by its opener."""

    def __init__(self, dialog_id: str, release: Callable[[DialogBase], None]):
        super().__init__(dialog_id, closeable=False, release=release)

    def release(self) -> None:
        self._discard()


class DialogPresenter(Protocol):
    def show(self, dialog: DialogBase) -> None: ...

    def dismiss(self, dialog: DialogBase) -> None: ...


class HeadlessPresenter:
    """Keeps visible dialogs in a list; used outside a running UI."""

    def __init__(self) -> None:
        self.visible: List[DialogBase] = []

    def show(self, dialog: DialogBase) -> None:
        self.visible.append(dialog)

    def dismiss(self, dialog: DialogBase) -> None:
        if dialog in self.visible:
            self.visible.remove(dialog)


class DialogHost:
    """Opens overlays and resolves their awaited results."""

    def __init__(
        self,
        presenter: Optional[DialogPresenter] = None,
        *,
        default_timeout: Optional[float] = None,
    ):
        self._presenter = presenter or HeadlessPresenter()
        self._default_timeout = default_timeout
        self._stack: List[DialogBase] = []
        self._counter = itertools.count(1)

    @property
    def presenter(self) -> DialogPresenter:
        return self._presenter

    @property
    def active(self) -> Tuple[DialogBase, ...]:
        """Open dialogs in opening order, top-most last."""
        return tuple(self._stack)

    def _next_id(self) -> str:
        return f"dialog-{next(self._counter)}"

    def _teardown(self, dialog: DialogBase) -> None:
        if dialog in self._stack:
            self._stack.remove(dialog)
        if not dialog.shown:
            return
        dialog.shown = False
        try:
            self._presenter.dismiss(dialog)
        except Exception as exc:
            logger.warning(
                "Dialog teardown failed", dialog=dialog.dialog_id, error=str(exc)
            )
        logger.debug("Dialog closed", dialog=dialog.dialog_id)

    def _present(self, dialog: DialogBase, render: Callable[[], Any]) -> None:
        self._stack.append(dialog)
        try:
            dialog.content = render()
            if not dialog.closed:
                dialog.shown = True
                self._presenter.show(dialog)
        except Exception as exc:
            logger.error(
                "Dialog failed to render", dialog=dialog.dialog_id, error=str(exc)
            )
            dialog._discard()
            raise DialogRenderError(
                f"Dialog {dialog.dialog_id} failed to render: {exc}"
            ) from exc
        logger.debug("Dialog opened", dialog=dialog.dialog_id, closeable=dialog.closeable)

    async def open_dialog(
        self,
        renderer: Callable[[Callable[[T], None]], Any],
        *,
        timeout: Optional[float] = None,
    ) -> T:
        """Show ``renderer(close)`` and return the value first passed to ``close``."""
        result: "asyncio.Future[T]" = asyncio.get_running_loop().create_future()
        dialog: DialogInstance[T] = DialogInstance(self._next_id(), result, self._teardown)
        self._present(dialog, lambda: renderer(dialog.close))

        limit = timeout if timeout is not None else self._default_timeout
        try:
            if limit is None:
                return await asyncio.shield(result)
            return await asyncio.wait_for(asyncio.shield(result), limit)
        except asyncio.TimeoutError:
            raise DialogTimeout(
                f"Dialog {dialog.dialog_id} was not closed within {limit}s"
            ) from None
        finally:
            if not dialog.closed:
                dialog._discard()

    def open_blocking(self, renderer: Callable[[], Any]) -> BlockingDialog:
        """Show a dialog the user cannot close; call ``release()`` on the handle."""
        dialog = BlockingDialog(self._next_id(), self._teardown)
        self._present(dialog, renderer)
        return dialog

    @contextmanager
    def blocking(self, renderer: Callable[[], Any]) -> Iterator[BlockingDialog]:
        dialog = self.open_blocking(renderer)
        try:
            yield dialog
        finally:
            dialog.release()
