"""Editor view — the surface that displays buffers and hosts adornments.

A view's adornment layer, selection and focus belong to the thread that
created it. Work triggered from elsewhere goes through ``dispatch()``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from scribe.engine.signals import Signal
from scribe.engine.text import TextSpan
from scribe.engine.workspace import TextBuffer, Workspace, workspace_for_buffer
from scribe.tui.adornment_layer import AdornmentLayer

if TYPE_CHECKING:
    from textual.app import App

logger = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


def _run_inline(callback: Callable[[], None]) -> None:
    callback()


def make_textual_dispatcher(app: App) -> Dispatcher:
    """Run callbacks on the thread that created the dispatcher.

    Calls from the owning thread run immediately; calls from any other
    thread are marshalled with ``app.call_from_thread``.
    """
    owner = threading.get_ident()

    def dispatch(callback: Callable[[], None]) -> None:
        if threading.get_ident() == owner:
            callback()
        else:
            app.call_from_thread(callback)

    return dispatch


class EditorView:
    """An open editor surface over one or more buffers."""

    def __init__(
        self,
        buffers: Iterable[TextBuffer],
        adornment_layer: AdornmentLayer | None = None,
        selection: TextSpan | None = None,
        has_focus: bool = False,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._buffers = list(buffers)
        self.adornment_layer = adornment_layer or AdornmentLayer()
        self._selection = selection or TextSpan(0, 0)
        self._has_focus = has_focus
        self._dispatcher = dispatcher or _run_inline
        self._closed = False
        self.closed = Signal("view_closed")

    # ── buffer graph ─────────────────────────────────────────────────

    @property
    def buffers(self) -> list[TextBuffer]:
        return list(self._buffers)

    def includes_workspace(self, workspace: Workspace) -> bool:
        """True when any buffer shown in this view belongs to ``workspace``."""
        return any(workspace_for_buffer(b) is workspace for b in self._buffers)

    # ── selection and focus ──────────────────────────────────────────

    @property
    def primary_selection(self) -> TextSpan:
        return self._selection

    def select(self, span: TextSpan) -> None:
        self._selection = span

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    def set_focus(self, focused: bool) -> None:
        self._has_focus = focused

    # ── lifecycle ────────────────────────────────────────────────────

    @property
    def is_closed(self) -> bool:
        return self._closed

    def dispatch(self, callback: Callable[[], None]) -> None:
        self._dispatcher(callback)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.debug("View closed: %r", self)
        self.closed.emit()
        self.adornment_layer.remove_all()
