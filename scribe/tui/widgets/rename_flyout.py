"""Rename overlays — inline flyout and panel dashboard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.text import Text
from textual.widget import Widget

from scribe.engine.rename.view_models import (
    RenameDashboardViewModel,
    RenameFlyoutViewModel,
)

if TYPE_CHECKING:
    from scribe.tui.view import EditorView

logger = logging.getLogger(__name__)


class _RenameOverlay(Widget):
    def __init__(self, view: EditorView, **kwargs) -> None:
        super().__init__(**kwargs)
        self.editor_view = view
        self.rename_theme: str | None = None
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        logger.debug("%s disposed", type(self).__name__)


class RenameFlyout(_RenameOverlay):
    """Flyout next to the identifier with the editor selection mirrored."""

    DEFAULT_CSS = """
    RenameFlyout {
        height: 3;
        width: auto;
        padding: 0 1;
        border: round $accent;
        background: $surface;
    }
    """

    def __init__(
        self,
        view_model: RenameFlyoutViewModel,
        view: EditorView,
        **kwargs,
    ) -> None:
        super().__init__(view, classes="rename-flyout", **kwargs)
        self.view_model = view_model

    def render(self) -> Text:
        name = self.view_model.identifier_text
        start = max(0, min(self.view_model.start_selection_index, len(name)))
        end = max(start, min(start + self.view_model.selection_length, len(name)))
        text = Text()
        text.append(name[:start])
        text.append(name[start:end], style="reverse")
        text.append(name[end:])
        return text


class RenameDashboard(_RenameOverlay):
    """Panel docked to the view's edge listing the rename in progress."""

    DEFAULT_CSS = """
    RenameDashboard {
        dock: top;
        height: 2;
        padding: 0 1;
        background: $panel;
    }
    """

    def __init__(
        self,
        view_model: RenameDashboardViewModel,
        view: EditorView,
        **kwargs,
    ) -> None:
        super().__init__(view, classes="rename-dashboard", **kwargs)
        self.view_model = view_model

    def render(self) -> Text:
        text = Text()
        text.append(self.view_model.header_text, style="bold")
        text.append("\n")
        text.append("Enter to apply │ Esc to cancel", style="dim")
        return text
