"""Theme hooks for rename overlays."""

from __future__ import annotations

import logging
from typing import Protocol

from textual.dom import DOMNode

logger = logging.getLogger(__name__)

THEMES = ("dark", "light", "high-contrast")


class RenameColorUpdater(Protocol):
    """Refreshes dashboard colours before an overlay is built."""

    def update_colors(self) -> None: ...


class ThemeApplier:
    """Tags overlay elements with the active rename theme."""

    def __init__(self, theme: str = "dark") -> None:
        if theme not in THEMES:
            logger.warning("Unknown rename theme %r; using dark", theme)
            theme = "dark"
        self.theme = theme

    @property
    def css_class(self) -> str:
        return f"rename-theme-{self.theme}"

    def apply_theme_to_element(self, element: object) -> None:
        if isinstance(element, DOMNode):
            for name in THEMES:
                element.remove_class(f"rename-theme-{name}")
            element.add_class(self.css_class)
        if hasattr(element, "rename_theme"):
            element.rename_theme = self.theme
