"""Adornment layer — the per-view surface overlays are installed on."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from textual.widget import Widget

from scribe.engine.text import TextSpan

logger = logging.getLogger(__name__)

Teardown = Callable[[Any], None]


class AdornmentPositioning(str, Enum):
    VIEWPORT_RELATIVE = "viewport_relative"
    TEXT_RELATIVE = "text_relative"


@dataclass
class Adornment:
    element: Any
    positioning: AdornmentPositioning
    teardown: Teardown | None = None
    visual_span: TextSpan | None = None


class AdornmentLayer:
    """Holds installed adornments and runs each teardown exactly once.

    An adornment without ``visual_span`` is never removed by buffer edits;
    only ``remove_all()`` takes it down.
    """

    def __init__(self) -> None:
        self._adornments: list[Adornment] = []

    @property
    def adornments(self) -> list[Adornment]:
        return list(self._adornments)

    @property
    def elements(self) -> list[Any]:
        return [a.element for a in self._adornments]

    def add(
        self,
        element: Any,
        positioning: AdornmentPositioning,
        teardown: Teardown | None = None,
        visual_span: TextSpan | None = None,
    ) -> Adornment:
        adornment = Adornment(element, positioning, teardown, visual_span)
        self._adornments.append(adornment)
        self._on_added(adornment)
        return adornment

    def remove_all(self) -> None:
        removed, self._adornments = self._adornments, []
        for adornment in removed:
            self._on_removed(adornment)
            if adornment.teardown is not None:
                try:
                    adornment.teardown(adornment.element)
                except Exception:
                    logger.exception("Adornment teardown failed for %r", adornment.element)

    def _on_added(self, adornment: Adornment) -> None:
        pass

    def _on_removed(self, adornment: Adornment) -> None:
        pass


class MountedAdornmentLayer(AdornmentLayer):
    """Adornment layer that also mounts widgets into a textual container."""

    def __init__(self, container: Widget) -> None:
        super().__init__()
        self._container = container

    def _on_added(self, adornment: Adornment) -> None:
        if isinstance(adornment.element, Widget):
            self._container.mount(adornment.element)

    def _on_removed(self, adornment: Adornment) -> None:
        element = adornment.element
        if isinstance(element, Widget) and element.parent is not None:
            element.remove()
