"""Workspace and document model.

A ``Workspace`` owns the buffers opened through it. A ``TextBuffer`` is the
mutable text of one open file; a ``Document`` is an immutable snapshot of a
buffer handed to snippet providers.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .config import FormattingOptions
from .text import TextChange, apply_text_changes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """Immutable text snapshot with its formatting conventions."""

    text: str
    path: Path | None = None
    formatting: FormattingOptions = field(default_factory=FormattingOptions)

    def with_changes(self, changes: Iterable[TextChange]) -> Document:
        return Document(
            text=apply_text_changes(self.text, changes),
            path=self.path,
            formatting=self.formatting,
        )


class TextBuffer:
    """Mutable text of an open file, optionally owned by a workspace."""

    def __init__(
        self,
        text: str = "",
        path: Path | None = None,
        workspace: Workspace | None = None,
        formatting: FormattingOptions | None = None,
    ) -> None:
        self._text = text
        self.path = path
        self.workspace = workspace
        self.formatting = formatting or (
            workspace.formatting if workspace is not None else FormattingOptions()
        )
        self._lock = threading.Lock()

    @property
    def text(self) -> str:
        return self._text

    @property
    def document(self) -> Document:
        return Document(text=self._text, path=self.path, formatting=self.formatting)

    def apply_changes(self, changes: Iterable[TextChange]) -> None:
        """Apply all changes or none of them."""
        changes = list(changes)
        if not changes:
            return
        with self._lock:
            self._text = apply_text_changes(self._text, changes)
        logger.debug(
            "Applied %d change(s) to %s", len(changes), self.path or "<untitled>"
        )


class Workspace:
    """A set of buffers sharing one project context."""

    def __init__(
        self,
        name: str,
        formatting: FormattingOptions | None = None,
    ) -> None:
        self.name = name
        self.formatting = formatting or FormattingOptions()
        self._buffers: list[TextBuffer] = []

    @property
    def buffers(self) -> list[TextBuffer]:
        return list(self._buffers)

    def open_buffer(self, text: str = "", path: Path | None = None) -> TextBuffer:
        buffer = TextBuffer(text=text, path=path, workspace=self)
        self._buffers.append(buffer)
        return buffer

    def close_buffer(self, buffer: TextBuffer) -> None:
        if buffer in self._buffers:
            self._buffers.remove(buffer)
            buffer.workspace = None

    def __repr__(self) -> str:
        return f"Workspace(name={self.name!r}, buffers={len(self._buffers)})"


def workspace_for_buffer(buffer: TextBuffer) -> Workspace | None:
    """Return the workspace that owns ``buffer``, if any."""
    return buffer.workspace
