"""View models backing the two rename overlay presentations.

Both hold their session weakly: a view model never keeps a session alive,
so the registry's weak entry can be collected once the service lets go.
"""
from __future__ import annotations

import weakref

from ..text import TextSpan
from .session import RenameSession


class _SessionViewModel:
    def __init__(self, session: RenameSession) -> None:
        self._session_ref = weakref.ref(session)
        self.identifier_text = session.original_text
        self._disposed = False

    @property
    def session(self) -> RenameSession | None:
        return self._session_ref()

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        self._disposed = True


class RenameFlyoutViewModel(_SessionViewModel):
    """State for the inline flyout shown beside the identifier.

    ``identifier_selection`` is relative to the start of the identifier,
    so the flyout's text box mirrors the editor's selection.
    """

    def __init__(self, session: RenameSession, identifier_selection: TextSpan) -> None:
        super().__init__(session)
        self.identifier_selection = identifier_selection

    @property
    def start_selection_index(self) -> int:
        return self.identifier_selection.start

    @property
    def selection_length(self) -> int:
        return self.identifier_selection.length


class RenameDashboardViewModel(_SessionViewModel):
    """State for the panel presentation."""

    @property
    def header_text(self) -> str:
        return f"Rename: {self.identifier_text}"
