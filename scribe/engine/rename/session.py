"""Rename session state and the service that owns the active session.

State Diagram:

    ACTIVE ──┬──> COMMITTED
             │
             └──> CANCELLED

Terminal states are final. Invalid transitions raise ValueError.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum

from ..errors import NoActiveRenameSessionError, RenameSessionActiveError
from ..signals import Signal
from ..text import TextChange, TextSpan
from ..workspace import TextBuffer, Workspace, workspace_for_buffer

logger = logging.getLogger(__name__)


class RenameSessionState(str, Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


VALID_TRANSITIONS: dict[RenameSessionState, set[RenameSessionState]] = {
    RenameSessionState.ACTIVE: {
        RenameSessionState.COMMITTED,
        RenameSessionState.CANCELLED,
    },
    RenameSessionState.COMMITTED: set(),
    RenameSessionState.CANCELLED: set(),
}


def validate_transition(
    current: RenameSessionState, target: RenameSessionState
) -> None:
    """Validate a state transition. Raises ValueError if invalid."""
    allowed = VALID_TRANSITIONS.get(current, set())
    if target not in allowed:
        allowed_str = ", ".join(s.value for s in allowed) or "none (terminal)"
        raise ValueError(
            f"Invalid rename session transition: {current.value} -> {target.value}. "
            f"Allowed from {current.value}: {allowed_str}"
        )


class RenameSession:
    """An in-progress rename of one identifier.

    Hashed by identity so it can key weak caches. Views never own a
    session; the service holds the only strong reference while it is
    active.
    """

    def __init__(
        self,
        workspace: Workspace,
        buffer: TextBuffer,
        trigger_span: TextSpan,
    ) -> None:
        self.workspace = workspace
        self.buffer = buffer
        self.trigger_span = trigger_span
        self.original_text = buffer.text[trigger_span.start:trigger_span.end]
        self.state = RenameSessionState.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.state is RenameSessionState.ACTIVE

    def _transition(self, target: RenameSessionState) -> None:
        validate_transition(self.state, target)
        self.state = target

    def __repr__(self) -> str:
        return (
            f"RenameSession(identifier={self.original_text!r}, "
            f"workspace={self.workspace.name!r}, state={self.state.value})"
        )


class InlineRenameService:
    """Owns the single active rename session and announces changes.

    ``active_session_changed`` fires with no arguments whenever the active
    session starts or ends. ``session_ended`` fires with the ended session
    just before that.
    """

    def __init__(self) -> None:
        self._active_session: RenameSession | None = None
        self._lock = threading.Lock()
        self.active_session_changed = Signal("active_session_changed")
        self.session_ended = Signal("session_ended")

    @property
    def active_session(self) -> RenameSession | None:
        return self._active_session

    def start_session(self, buffer: TextBuffer, trigger_span: TextSpan) -> RenameSession:
        workspace = workspace_for_buffer(buffer)
        if workspace is None:
            raise ValueError("Cannot start rename in a buffer with no workspace")
        with self._lock:
            if self._active_session is not None:
                raise RenameSessionActiveError(self._active_session.workspace.name)
            session = RenameSession(workspace, buffer, trigger_span)
            self._active_session = session
        logger.debug("Rename session started: %r", session)
        self.active_session_changed.emit()
        return session

    def commit(self, new_name: str) -> RenameSession:
        """Replace the identifier in the triggering buffer and end the session."""
        session = self._require_active()
        session.buffer.apply_changes([TextChange(session.trigger_span, new_name)])
        self._end(session, RenameSessionState.COMMITTED)
        return session

    def cancel(self) -> RenameSession:
        session = self._require_active()
        self._end(session, RenameSessionState.CANCELLED)
        return session

    def _require_active(self) -> RenameSession:
        session = self._active_session
        if session is None:
            raise NoActiveRenameSessionError()
        return session

    def _end(self, session: RenameSession, state: RenameSessionState) -> None:
        with self._lock:
            session._transition(state)
            if self._active_session is session:
                self._active_session = None
        logger.debug("Rename session ended: %r", session)
        self.session_ended.emit(session)
        self.active_session_changed.emit()
