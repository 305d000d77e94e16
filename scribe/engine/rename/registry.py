"""Weak per-session cache of overlay view models.

Every view showing a session shares one view model per presentation kind.
Entries are keyed weakly by the session and are also evicted as soon as
the service reports the session ended.
"""
from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from ..signals import Subscription
from .session import InlineRenameService, RenameSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _dispose(view_model: Any) -> None:
    dispose = getattr(view_model, "dispose", None)
    if callable(dispose):
        dispose()


class ViewModelRegistry:
    """Get-or-create cache mapping a session to its shared view models.

    The factory runs without the lock held, so a factory may itself use the
    registry. Insertion is a check-then-insert under the lock: when two
    callers race, the first to insert wins, the other receives the winner
    and its own instance is disposed.
    """

    def __init__(self, service: InlineRenameService | None = None) -> None:
        self._entries: weakref.WeakKeyDictionary[RenameSession, dict[Hashable, Any]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()
        self._ended_subscription: Subscription | None = None
        if service is not None:
            self._ended_subscription = service.session_ended.connect(self.evict)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, session: RenameSession) -> bool:
        with self._lock:
            return session in self._entries

    def get(self, session: RenameSession, kind: Hashable = None) -> Any | None:
        with self._lock:
            return self._entries.get(session, {}).get(kind)

    def get_or_create(
        self,
        session: RenameSession,
        factory: Callable[[RenameSession], T],
        kind: Hashable = None,
    ) -> T:
        existing = self.get(session, kind)
        if existing is not None:
            return existing

        # Exceptions propagate and nothing is cached.
        candidate = factory(session)

        with self._lock:
            slots = self._entries.setdefault(session, {})
            winner = slots.get(kind)
            if winner is None:
                slots[kind] = candidate
                winner = candidate
        if winner is not candidate:
            logger.debug("Discarding view model that lost the race for %r", session)
            _dispose(candidate)
        else:
            logger.debug("Created %s for %r", type(candidate).__name__, session)
        return winner

    def evict(self, session: RenameSession) -> None:
        with self._lock:
            slots = self._entries.pop(session, None)
        if slots:
            logger.debug("Evicted %d view model(s) for ended %r", len(slots), session)
            for view_model in slots.values():
                _dispose(view_model)

    def close(self) -> None:
        if self._ended_subscription is not None:
            self._ended_subscription.release()
