"""Synchronous signals with scoped subscription handles.

Handlers run on the emitting thread. Consumers that must act on a
particular execution context marshal the work themselves (see
``EditorView.dispatch``).
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class Subscription:
    """Handle for one connected handler.

    ``release()`` may be called any number of times; only the first call
    disconnects. Usable as a context manager so it can be registered on an
    ``ExitStack``.
    """

    def __init__(self, signal: Signal, handler: Handler) -> None:
        self._signal = signal
        self._handler = handler
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._signal._disconnect(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class Signal:
    """A named event source delivering to a snapshot of its handlers."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def connect(self, handler: Handler) -> Subscription:
        subscription = Subscription(self, handler)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def _disconnect(self, subscription: Subscription) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass

    def emit(self, *args: Any) -> None:
        """Deliver to every connected handler.

        A failing handler is logged and does not prevent delivery to the
        remaining handlers.
        """
        with self._lock:
            snapshot = list(self._subscriptions)
        for subscription in snapshot:
            if subscription.released:
                continue
            try:
                subscription._handler(*args)
            except Exception:
                logger.exception("Signal %s handler failed", self.name or "<anonymous>")
