"""Cooperative cancellation token implementation."""

from __future__ import annotations

import threading
from typing import Callable, List, Optional


class CancellationToken:
    """A thread-safe, one-way cancellation flag with callbacks.

    ``cancel`` is idempotent. Callbacks registered with ``on_cancel`` run
    exactly once, on the thread that cancels (or immediately when the token
    is already cancelled at registration). A token may be shared by many
    streams; each one unregisters its callback when it finishes.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason supplied at cancel time, if any."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation and run pending callbacks."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run when the token is cancelled.

        Returns:
            A no-argument function removing the registration. Calling it after
            the callback ran, or more than once, does nothing.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)
        callback()
        return lambda: None

    def _unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            for i, cb in enumerate(self._callbacks):
                if cb is callback:
                    del self._callbacks[i]
                    return

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
