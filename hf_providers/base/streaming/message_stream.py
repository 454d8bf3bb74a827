"""Bounded, closable FIFO of stream messages.

A ``MessageStream`` is the hand-off point between a producer thread (the SSE
reader or a relay) and its consumer. It behaves like a buffered channel:

* ``put`` blocks while the buffer is full (back-pressure);
* ``close`` marks the end of the stream exactly once and is queued behind
  every message already written, so nothing is lost at shutdown;
* iterating yields messages in write order and stops at closure;
* ``abandon`` is the consumer-side escape hatch: pending messages are
  discarded, the producer's ``put`` calls return ``False`` and iteration
  ends.

Each stream has exactly one producer. ``None`` is a legal message.
"""
from __future__ import annotations

import contextlib
import queue
import threading
from typing import Any, Iterator, List

_CLOSED = object()
_POLL_SECONDS = 0.05


class MessageStream:
    """Channel-like bounded queue with explicit single closure."""

    def __init__(self, capacity: int = 1) -> None:
        self._capacity = max(1, int(capacity or 1))
        self._queue: "queue.Queue[Any]" = queue.Queue(maxsize=self._capacity)
        self._lock = threading.Lock()
        self._closed = False
        self._abandoned = threading.Event()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def abandoned(self) -> bool:
        return self._abandoned.is_set()

    def _offer(self, item: Any) -> bool:
        while not self._abandoned.is_set():
            try:
                self._queue.put(item, timeout=_POLL_SECONDS)
                return not self._abandoned.is_set()
            except queue.Full:
                continue
        return False

    def put(self, message: Any) -> bool:
        """Append ``message``, blocking while the buffer is full.

        Returns ``False`` when the consumer abandoned the stream, in which
        case the producer should stop.

        Raises:
            RuntimeError: if the stream was already closed.
        """
        if self._closed:
            raise RuntimeError("cannot put on a closed stream")
        return self._offer(message)

    def close(self) -> bool:
        """Close the stream; returns ``False`` if it was already closed."""
        with self._lock:
            if self._closed:
                return False
            self._closed = True
        self._offer(_CLOSED)
        return True

    def abandon(self) -> None:
        """Stop consuming: drop buffered messages and release the producer."""
        self._abandoned.set()
        with contextlib.suppress(queue.Empty):
            while True:
                self._queue.get_nowait()
        with contextlib.suppress(queue.Full):
            self._queue.put_nowait(_CLOSED)

    def __iter__(self) -> Iterator[Any]:
        while not self._abandoned.is_set():
            item = self._queue.get()
            if item is _CLOSED:
                # Leave the marker for any other iterator of this stream.
                with contextlib.suppress(queue.Full):
                    self._queue.put_nowait(_CLOSED)
                return
            yield item

    def collect(self) -> List[Any]:
        """Drain the stream to a list (blocks until closure)."""
        return list(self)


__all__ = ["MessageStream"]
