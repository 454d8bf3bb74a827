"""Stream relay: re-shapes a live message stream on a background thread.

The relay owns the only writer of its output stream. For every upstream
message, in order, it writes exactly one output message:

* ``None`` and control messages (error, done, keep-alive) pass through
  unchanged;
* data messages go through the relay's ``transform`` (re-shaping chat chunks
  into text chunks, attaching alias metadata...).

The output buffer has the upstream's capacity (minimum 1), so a slow
consumer blocks the relay which in turn stops reading upstream. Upstream
closure (including closure caused by cancellation) is the only termination
signal; the output is then closed exactly once, after every message already
read has been written.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Iterable, Optional

from ..errors import ErrorCode, ProviderError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import RequestKind, StreamMessage
from .message_stream import MessageStream

Transform = Callable[[StreamMessage], StreamMessage]


class StreamRelay:
    """Single-shot relay from an upstream stream to a new output stream.

    Parameters:
        transform: Applied to every data message; must return a message.
        provider: Provider key for logs and error attribution.
        model: Requested model for logs and error attribution.
        request_kind: Operation tag of the output stream.
    """

    def __init__(
        self,
        transform: Transform,
        *,
        provider: str,
        model: Optional[str] = None,
        request_kind: Optional[RequestKind] = None,
    ) -> None:
        self._transform = transform
        self._provider = provider
        self._model = model
        self._request_kind = request_kind
        self._started = False
        self._logger = get_logger("streaming.relay")
        self.thread: Optional[threading.Thread] = None

    def relay(self, upstream: Iterable[Optional[StreamMessage]]) -> MessageStream:
        """Start relaying ``upstream`` and return the output stream.

        Returns immediately; relaying happens on a daemon thread.

        Raises:
            RuntimeError: when called twice on the same relay.
        """
        if self._started:
            raise RuntimeError("relay already started")
        self._started = True
        out = MessageStream(getattr(upstream, "capacity", 1))
        self.thread = threading.Thread(
            target=self._run,
            args=(upstream, out),
            name=f"{self._provider}-stream-relay",
            daemon=True,
        )
        self.thread.start()
        return out

    def _failure(self, exc: Exception) -> StreamMessage:
        if isinstance(exc, ProviderError):
            err = exc
        else:
            err = ProviderError(
                code=ErrorCode.INTERNAL,
                message=f"stream transform failed: {exc}",
                provider=self._provider,
                model=self._model,
                request_kind=self._request_kind,
                raw=exc,
            )
        return StreamMessage.terminal_error(err)

    def _run(self, upstream: Iterable[Optional[StreamMessage]], out: MessageStream) -> None:
        t0 = time.perf_counter()
        emitted = 0
        error_code: Optional[str] = None
        try:
            for message in upstream:
                if message is not None and not message.is_control:
                    try:
                        message = self._transform(message)
                    except Exception as exc:  # noqa: BLE001 - surfaced as a terminal message
                        failure = self._failure(exc)
                        error_code = failure.error.code.value if failure.error else None
                        out.put(failure)
                        _abandon(upstream)
                        break
                elif message is not None and message.error is not None:
                    error_code = message.error.code.value
                if not out.put(message):
                    _abandon(upstream)
                    break
                emitted += 1
        finally:
            out.close()
            normalized_log_event(
                self._logger,
                "stream.end",
                LogContext(provider=self._provider, model=self._model, request_kind=self._request_kind),
                phase="finalize",
                error_code=error_code,
                emitted=emitted,
                total_duration_ms=round((time.perf_counter() - t0) * 1000.0, 3),
                abandoned=out.abandoned or None,
            )


def _abandon(upstream: object) -> None:
    abandon = getattr(upstream, "abandon", None)
    if callable(abandon):
        abandon()


__all__ = ["StreamRelay", "Transform"]
