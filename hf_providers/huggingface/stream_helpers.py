"""Streaming helpers for the Hugging Face provider.

Purpose:
    Turn a live ``httpx`` server-sent-events response into an upstream
    :class:`MessageStream`. One daemon thread per stream reads lines, decodes
    each ``data:`` payload and writes one message per event, in order. The
    thread closes the stream (and the HTTP response) exactly once when the
    upstream ends, fails, or the caller cancels.

Notes:
    - ``[DONE]`` ends the stream; comment lines (``:``) are ignored.
    - A payload that is not JSON, or does not match the chunk schema, ends the
      stream with a terminal ``DECODE`` error message.
    - An ``{"error": ...}`` payload ends the stream with a terminal
      ``UPSTREAM_API`` error message.
    - A transport failure ends it with a terminal ``TRANSPORT`` error, unless
      the failure was caused by cancellation.
"""
from __future__ import annotations

import json
import threading
import time
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import RequestKind, StreamMessage
from ..base.streaming import MessageStream
from .errors import map_upstream_error
from .response_translator import chat_response_from_wire, responses_event_from_wire

SSE_DONE = "[DONE]"

# (event name, decoded payload, chunk index) -> message
ChunkDecoder = Callable[[Optional[str], Dict[str, Any], int], StreamMessage]


def iter_sse_events(lines: Iterable[str]) -> Iterator[Tuple[Optional[str], str]]:
    """Group raw SSE lines into ``(event_name, data)`` pairs.

    Multi-line ``data`` fields are joined with newlines. A trailing event
    without its blank terminator line is still yielded.
    """
    event: Optional[str] = None
    data: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r")
        if not line:
            if data:
                yield event, "\n".join(data)
            event, data = None, []
            continue
        if line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if field == "event":
            event = value
        elif field == "data":
            data.append(value)
    if data:
        yield event, "\n".join(data)


def _is_error_payload(payload: Any) -> bool:
    return isinstance(payload, dict) and "error" in payload and "choices" not in payload and "type" not in payload


def chat_chunk_decoder(provider: str, *, raw: bool = False, started_at: Optional[float] = None) -> ChunkDecoder:
    """Decoder for ``/chat/completions`` stream chunks."""
    t0 = time.perf_counter() if started_at is None else started_at

    def _decode(_event: Optional[str], payload: Dict[str, Any], index: int) -> StreamMessage:
        chat = chat_response_from_wire(
            payload,
            provider=provider,
            request_type=RequestKind.CHAT_COMPLETION_STREAM,
            raw=raw,
        )
        chat.extra_fields.chunk_index = index
        chat.extra_fields.latency_ms = round((time.perf_counter() - t0) * 1000.0, 3)
        return StreamMessage(chat=chat)

    return _decode


def responses_event_decoder(provider: str, *, raw: bool = False, started_at: Optional[float] = None) -> ChunkDecoder:
    """Decoder for ``/responses`` stream events."""
    t0 = time.perf_counter() if started_at is None else started_at

    def _decode(event: Optional[str], payload: Dict[str, Any], index: int) -> StreamMessage:
        ev = responses_event_from_wire(event, payload, provider=provider)
        ev.extra_fields.chunk_index = index
        ev.extra_fields.latency_ms = round((time.perf_counter() - t0) * 1000.0, 3)
        if raw:
            ev.extra_fields.raw_response = payload
        return StreamMessage(responses=ev)

    return _decode


class SSEStreamReader:
    """Background producer feeding an upstream ``MessageStream`` from SSE.

    Parameters:
        response: An ``httpx.Response`` opened with ``stream=True`` whose
            status was already checked.
        stream: Destination stream; the reader is its only producer.
        decode: Chunk decoder building one message per event.
        ctx: Logging context (provider, model, request kind).
        cancel: Optional token; cancelling it closes the response and ends
            the stream without an error message.
    """

    def __init__(
        self,
        response: httpx.Response,
        stream: MessageStream,
        decode: ChunkDecoder,
        ctx: LogContext,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        self._response = response
        self._stream = stream
        self._decode = decode
        self._ctx = ctx
        self._cancel = cancel
        self._logger = get_logger("huggingface.stream")
        self._unregister_cancel: Callable[[], None] = lambda: None

    def start(self) -> threading.Thread:
        if self._cancel is not None:
            self._unregister_cancel = self._cancel.on_cancel(self._response.close)
        thread = threading.Thread(target=self._run, name=f"{self._ctx.provider}-sse-reader", daemon=True)
        thread.start()
        return thread

    @property
    def _cancelled(self) -> bool:
        return self._cancel is not None and self._cancel.cancelled

    def _error(self, code: ErrorCode, message: str, raw: Any = None) -> ProviderError:
        return ProviderError(
            code=code,
            message=message,
            provider=self._ctx.provider or "",
            model=self._ctx.model,
            request_kind=self._ctx.request_kind,
            raw=raw,
        )

    def _decode_failure(self, exc: Exception, data: str) -> StreamMessage:
        normalized_log_event(
            self._logger,
            "stream.decode_error",
            self._ctx,
            phase="stream",
            error_code=ErrorCode.DECODE.value,
            emitted=None,
            preview=data[:500],
        )
        return StreamMessage.terminal_error(self._error(ErrorCode.DECODE, f"invalid stream chunk: {exc}", exc))

    def _handle(self, event: Optional[str], data: str, index: int) -> Tuple[Optional[StreamMessage], bool]:
        """Return ``(message, last)`` for one SSE event."""
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            return self._decode_failure(e, data), True
        if _is_error_payload(payload):
            err = map_upstream_error(
                None,
                payload,
                provider=self._ctx.provider or "",
                model=self._ctx.model,
                request_kind=self._ctx.request_kind,
            )
            return StreamMessage.terminal_error(err), True
        if not isinstance(payload, dict):
            return self._decode_failure(ValueError("chunk is not a JSON object"), data), True
        try:
            return self._decode(event, payload, index), False
        except (ValidationError, ValueError) as e:
            return self._decode_failure(e, data), True

    def _run(self) -> None:
        index = 0
        try:
            for event, data in iter_sse_events(self._response.iter_lines()):
                if self._cancelled:
                    break
                if data.strip() == SSE_DONE:
                    break
                message, last = self._handle(event, data, index)
                if message is not None and not self._stream.put(message):
                    break
                index += 1
                if last:
                    break
        except (httpx.HTTPError, httpx.StreamError) as e:
            if not self._cancelled:
                self._stream.put(StreamMessage.terminal_error(self._error(ErrorCode.TRANSPORT, str(e), e)))
        finally:
            self._unregister_cancel()
            self._response.close()
            self._stream.close()


__all__ = [
    "SSE_DONE",
    "ChunkDecoder",
    "SSEStreamReader",
    "chat_chunk_decoder",
    "iter_sse_events",
    "responses_event_decoder",
]
