"""Hugging Face provider adapter (OpenAI-compatible router over HTTP).

Summary:
- Chat and Responses calls go to the inference router
  (``https://router.huggingface.co/v1``) through pooled ``httpx`` clients.
- Text completion has no upstream endpoint: it is served by synthesizing a
  single-message chat request and re-shaping the reply (or every stream
  chunk) into text-completion form.
- Embeddings use the ``hf-inference`` feature-extraction pipeline.
- Model listing queries the Hub catalog (see :mod:`.catalog`).
- Speech and transcription are not offered; they raise ``UNSUPPORTED``
  through the :class:`BaseProvider` defaults.

Aliases:
    Every call resolves the requested model against the credential's alias
    map once, sends the deployment name upstream and reports both names in
    ``extra_fields`` (the deployment only when it differs).

Streaming:
    A stream call returns as soon as the upstream accepted the request. An
    SSE reader thread fills the upstream ``MessageStream`` and a
    :class:`StreamRelay` thread re-shapes and decorates every message into
    the stream handed to the caller.

Errors & Observability:
    Failures raise ``ProviderError`` (``OPERATION_NOT_ALLOWED``,
    ``UNSUPPORTED``, ``TRANSPORT``, ``DECODE``, ``UPSTREAM_API``); start and
    end of every call are logged with ``normalized_log_event``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError, operation_not_allowed
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    CatalogPage,
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    Key,
    ListModelsRequest,
    RequestKind,
    ResponsesRequest,
    ResponsesResponse,
    StreamMessage,
    TextCompletionRequest,
    TextCompletionResponse,
)
from ..base.provider_base import BaseProvider
from ..base.streaming import MessageStream, StreamRelay
from ..config import get_provider_config
from ..config.defaults import (
    HUGGINGFACE_DEFAULT_BASE_URL,
    HUGGINGFACE_DEFAULT_HUB_BASE_URL,
    HUGGINGFACE_PROVIDER_NAME,
    HUGGINGFACE_STREAM_BUFFER_SIZE,
)
from .aliases import prepare_request
from .catalog import CatalogAggregator
from .helpers import HuggingFaceHTTPMixin, feature_extraction_path, inference_router_url
from .request_translator import chat_to_wire, embedding_to_wire, responses_to_wire, text_to_chat_request
from .response_translator import (
    chat_response_from_wire,
    chat_to_text_response,
    decorate_response_metadata,
    embedding_response_from_wire,
    responses_response_from_wire,
)
from .stream_helpers import ChunkDecoder, SSEStreamReader, chat_chunk_decoder, responses_event_decoder

CHAT_PATH = "/chat/completions"
RESPONSES_PATH = "/responses"


class HuggingFaceProvider(HuggingFaceHTTPMixin, BaseProvider):
    """Hugging Face inference provider.

    Parameters:
        base_url: Router base URL; defaults to the configured or built-in
            ``https://router.huggingface.co/v1``. Trailing slashes are removed.
        hub_base_url: Hub root used for catalog queries and model links.
        provider_name: Provider key reported in ids, metadata and errors
            (lets a custom provider reuse this adapter).
        extra_headers: Headers sent with every request.
        send_back_raw_response: Attach decoded upstream bodies to
            ``extra_fields.raw_response``.
        allowed_operations: Request kinds this instance may serve; ``None``
            allows every supported operation.
        stream_buffer_size: Capacity of the upstream message stream.

    Side effects:
        Reads ``get_provider_config("huggingface")``; explicit arguments win.
    """

    SUPPORTED_OPERATIONS: FrozenSet[RequestKind] = frozenset(
        {
            RequestKind.CHAT_COMPLETION,
            RequestKind.CHAT_COMPLETION_STREAM,
            RequestKind.TEXT_COMPLETION,
            RequestKind.TEXT_COMPLETION_STREAM,
            RequestKind.EMBEDDING,
            RequestKind.LIST_MODELS,
            RequestKind.RESPONSES,
            RequestKind.RESPONSES_STREAM,
        }
    )

    def __init__(
        self,
        base_url: Optional[str] = None,
        hub_base_url: Optional[str] = None,
        provider_name: Optional[str] = None,
        extra_headers: Optional[Dict[str, str]] = None,
        send_back_raw_response: Optional[bool] = None,
        allowed_operations: Optional[Iterable[str]] = None,
        stream_buffer_size: Optional[int] = None,
        api_key: Optional[str] = None,
    ) -> None:
        cfg = get_provider_config(
            "huggingface",
            overrides={
                "base_url": base_url,
                "hub_base_url": hub_base_url,
                "provider_name": provider_name,
                "extra_headers": extra_headers,
                "send_back_raw_response": send_back_raw_response,
                "allowed_operations": allowed_operations,
                "stream_buffer_size": stream_buffer_size,
                "api_key": api_key,
            },
        )
        self._name = cfg.get("provider_name") or HUGGINGFACE_PROVIDER_NAME
        self._base_url = (cfg.get("base_url") or HUGGINGFACE_DEFAULT_BASE_URL).rstrip("/")
        self._hub_base_url = (cfg.get("hub_base_url") or HUGGINGFACE_DEFAULT_HUB_BASE_URL).rstrip("/")
        self._extra_headers = {str(k): str(v) for k, v in (cfg.get("extra_headers") or {}).items()}
        self._raw = bool(cfg.get("send_back_raw_response"))
        self._stream_buffer_size = int(cfg.get("stream_buffer_size") or HUGGINGFACE_STREAM_BUFFER_SIZE)
        allowed = cfg.get("allowed_operations")
        self._allowed: Optional[FrozenSet[RequestKind]] = (
            None if allowed is None else frozenset(RequestKind(k) for k in allowed)
        )
        self._api_key = cfg.get("api_key") or ""
        self._catalog = CatalogAggregator(
            provider=self._name,
            hub_base_url=self._hub_base_url,
            extra_headers=self._extra_headers,
        )
        self._logger = get_logger("huggingface")

    @property
    def provider_name(self) -> str:
        """Provider key used in catalog ids, metadata, logs and errors."""
        return self._name

    @property
    def base_url(self) -> str:
        return self._base_url

    def default_key(self) -> Key:
        """Credential built from configuration (anonymous when no API key is set)."""
        return Key(value=self._api_key, id="config") if self._api_key else Key.anonymous()

    def supported_operations(self) -> FrozenSet[RequestKind]:
        """Declared operations, narrowed by ``allowed_operations`` when configured."""
        ops = frozenset(self.SUPPORTED_OPERATIONS)
        return ops if self._allowed is None else ops & self._allowed

    def check_operation_allowed(self, kind: RequestKind, model: Optional[str] = None) -> None:
        """Raise ``OPERATION_NOT_ALLOWED`` when configuration disables ``kind``."""
        if self._allowed is not None and kind not in self._allowed:
            raise operation_not_allowed(kind, self._name, model)

    # ---------------------------------------------------------------- helpers

    def _ctx(self, kind: RequestKind, requested: Optional[str], resolved: Optional[str] = None) -> LogContext:
        return LogContext(
            provider=self._name,
            model=requested,
            model_deployment=resolved if resolved and resolved != requested else None,
            request_kind=kind,
        )

    def _decode_error(self, exc: Exception, kind: RequestKind, model: Optional[str]) -> ProviderError:
        return self._error(ErrorCode.DECODE, f"unexpected {kind.value} response shape: {exc}", kind, model, raw=exc)

    def _log_start(self, ctx: LogContext) -> None:
        normalized_log_event(self._logger, "request.start", ctx, phase="start", emitted=False)

    def _log_end(self, ctx: LogContext, latency_ms: Optional[float], tokens: Any = None) -> None:
        normalized_log_event(
            self._logger,
            "request.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=tokens,
            latency_ms=latency_ms,
        )

    def _execute_chat(
        self, key: Key, request: ChatRequest, kind: RequestKind, requested: str
    ) -> Tuple[ChatResponse, str]:
        """Resolve, send and decode one chat call; return the reply and the deployment used."""
        prepared, resolved = prepare_request(request, key)
        ctx = self._ctx(kind, requested, resolved)
        self._log_start(ctx)
        data, latency_ms = self._post_json(
            self._base_url, CHAT_PATH, chat_to_wire(prepared), key, kind, requested, ctx
        )
        try:
            chat = chat_response_from_wire(data, provider=self._name, request_type=kind, raw=self._raw)
        except ValueError as e:
            raise self._decode_error(e, kind, requested) from e
        chat.extra_fields.latency_ms = latency_ms
        decorate_response_metadata(chat.extra_fields, requested, resolved)
        self._log_end(ctx, latency_ms, chat.usage)
        return chat, resolved

    def _start_stream(
        self,
        key: Key,
        path: str,
        body: Dict[str, Any],
        kind: RequestKind,
        requested: str,
        resolved: str,
        decoder: ChunkDecoder,
        transform: Callable[[StreamMessage], StreamMessage],
        cancel: Optional[CancellationToken],
    ) -> MessageStream:
        ctx = self._ctx(kind, requested, resolved)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", emitted=False)
        response = self._open_stream(self._base_url, path, body, key, kind, requested, ctx)
        upstream = MessageStream(self._stream_buffer_size)
        SSEStreamReader(response, upstream, decoder, ctx, cancel).start()
        relay = StreamRelay(transform, provider=self._name, model=requested, request_kind=kind)
        return relay.relay(upstream)

    # ------------------------------------------------------------- operations

    def chat_completion(self, key: Key, request: ChatRequest) -> ChatResponse:
        """Non-streaming chat completion.

        Raises:
            ProviderError: ``OPERATION_NOT_ALLOWED`` before any I/O, or
                ``TRANSPORT`` / ``UPSTREAM_API`` / ``DECODE`` from the call.
        """
        self.check_operation_allowed(RequestKind.CHAT_COMPLETION, request.model)
        chat, _ = self._execute_chat(key, request, RequestKind.CHAT_COMPLETION, request.model)
        return chat

    def chat_completion_stream(
        self, key: Key, request: ChatRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        """Streaming chat completion; each chunk carries alias metadata."""
        kind = RequestKind.CHAT_COMPLETION_STREAM
        self.check_operation_allowed(kind, request.model)
        prepared, resolved = prepare_request(request, key)
        requested = request.model

        def _decorate(message: StreamMessage) -> StreamMessage:
            if message.chat is not None:
                decorate_response_metadata(message.chat.extra_fields, requested, resolved)
            return message

        return self._start_stream(
            key,
            CHAT_PATH,
            chat_to_wire(prepared, stream=True),
            kind,
            requested,
            resolved,
            chat_chunk_decoder(self._name, raw=self._raw),
            _decorate,
            cancel,
        )

    def text_completion(self, key: Key, request: TextCompletionRequest) -> TextCompletionResponse:
        """Text completion served through a synthesized chat request."""
        self.check_operation_allowed(RequestKind.TEXT_COMPLETION, request.model)
        chat_request = text_to_chat_request(request)
        chat, resolved = self._execute_chat(key, chat_request, RequestKind.TEXT_COMPLETION, request.model)
        return chat_to_text_response(chat, request.model, resolved)

    def text_completion_stream(
        self, key: Key, request: TextCompletionRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        """Streaming text completion; chat chunks are re-shaped one-to-one."""
        kind = RequestKind.TEXT_COMPLETION_STREAM
        self.check_operation_allowed(kind, request.model)
        chat_request = text_to_chat_request(request)
        prepared, resolved = prepare_request(chat_request, key)
        requested = request.model

        def _to_text(message: StreamMessage) -> StreamMessage:
            if message.chat is None:
                return message
            text = chat_to_text_response(message.chat, requested, resolved, request_type=kind)
            return StreamMessage(text=text, done=message.done)

        return self._start_stream(
            key,
            CHAT_PATH,
            chat_to_wire(prepared, stream=True),
            kind,
            requested,
            resolved,
            chat_chunk_decoder(self._name, raw=self._raw),
            _to_text,
            cancel,
        )

    def embedding(self, key: Key, request: EmbeddingRequest) -> EmbeddingResponse:
        """Embed the request inputs with the feature-extraction pipeline."""
        kind = RequestKind.EMBEDDING
        self.check_operation_allowed(kind, request.model)
        prepared, resolved = prepare_request(request, key)
        ctx = self._ctx(kind, request.model, resolved)
        self._log_start(ctx)
        data, latency_ms = self._post_json(
            inference_router_url(self._base_url),
            feature_extraction_path(resolved),
            embedding_to_wire(prepared),
            key,
            kind,
            request.model,
            ctx,
        )
        try:
            resp = embedding_response_from_wire(data, prepared, provider=self._name, resolved=resolved, raw=self._raw)
        except ValueError as e:
            raise self._decode_error(e, kind, request.model) from e
        resp.extra_fields.latency_ms = latency_ms
        decorate_response_metadata(resp.extra_fields, request.model, resolved)
        self._log_end(ctx, latency_ms, resp.usage)
        return resp

    def list_models(self, keys: Sequence[Key], request: Optional[ListModelsRequest] = None) -> CatalogPage:
        """Merged Hub catalog page for ``keys`` (anonymous when empty)."""
        self.check_operation_allowed(RequestKind.LIST_MODELS)
        return self._catalog.list_models(keys, request)

    def responses(self, key: Key, request: ResponsesRequest) -> ResponsesResponse:
        """Forward a Responses API request to ``/responses``."""
        kind = RequestKind.RESPONSES
        self.check_operation_allowed(kind, request.model)
        prepared, resolved = prepare_request(request, key)
        ctx = self._ctx(kind, request.model, resolved)
        self._log_start(ctx)
        data, latency_ms = self._post_json(
            self._base_url, RESPONSES_PATH, responses_to_wire(prepared), key, kind, request.model, ctx
        )
        try:
            resp = responses_response_from_wire(data, provider=self._name, raw=self._raw)
        except ValueError as e:
            raise self._decode_error(e, kind, request.model) from e
        resp.extra_fields.latency_ms = latency_ms
        decorate_response_metadata(resp.extra_fields, request.model, resolved)
        self._log_end(ctx, latency_ms, resp.usage)
        return resp

    def responses_stream(
        self, key: Key, request: ResponsesRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        """Streaming Responses API call; events are decorated, not re-shaped."""
        kind = RequestKind.RESPONSES_STREAM
        self.check_operation_allowed(kind, request.model)
        prepared, resolved = prepare_request(request, key)
        requested = request.model

        def _decorate(message: StreamMessage) -> StreamMessage:
            if message.responses is not None:
                decorate_response_metadata(message.responses.extra_fields, requested, resolved)
            return message

        return self._start_stream(
            key,
            RESPONSES_PATH,
            responses_to_wire(prepared, stream=True),
            kind,
            requested,
            resolved,
            responses_event_decoder(self._name, raw=self._raw),
            _decorate,
            cancel,
        )


__all__ = ["HuggingFaceProvider"]
