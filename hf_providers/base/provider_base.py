"""Base class giving every operation an explicit "unsupported" default.

A backend overrides the operations it serves and lists them in
``SUPPORTED_OPERATIONS``. Everything else raises ``ProviderError`` with code
``UNSUPPORTED`` synchronously, before any network I/O, so callers never see a
silent success or a missing attribute.
"""
from __future__ import annotations

from typing import FrozenSet, Optional, Sequence

from .cancellation import CancellationToken
from .errors import ProviderError, unsupported_operation
from .models import (
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
    SpeechRequest,
    TextCompletionRequest,
    TextCompletionResponse,
    TranscriptionRequest,
)
from .streaming import MessageStream


class BaseProvider:
    """Default implementation of :class:`InferenceProvider`."""

    SUPPORTED_OPERATIONS: FrozenSet[RequestKind] = frozenset()

    @property
    def provider_name(self) -> str:
        raise NotImplementedError

    def supported_operations(self) -> FrozenSet[RequestKind]:
        """Return the operations this backend declares."""
        return frozenset(self.SUPPORTED_OPERATIONS)

    def _unsupported(self, kind: RequestKind, model: Optional[str] = None) -> ProviderError:
        return unsupported_operation(kind, self.provider_name, model)

    def chat_completion(self, key: Key, request: ChatRequest) -> ChatResponse:
        raise self._unsupported(RequestKind.CHAT_COMPLETION, request.model)

    def chat_completion_stream(
        self, key: Key, request: ChatRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        raise self._unsupported(RequestKind.CHAT_COMPLETION_STREAM, request.model)

    def text_completion(self, key: Key, request: TextCompletionRequest) -> TextCompletionResponse:
        raise self._unsupported(RequestKind.TEXT_COMPLETION, request.model)

    def text_completion_stream(
        self, key: Key, request: TextCompletionRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        raise self._unsupported(RequestKind.TEXT_COMPLETION_STREAM, request.model)

    def embedding(self, key: Key, request: EmbeddingRequest) -> EmbeddingResponse:
        raise self._unsupported(RequestKind.EMBEDDING, request.model)

    def list_models(self, keys: Sequence[Key], request: Optional[ListModelsRequest] = None) -> CatalogPage:
        raise self._unsupported(RequestKind.LIST_MODELS)

    def responses(self, key: Key, request: ResponsesRequest) -> ResponsesResponse:
        raise self._unsupported(RequestKind.RESPONSES, request.model)

    def responses_stream(
        self, key: Key, request: ResponsesRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        raise self._unsupported(RequestKind.RESPONSES_STREAM, request.model)

    def speech(self, key: Key, request: SpeechRequest) -> bytes:
        raise self._unsupported(RequestKind.SPEECH, request.model)

    def speech_stream(
        self, key: Key, request: SpeechRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        raise self._unsupported(RequestKind.SPEECH_STREAM, request.model)

    def transcription(self, key: Key, request: TranscriptionRequest) -> str:
        raise self._unsupported(RequestKind.TRANSCRIPTION, request.model)

    def transcription_stream(
        self, key: Key, request: TranscriptionRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream:
        raise self._unsupported(RequestKind.TRANSCRIPTION_STREAM, request.model)


__all__ = ["BaseProvider"]
