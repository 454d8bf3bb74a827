"""InferenceProvider Protocol (single-class module).

The full operation surface a backend adapter exposes. Adapters usually
subclass :class:`~hf_providers.base.provider_base.BaseProvider`, which
satisfies this protocol with "unsupported" defaults.
"""

from __future__ import annotations

from typing import FrozenSet, Optional, Protocol, Sequence, runtime_checkable

from ..cancellation import CancellationToken
from ..models import (
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
from ..streaming import MessageStream


@runtime_checkable
class InferenceProvider(Protocol):
    """Interface implemented per backend.

    Non-streaming operations return a response or raise ``ProviderError``.
    Streaming operations return a ``MessageStream`` once the upstream
    accepted the request; later failures arrive as terminal error messages.
    """

    @property
    def provider_name(self) -> str: ...

    def supported_operations(self) -> FrozenSet[RequestKind]: ...

    def chat_completion(self, key: Key, request: ChatRequest) -> ChatResponse: ...

    def chat_completion_stream(
        self, key: Key, request: ChatRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream: ...

    def text_completion(self, key: Key, request: TextCompletionRequest) -> TextCompletionResponse: ...

    def text_completion_stream(
        self, key: Key, request: TextCompletionRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream: ...

    def embedding(self, key: Key, request: EmbeddingRequest) -> EmbeddingResponse: ...

    def list_models(self, keys: Sequence[Key], request: Optional[ListModelsRequest] = None) -> CatalogPage: ...

    def responses(self, key: Key, request: ResponsesRequest) -> ResponsesResponse: ...

    def responses_stream(
        self, key: Key, request: ResponsesRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream: ...

    def speech(self, key: Key, request: SpeechRequest) -> bytes: ...

    def speech_stream(
        self, key: Key, request: SpeechRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream: ...

    def transcription(self, key: Key, request: TranscriptionRequest) -> str: ...

    def transcription_stream(
        self, key: Key, request: TranscriptionRequest, cancel: Optional[CancellationToken] = None
    ) -> MessageStream: ...


__all__ = ["InferenceProvider"]
