"""
Canonical request/response models shared by every adapter.

This module re-exports the one-concept-per-file implementations under
``hf_providers.base.models_parts`` to keep a single stable import path.
"""
from __future__ import annotations

from .models_parts.audio_requests import SpeechRequest, TranscriptionRequest
from .models_parts.catalog import CatalogEntry, CatalogPage
from .models_parts.chat_message import ChatDelta, ChatMessage, content_text
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse, ResponseChoice
from .models_parts.embedding_request import EmbeddingParams, EmbeddingRequest
from .models_parts.embedding_response import EmbeddingData, EmbeddingResponse
from .models_parts.extra_fields import ExtraFields
from .models_parts.key import Key
from .models_parts.list_models_request import ListModelsRequest
from .models_parts.request_kind import RequestKind
from .models_parts.responses_request import ResponsesRequest
from .models_parts.responses_response import ResponsesResponse, ResponsesStreamEvent
from .models_parts.sampling_params import SamplingParams
from .models_parts.stream_message import StreamMessage
from .models_parts.text_completion_request import TextCompletionRequest
from .models_parts.text_completion_response import TextCompletionResponse
from .models_parts.usage import Usage

__all__ = [
    "CatalogEntry",
    "CatalogPage",
    "ChatDelta",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "EmbeddingData",
    "EmbeddingParams",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "ExtraFields",
    "Key",
    "ListModelsRequest",
    "RequestKind",
    "ResponseChoice",
    "ResponsesRequest",
    "ResponsesResponse",
    "ResponsesStreamEvent",
    "SamplingParams",
    "SpeechRequest",
    "StreamMessage",
    "TextCompletionRequest",
    "TextCompletionResponse",
    "TranscriptionRequest",
    "Usage",
    "content_text",
]
