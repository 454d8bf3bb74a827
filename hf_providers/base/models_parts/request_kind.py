"""
Operation tags carried on requests, responses and errors.
"""
from __future__ import annotations

from enum import Enum


class RequestKind(str, Enum):
    """Every operation a provider may expose.

    The value doubles as the ``request_type`` reported in response metadata
    and in log events.
    """

    CHAT_COMPLETION = "chat_completion"
    CHAT_COMPLETION_STREAM = "chat_completion_stream"
    TEXT_COMPLETION = "text_completion"
    TEXT_COMPLETION_STREAM = "text_completion_stream"
    EMBEDDING = "embedding"
    LIST_MODELS = "list_models"
    RESPONSES = "responses"
    RESPONSES_STREAM = "responses_stream"
    SPEECH = "speech"
    SPEECH_STREAM = "speech_stream"
    TRANSCRIPTION = "transcription"
    TRANSCRIPTION_STREAM = "transcription_stream"


__all__ = ["RequestKind"]
