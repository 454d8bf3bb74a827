"""
Canonical chat completion response (also used for stream chunks).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .chat_message import ChatDelta, ChatMessage
from .extra_fields import ExtraFields
from .usage import Usage


@dataclass
class ResponseChoice:
    """One completion alternative.

    Exactly one payload is populated: ``message`` for a complete chat reply,
    ``delta`` for a stream chunk, ``text`` for a text completion.
    """

    index: int = 0
    finish_reason: Optional[str] = None
    logprobs: Any = None
    message: Optional[ChatMessage] = None
    delta: Optional[ChatDelta] = None
    text: Optional[str] = None


@dataclass
class ChatResponse:
    """A chat completion or a single chat stream chunk.

    ``object`` is ``chat.completion`` for complete replies and
    ``chat.completion.chunk`` for stream chunks.
    """

    id: str = ""
    object: str = "chat.completion"
    created: Optional[int] = None
    model: str = ""
    system_fingerprint: Optional[str] = None
    choices: List[ResponseChoice] = field(default_factory=list)
    usage: Optional[Usage] = None
    extra_fields: ExtraFields = field(default_factory=ExtraFields)


__all__ = ["ResponseChoice", "ChatResponse"]
