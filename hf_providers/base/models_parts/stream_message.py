"""
Envelope flowing through provider message streams.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .chat_response import ChatResponse
from .responses_response import ResponsesStreamEvent
from .text_completion_response import TextCompletionResponse

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..errors import ProviderError


@dataclass
class StreamMessage:
    """A single stream item carrying at most one payload.

    Data messages hold ``chat``, ``text`` or ``responses``. Control messages
    hold ``error`` (terminal failure) or ``done`` (terminal marker). A message
    with no payload at all is a keep-alive and is forwarded untouched.
    """

    chat: Optional[ChatResponse] = None
    text: Optional[TextCompletionResponse] = None
    responses: Optional[ResponsesStreamEvent] = None
    error: Optional["ProviderError"] = None
    done: bool = False

    @property
    def is_control(self) -> bool:
        """True for error, done and keep-alive messages."""
        return self.chat is None and self.text is None and self.responses is None

    @classmethod
    def terminal_error(cls, error: "ProviderError") -> "StreamMessage":
        return cls(error=error, done=True)


__all__ = ["StreamMessage"]
