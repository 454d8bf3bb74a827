"""
Chat message and streamed delta models.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Content = Union[str, List[Dict[str, Any]], None]


def content_text(content: Content) -> Optional[str]:
    """Return the textual payload of a message content value.

    String content is returned as-is; a list of content parts yields the
    concatenation of its ``text`` parts; anything else yields ``None``.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = [p.get("text") for p in content if isinstance(p, dict) and isinstance(p.get("text"), str)]
        return "".join(texts) if texts else None
    return None


@dataclass
class ChatMessage:
    """A single chat turn.

    Attributes:
        role: ``system``, ``user``, ``assistant`` or ``tool``.
        content: Plain text or a list of OpenAI-style content parts.
        name: Optional participant name.
        tool_call_id: Identifier of the tool call a ``tool`` message answers.
        tool_calls: Tool invocations requested by the assistant.
    """

    role: str
    content: Content = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None

    @property
    def text(self) -> Optional[str]:
        return content_text(self.content)


@dataclass
class ChatDelta:
    """Incremental message fragment carried by a stream chunk."""

    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None
    extra: Dict[str, Any] = field(default_factory=dict)


__all__ = ["ChatMessage", "ChatDelta", "Content", "content_text"]
