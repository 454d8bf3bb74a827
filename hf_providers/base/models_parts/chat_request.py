"""
Canonical chat completion request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .chat_message import ChatMessage
from .sampling_params import SamplingParams


@dataclass
class ChatRequest:
    """A provider-agnostic chat completion request.

    Attributes:
        model: Requested model name (may be an alias of the caller's key).
        messages: Ordered conversation turns.
        params: Optional sampling controls.
        tools: OpenAI-style tool definitions passed through untouched.
        tool_choice: Tool selection directive passed through untouched.
        response_format: Structured output directive passed through untouched.
    """

    model: str
    messages: List[ChatMessage] = field(default_factory=list)
    params: Optional[SamplingParams] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    response_format: Optional[Dict[str, Any]] = None


__all__ = ["ChatRequest"]
