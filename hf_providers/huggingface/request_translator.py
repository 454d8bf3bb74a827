"""Canonical request -> Hugging Face wire body translation.

All functions are pure: they read the canonical request and return a new
JSON-ready ``dict``. ``None`` fields are omitted. Alias resolution happens
before translation, so the ``model`` in the body is already the deployment.
"""
from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List

from ..base.models import (
    ChatMessage,
    ChatRequest,
    EmbeddingRequest,
    ResponsesRequest,
    SamplingParams,
    TextCompletionRequest,
)
from .wire import FeatureExtractionPayload


def _message_to_wire(message: ChatMessage) -> Dict[str, Any]:
    out: Dict[str, Any] = {"role": message.role, "content": message.content}
    if message.name is not None:
        out["name"] = message.name
    if message.tool_call_id is not None:
        out["tool_call_id"] = message.tool_call_id
    if message.tool_calls:
        out["tool_calls"] = message.tool_calls
    return out


def _params_to_wire(params: SamplingParams | None) -> Dict[str, Any]:
    if params is None:
        return {}
    out = {
        f.name: getattr(params, f.name)
        for f in fields(params)
        if f.name != "extra" and getattr(params, f.name) is not None
    }
    out.update(params.extra)
    return out


def chat_to_wire(request: ChatRequest, *, stream: bool = False) -> Dict[str, Any]:
    """Build the ``/chat/completions`` body.

    Streaming bodies ask for a trailing usage chunk via
    ``stream_options.include_usage``.
    """
    body: Dict[str, Any] = {
        "model": request.model,
        "messages": [_message_to_wire(m) for m in request.messages],
    }
    if request.tools:
        body["tools"] = request.tools
    if request.tool_choice is not None:
        body["tool_choice"] = request.tool_choice
    if request.response_format is not None:
        body["response_format"] = request.response_format
    body.update(_params_to_wire(request.params))
    if stream:
        body["stream"] = True
        body["stream_options"] = {"include_usage": True}
    return body


def prompt_text(prompt: str | List[str]) -> str:
    """Flatten a text-completion prompt; list prompts are joined by newlines."""
    if isinstance(prompt, str):
        return prompt
    return "\n".join(prompt)


def text_to_chat_request(request: TextCompletionRequest) -> ChatRequest:
    """Synthesize the chat request that serves a text completion.

    The prompt becomes one ``user`` message; sampling parameters are carried
    over unchanged and the requested model is kept as-is.
    """
    return ChatRequest(
        model=request.model,
        messages=[ChatMessage(role="user", content=prompt_text(request.prompt))],
        params=request.params,
    )


def responses_to_wire(request: ResponsesRequest, *, stream: bool = False) -> Dict[str, Any]:
    """Build the ``/responses`` body; ``params`` keys are passed through."""
    body: Dict[str, Any] = dict(request.params)
    body["model"] = request.model
    body["input"] = request.input
    if stream:
        body["stream"] = True
    else:
        body.pop("stream", None)
    return body


def embedding_to_wire(request: EmbeddingRequest) -> Dict[str, Any]:
    """Build the feature-extraction body (the model travels in the URL)."""
    params = request.params
    payload = FeatureExtractionPayload(
        inputs=request.input,
        normalize=params.normalize if params else None,
        prompt_name=params.prompt_name if params else None,
        truncate=params.truncate if params else None,
        truncation_direction=params.truncation_direction if params else None,
    )
    body = payload.model_dump(exclude_none=True)
    if params is not None:
        body.update(params.extra)
    return body


__all__ = [
    "chat_to_wire",
    "embedding_to_wire",
    "prompt_text",
    "responses_to_wire",
    "text_to_chat_request",
]
