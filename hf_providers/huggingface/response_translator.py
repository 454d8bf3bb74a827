"""Hugging Face wire body -> canonical response translation.

Decoding functions validate the upstream JSON with the pydantic models in
:mod:`.wire` and raise ``pydantic.ValidationError`` on shape mismatches; the
client turns those into ``DECODE`` errors. Re-shaping functions
(``chat_to_text_response``, ``decorate_response_metadata``) never fail.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.models import (
    ChatDelta,
    ChatMessage,
    ChatResponse,
    EmbeddingData,
    EmbeddingRequest,
    EmbeddingResponse,
    ExtraFields,
    RequestKind,
    ResponseChoice,
    ResponsesResponse,
    ResponsesStreamEvent,
    TextCompletionResponse,
    Usage,
    content_text,
)
from .wire import EMBEDDING_ROWS, WireChatCompletion, WireChoice, WireMessage


def decorate_response_metadata(extra: ExtraFields, requested: Optional[str], resolved: Optional[str]) -> ExtraFields:
    """Record alias resolution on ``extra`` and return it.

    ``model_requested`` is set whenever ``requested`` is known.
    ``model_deployment`` is set only when ``resolved`` differs from
    ``requested`` and cleared otherwise, so applying the same pair twice is a
    no-op.
    """
    if requested:
        extra.model_requested = requested
    if resolved and resolved != requested:
        extra.model_deployment = resolved
    else:
        extra.model_deployment = None
    return extra


def _message(wire: Optional[WireMessage]) -> Optional[ChatMessage]:
    if wire is None:
        return None
    return ChatMessage(
        role=wire.role or "assistant",
        content=wire.content,
        name=wire.name,
        tool_call_id=wire.tool_call_id,
        tool_calls=wire.tool_calls,
    )


def _delta(wire: Optional[WireMessage]) -> Optional[ChatDelta]:
    if wire is None:
        return None
    return ChatDelta(
        role=wire.role,
        content=content_text(wire.content),
        tool_calls=wire.tool_calls,
        extra=dict(wire.model_extra or {}),
    )


def _choice(wire: WireChoice) -> ResponseChoice:
    return ResponseChoice(
        index=wire.index,
        finish_reason=wire.finish_reason,
        logprobs=wire.logprobs,
        message=_message(wire.message),
        delta=_delta(wire.delta),
        text=wire.text,
    )


def chat_response_from_wire(
    body: Mapping[str, Any],
    *,
    provider: str,
    request_type: RequestKind = RequestKind.CHAT_COMPLETION,
    raw: bool = False,
) -> ChatResponse:
    """Decode a chat completion body or a single stream chunk."""
    wire = WireChatCompletion.model_validate(body)
    return ChatResponse(
        id=wire.id,
        object=wire.object,
        created=wire.created,
        model=wire.model,
        system_fingerprint=wire.system_fingerprint,
        choices=[_choice(c) for c in wire.choices],
        usage=Usage(**wire.usage.model_dump(include={"prompt_tokens", "completion_tokens", "total_tokens"}))
        if wire.usage
        else None,
        extra_fields=ExtraFields(
            provider=provider,
            request_type=request_type,
            raw_response=dict(body) if raw else None,
        ),
    )


def choice_text(choice: ResponseChoice) -> str:
    """Text of a choice: message content, else delta content, else ``""``."""
    if choice.message is not None:
        text = choice.message.text
        if text is not None:
            return text
    if choice.delta is not None and choice.delta.content is not None:
        return choice.delta.content
    return choice.text or ""


def chat_to_text_response(
    chat: ChatResponse,
    requested: Optional[str],
    resolved: Optional[str],
    *,
    request_type: RequestKind = RequestKind.TEXT_COMPLETION,
) -> TextCompletionResponse:
    """Re-shape a chat response (or chunk) as a text completion.

    Identity fields, usage, provider, latency and raw body are copied; each
    choice keeps its index, finish reason and logprobs with its textual
    payload moved to ``text``. The request-type tag is overwritten with
    ``request_type``.
    """
    src = chat.extra_fields
    extra = ExtraFields(
        provider=src.provider,
        request_type=request_type,
        latency_ms=src.latency_ms,
        chunk_index=src.chunk_index,
        raw_response=src.raw_response,
    )
    return TextCompletionResponse(
        id=chat.id,
        created=chat.created,
        model=chat.model,
        system_fingerprint=chat.system_fingerprint,
        choices=[
            ResponseChoice(
                index=c.index,
                finish_reason=c.finish_reason,
                logprobs=c.logprobs,
                text=choice_text(c),
            )
            for c in chat.choices
        ],
        usage=chat.usage,
        extra_fields=decorate_response_metadata(extra, requested, resolved),
    )


def estimate_embedding_tokens(texts: Sequence[str]) -> int:
    """Rough token count for inputs the upstream does not meter.

    Four characters per token over all inputs, surrounding whitespace
    ignored, never below one.
    """
    chars = sum(len(t.strip()) for t in texts)
    return max(1, chars // 4)


def _embedding_rows(payload: Any) -> List[List[float]]:
    # A single input may come back as one flat vector.
    if isinstance(payload, list) and payload and all(isinstance(v, (int, float)) for v in payload):
        payload = [payload]
    return EMBEDDING_ROWS.validate_python(payload)


def embedding_response_from_wire(
    payload: Any,
    request: EmbeddingRequest,
    *,
    provider: str,
    resolved: str,
    raw: bool = False,
) -> EmbeddingResponse:
    """Build the embedding response from a feature-extraction reply.

    One ``EmbeddingData`` is produced per returned vector, indexed in order.
    Usage is always estimated from the inputs since the endpoint reports none.
    """
    rows = _embedding_rows(payload)
    tokens = estimate_embedding_tokens(request.texts)
    return EmbeddingResponse(
        data=[EmbeddingData(index=i, embedding=row) for i, row in enumerate(rows)],
        model=resolved,
        usage=Usage(prompt_tokens=tokens, total_tokens=tokens, estimated=True),
        extra_fields=ExtraFields(
            provider=provider,
            request_type=RequestKind.EMBEDDING,
            raw_response=payload if raw else None,
        ),
    )


def responses_response_from_wire(body: Mapping[str, Any], *, provider: str, raw: bool = False) -> ResponsesResponse:
    """Lift the well-known keys of a ``/responses`` body."""
    if not isinstance(body, Mapping):
        raise ValueError("responses body is not a JSON object")
    output = body.get("output")
    usage = body.get("usage")
    return ResponsesResponse(
        id=str(body.get("id") or ""),
        model=str(body.get("model") or ""),
        status=body.get("status"),
        output=[o for o in output if isinstance(o, dict)] if isinstance(output, list) else [],
        usage=usage if isinstance(usage, dict) else None,
        body=dict(body),
        extra_fields=ExtraFields(
            provider=provider,
            request_type=RequestKind.RESPONSES,
            raw_response=dict(body) if raw else None,
        ),
    )


def responses_event_from_wire(event_type: Optional[str], data: Dict[str, Any], *, provider: str) -> ResponsesStreamEvent:
    """Wrap one Responses SSE event; the ``type`` field wins over the SSE name."""
    return ResponsesStreamEvent(
        type=str(data.get("type") or event_type or ""),
        data=data,
        extra_fields=ExtraFields(provider=provider, request_type=RequestKind.RESPONSES_STREAM),
    )


__all__ = [
    "chat_response_from_wire",
    "chat_to_text_response",
    "choice_text",
    "decorate_response_metadata",
    "embedding_response_from_wire",
    "estimate_embedding_tokens",
    "responses_event_from_wire",
    "responses_response_from_wire",
]
