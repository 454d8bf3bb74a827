from __future__ import annotations

import threading

import httpx
import pytest

from hf_providers.base.cancellation import CancellationToken
from hf_providers.base.errors import ErrorCode, ProviderError
from hf_providers.base.models import (
    ChatMessage,
    ChatRequest,
    Key,
    RequestKind,
    ResponsesRequest,
    TextCompletionRequest,
)
from hf_providers.huggingface import HuggingFaceProvider

DEPLOYMENT = "meta-llama/Llama-3.1-8B-Instruct"
KEY = Key("hf_secret", aliases={"llama": DEPLOYMENT})


def _chunk(content=None, finish=None, usage=None, choices=True):
    body = {"id": "chatcmpl-9", "object": "chat.completion.chunk", "created": 1, "model": DEPLOYMENT}
    body["choices"] = (
        [{"index": 0, "delta": {"role": "assistant", "content": content}, "finish_reason": finish}] if choices else []
    )
    if usage:
        body["usage"] = usage
    return body


def _chat_request() -> ChatRequest:
    return ChatRequest(model="llama", messages=[ChatMessage(role="user", content="hi")])


def _stream_route(fake_upstream, path, payload: bytes, status: int = 200):
    fake_upstream.route(
        "POST",
        path,
        lambda r: httpx.Response(status, content=payload, headers={"Content-Type": "text/event-stream"}),
    )


def test_chat_stream_is_decorated_in_order(fake_upstream, sse):
    _stream_route(
        fake_upstream,
        "/chat/completions",
        sse(
            _chunk("Hel"),
            _chunk("lo", finish="stop"),
            _chunk(usage={"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}, choices=False),
        ),
    )
    messages = HuggingFaceProvider().chat_completion_stream(KEY, _chat_request()).collect()

    body = fake_upstream.last_json()
    assert body["stream"] is True and body["stream_options"] == {"include_usage": True}  # nosec B101
    assert body["model"] == DEPLOYMENT  # nosec B101
    assert fake_upstream.requests[-1].headers["Accept"] == "text/event-stream"  # nosec B101

    assert len(messages) == 3  # nosec B101
    assert [m.chat.choices[0].delta.content for m in messages[:2]] == ["Hel", "lo"]  # nosec B101
    assert messages[1].chat.choices[0].finish_reason == "stop"  # nosec B101
    assert messages[2].chat.usage.total_tokens == 5  # nosec B101
    for i, m in enumerate(messages):
        extra = m.chat.extra_fields
        assert extra.chunk_index == i  # nosec B101
        assert extra.request_type is RequestKind.CHAT_COMPLETION_STREAM  # nosec B101
        assert extra.model_requested == "llama" and extra.model_deployment == DEPLOYMENT  # nosec B101
        assert m.error is None  # nosec B101


def test_text_stream_reshapes_chunks(fake_upstream, sse):
    _stream_route(fake_upstream, "/chat/completions", sse(_chunk("Hel"), _chunk("lo", finish="stop")))
    messages = HuggingFaceProvider().text_completion_stream(
        KEY, TextCompletionRequest(model="llama", prompt="Say hello")
    ).collect()
    assert fake_upstream.last_json()["messages"] == [{"role": "user", "content": "Say hello"}]  # nosec B101
    assert [m.chat for m in messages] == [None, None]  # nosec B101
    assert [m.text.text for m in messages] == ["Hel", "lo"]  # nosec B101
    assert messages[1].text.choices[0].finish_reason == "stop"  # nosec B101
    for m in messages:
        assert m.text.object == "text_completion"  # nosec B101
        assert m.text.extra_fields.request_type is RequestKind.TEXT_COMPLETION_STREAM  # nosec B101
        assert m.text.extra_fields.model_deployment == DEPLOYMENT  # nosec B101


def test_responses_stream_events(fake_upstream):
    payload = (
        b"event: response.created\n"
        b'data: {"type": "response.created", "response": {"id": "resp_1"}}\n\n'
        b": keep-alive\n\n"
        b"event: response.output_text.delta\n"
        b'data: {"delta": "4"}\n\n'
        b'data: {"type": "response.completed"}\n\n'
    )
    _stream_route(fake_upstream, "/responses", payload)
    messages = HuggingFaceProvider().responses_stream(KEY, ResponsesRequest(model="llama", input="2+2?")).collect()
    assert fake_upstream.last_json()["stream"] is True  # nosec B101
    assert [m.responses.type for m in messages] == [  # nosec B101
        "response.created",
        "response.output_text.delta",
        "response.completed",
    ]
    assert messages[1].responses.data == {"delta": "4"}  # nosec B101
    extra = messages[0].responses.extra_fields
    assert extra.request_type is RequestKind.RESPONSES_STREAM  # nosec B101
    assert extra.model_requested == "llama" and extra.model_deployment == DEPLOYMENT  # nosec B101


def test_in_stream_error_ends_stream(fake_upstream, sse):
    _stream_route(
        fake_upstream,
        "/chat/completions",
        sse(_chunk("partial"), {"error": "Model too busy"}, _chunk("never"), done=False),
    )
    messages = HuggingFaceProvider().chat_completion_stream(KEY, _chat_request()).collect()
    assert len(messages) == 2  # nosec B101
    last = messages[-1]
    assert last.done and last.error.code is ErrorCode.UPSTREAM_API  # nosec B101
    assert last.error.message == "Model too busy"  # nosec B101
    assert last.error.request_kind is RequestKind.CHAT_COMPLETION_STREAM  # nosec B101


@pytest.mark.parametrize("bad", ["not json", '{"choices": "nope"}', "[1, 2]"])
def test_bad_chunk_ends_stream_with_decode_error(fake_upstream, sse, bad):
    _stream_route(fake_upstream, "/chat/completions", sse(_chunk("ok"), bad))
    messages = HuggingFaceProvider().chat_completion_stream(KEY, _chat_request()).collect()
    assert messages[0].chat is not None  # nosec B101
    assert len(messages) == 2 and messages[1].error.code is ErrorCode.DECODE  # nosec B101


def test_stream_open_failure_raises_synchronously(fake_upstream):
    _stream_route(fake_upstream, "/chat/completions", b'{"error": "Authorization header is invalid"}', status=401)
    with pytest.raises(ProviderError) as excinfo:
        HuggingFaceProvider().chat_completion_stream(KEY, _chat_request())
    assert excinfo.value.code is ErrorCode.UPSTREAM_API  # nosec B101
    assert excinfo.value.status_code == 401  # nosec B101
    assert excinfo.value.message == "Authorization header is invalid"  # nosec B101


def test_stream_operation_not_allowed(fake_upstream):
    provider = HuggingFaceProvider(allowed_operations=["chat_completion"])
    with pytest.raises(ProviderError) as excinfo:
        provider.chat_completion_stream(KEY, _chat_request())
    assert excinfo.value.code is ErrorCode.OPERATION_NOT_ALLOWED  # nosec B101
    assert fake_upstream.requests == []  # nosec B101


def test_cancellation_stops_stream_without_error(fake_upstream, sse):
    release = threading.Event()
    first, second = sse(_chunk("one"), done=False), sse(_chunk("two"))

    def _body():
        yield first
        release.wait(timeout=5)
        yield second

    fake_upstream.route("POST", "/chat/completions", lambda r: httpx.Response(200, content=_body()))
    token = CancellationToken()
    stream = HuggingFaceProvider().chat_completion_stream(KEY, _chat_request(), cancel=token)
    it = iter(stream)
    head = next(it)
    assert head.chat.choices[0].delta.content == "one"  # nosec B101
    token.cancel("client went away")
    release.set()
    assert list(it) == []  # nosec B101


def test_shared_token_is_released_after_each_stream(fake_upstream, sse):
    _stream_route(fake_upstream, "/chat/completions", sse(_chunk("hi", finish="stop")))
    token = CancellationToken()
    provider = HuggingFaceProvider()
    for _ in range(3):
        messages = provider.chat_completion_stream(KEY, _chat_request(), cancel=token).collect()
        assert len(messages) == 1  # nosec B101
    assert token._callbacks == []  # nosec B101
