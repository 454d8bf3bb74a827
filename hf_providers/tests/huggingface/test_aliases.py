from __future__ import annotations

import pytest

from hf_providers.base.models import ChatMessage, ChatRequest, EmbeddingRequest, Key
from hf_providers.huggingface.aliases import prepare_request, resolve_model_alias


@pytest.mark.parametrize(
    "aliases, requested, expected",
    [
        ({}, "m", ("m", False)),
        ({"other": "x"}, "m", ("m", False)),
        ({"m": ""}, "m", ("m", False)),
        ({"m": "   "}, "m", ("m", False)),
        ({"m": "m"}, "m", ("m", False)),
        ({"m": "org/real-model"}, "m", ("org/real-model", True)),
        ({"m": "  org/real-model  "}, "m", ("org/real-model", True)),
    ],
)
def test_resolve_model_alias(aliases, requested, expected):
    assert resolve_model_alias(Key(value="k", aliases=aliases), requested) == expected  # nosec B101


def test_prepare_request_copies_only_when_alias_applies():
    req = ChatRequest(model="fast", messages=[ChatMessage(role="user", content="hi")])

    same, resolved = prepare_request(req, Key(value="k"))
    assert same is req and resolved == "fast"  # nosec B101

    copy, resolved = prepare_request(req, Key(value="k", aliases={"fast": "meta-llama/Llama-3.1-8B-Instruct"}))
    assert copy is not req  # nosec B101
    assert copy.model == resolved == "meta-llama/Llama-3.1-8B-Instruct"  # nosec B101
    assert req.model == "fast"  # nosec B101 - caller's request untouched
    assert copy.messages is req.messages  # nosec B101


def test_prepare_request_works_for_every_request_variant():
    req = EmbeddingRequest(model="emb", input=["a"])
    out, resolved = prepare_request(req, Key(aliases={"emb": "BAAI/bge-small-en-v1.5"}))
    assert isinstance(out, EmbeddingRequest) and out.model == resolved  # nosec B101
    assert req.model == "emb"  # nosec B101
