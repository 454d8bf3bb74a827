from __future__ import annotations

import enum

import pytest

from hf_providers.base.models import ListModelsRequest, RequestKind
from hf_providers.huggingface.catalog import (
    CHAT_CAPABILITIES,
    EMBEDDING_CAPABILITIES,
    build_hub_params,
    derive_capabilities,
    entry_from_hub,
    normalize_page_size,
    render_query_value,
)
from hf_providers.huggingface.wire import HubModelEntry, normalize_gated


@pytest.mark.parametrize(
    "pipeline, tags, expected",
    [
        ("text-generation", [], CHAT_CAPABILITIES),
        (" Text2Text-Generation ", [], CHAT_CAPABILITIES),
        ("summarization", [], CHAT_CAPABILITIES),
        ("feature-extraction", [], EMBEDDING_CAPABILITIES),
        ("sentence-similarity", [], EMBEDDING_CAPABILITIES),
        (None, ["Conversational"], CHAT_CAPABILITIES),
        (None, ["embeddings"], EMBEDDING_CAPABILITIES),
        ("text-generation", ["feature-extraction"], CHAT_CAPABILITIES | EMBEDDING_CAPABILITIES),
        ("image-classification", ["vision"], frozenset()),
        ("", [], frozenset()),
    ],
)
def test_derive_capabilities(pipeline, tags, expected):
    assert derive_capabilities(pipeline, tags) == expected  # nosec B101


def test_chat_capabilities_cover_chat_text_and_responses():
    assert CHAT_CAPABILITIES == {  # nosec B101
        RequestKind.CHAT_COMPLETION,
        RequestKind.TEXT_COMPLETION,
        RequestKind.RESPONSES,
    }


class _Color(enum.Enum):
    RED = "red"

    def __str__(self) -> str:
        return self.value


@pytest.mark.parametrize(
    "value, expected",
    [
        ("abc", "abc"),
        ("", None),
        (None, None),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (3.0, "3"),
        (2.5, "2.5"),
        (_Color.RED, "red"),
    ],
)
def test_render_query_value(value, expected):
    assert render_query_value(value) == expected  # nosec B101


@pytest.mark.parametrize("size, expected", [(0, 200), (-5, 200), (50, 50), (1000, 1000), (5000, 1000)])
def test_normalize_page_size(size, expected):
    assert normalize_page_size(size) == expected  # nosec B101


def test_build_hub_params():
    params = build_hub_params(
        ListModelsRequest(page_size=5000, page_token="  abc  ", extra_params={"search": "llama", "author": "", "gated": False})
    )
    assert params == {  # nosec B101
        "inference_provider": "hf-inference",
        "limit": "1000",
        "full": "1",
        "sort": "likes",
        "direction": "-1",
        "cursor": "abc",
        "search": "llama",
        "gated": "false",
    }
    assert "cursor" not in build_hub_params(ListModelsRequest(page_token="   "))  # nosec B101


@pytest.mark.parametrize(
    "raw, expected",
    [(True, True), (False, False), ("manual", True), ("auto", True), ("false", False), ("", False), (None, False), (1, False)],
)
def test_normalize_gated(raw, expected):
    assert normalize_gated(raw) is expected  # nosec B101
    assert HubModelEntry.model_validate({"modelId": "a/b", "gated": raw}).gated is expected  # nosec B101


def test_entry_from_hub_fields():
    item = HubModelEntry.model_validate(
        {
            "id": "meta-llama/Llama-3.1-8B-Instruct",
            "modelId": "meta-llama/Llama-3.1-8B-Instruct",
            "author": "meta-llama",
            "pipeline_tag": "text-generation",
            "tags": ["transformers", "conversational"],
            "gated": "manual",
            "likes": 10,
            "cardData": {"model_name": "Llama 3.1 8B", "short_description": "short", "summary": "sum"},
        }
    )
    entry = entry_from_hub(item, provider="huggingface", hub_base_url="https://huggingface.co/")
    assert entry.id == "huggingface/meta-llama/Llama-3.1-8B-Instruct"  # nosec B101
    assert entry.canonical_url == "https://huggingface.co/meta-llama/Llama-3.1-8B-Instruct"  # nosec B101
    assert entry.name == "Llama 3.1 8B"  # nosec B101
    assert entry.description == "short"  # nosec B101
    assert entry.owned_by == "meta-llama"  # nosec B101
    assert entry.deployment == entry.hugging_face_id == "meta-llama/Llama-3.1-8B-Instruct"  # nosec B101
    assert entry.modality == "text-generation"  # nosec B101
    assert entry.gated is True and entry.capabilities == CHAT_CAPABILITIES  # nosec B101


def test_entry_from_hub_defaults_and_drops():
    bare = HubModelEntry.model_validate({"modelId": "org/emb", "pipeline_tag": "feature-extraction"})
    entry = entry_from_hub(bare, provider="hf", hub_base_url="https://huggingface.co")
    assert entry.name == "org/emb" and entry.description is None  # nosec B101

    no_id = HubModelEntry.model_validate({"pipeline_tag": "text-generation"})
    assert entry_from_hub(no_id, provider="hf", hub_base_url="https://huggingface.co") is None  # nosec B101

    no_caps = HubModelEntry.model_validate({"modelId": "org/vit", "pipeline_tag": "image-classification"})
    assert entry_from_hub(no_caps, provider="hf", hub_base_url="https://huggingface.co") is None  # nosec B101


def test_catalog_entry_to_dict_sorts_capabilities():
    item = HubModelEntry.model_validate({"modelId": "org/chat", "pipeline_tag": "text-generation", "likes": 3})
    data = entry_from_hub(item, provider="huggingface", hub_base_url="https://huggingface.co").to_dict()
    assert data["capabilities"] == ["chat_completion", "responses", "text_completion"]  # nosec B101
    assert data["id"] == "huggingface/org/chat" and data["likes"] == 3  # nosec B101


def test_hub_entry_normalizes_loose_fields():
    item = HubModelEntry.model_validate(
        {
            "modelId": "org/chat",
            "pipeline_tag": "text-generation",
            "private": None,
            "likes": "many",
            "downloads": True,
            "cardData": {"model_name": 7, "summary": ["a", "b"], "description": "kept"},
        }
    )
    assert item.private is False  # nosec B101
    assert item.likes is None and item.downloads is None  # nosec B101
    assert item.card_data.model_name is None and item.card_data.summary is None  # nosec B101
    entry = entry_from_hub(item, provider="huggingface", hub_base_url="https://huggingface.co")
    assert entry.name == "org/chat" and entry.description == "kept"  # nosec B101


def test_hub_entry_drops_non_mapping_card_data():
    item = HubModelEntry.model_validate({"modelId": "org/chat", "cardData": ["license: mit"]})
    assert item.card_data is None  # nosec B101
