"""Pydantic models for Hugging Face wire payloads.

Upstream JSON is validated here before it is translated into the canonical
dataclasses. Models are lenient (unknown keys are kept or ignored) so new
upstream fields never break decoding.

External dependencies:
    - Pydantic v2 for validation, aliasing and ``model_dump``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class WireMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    content: Optional[Union[str, List[Dict[str, Any]]]] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None


class WireChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    finish_reason: Optional[str] = None
    logprobs: Any = None
    message: Optional[WireMessage] = None
    delta: Optional[WireMessage] = None
    text: Optional[str] = None


class WireUsage(BaseModel):
    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class WireChatCompletion(BaseModel):
    """OpenAI-compatible chat completion body or stream chunk."""

    model_config = ConfigDict(extra="allow")

    id: str = ""
    object: str = "chat.completion"
    created: Optional[int] = None
    model: str = ""
    system_fingerprint: Optional[str] = None
    choices: List[WireChoice] = Field(default_factory=list)
    usage: Optional[WireUsage] = None


class FeatureExtractionPayload(BaseModel):
    """Body of ``POST /hf-inference/models/{model}/pipeline/feature-extraction``.

    ``inputs`` keeps the caller's shape: a single string or a list of strings.
    """

    inputs: Union[str, List[str]]
    normalize: Optional[bool] = None
    prompt_name: Optional[str] = None
    truncate: Optional[bool] = None
    truncation_direction: Optional[str] = None


EMBEDDING_ROWS = TypeAdapter(List[List[float]])


class HubCardData(BaseModel):
    """Subset of a model card's front matter used for display fields.

    Card front matter is free-form YAML; any display field that is not a
    string is treated as absent.
    """

    model_config = ConfigDict(extra="ignore", protected_namespaces=())

    model_name: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("model_name", "short_description", "description", "summary", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class HubModelEntry(BaseModel):
    """One item of ``GET /api/models``.

    ``gated`` is reported by the Hub either as a boolean or as a string
    (``"auto"``, ``"manual"``); it is normalized to a boolean here. A null
    ``private`` reads as ``False`` and a malformed ``cardData`` is dropped.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    id: Optional[str] = None
    model_id: Optional[str] = Field(default=None, alias="modelId")
    author: Optional[str] = None
    pipeline_tag: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    private: bool = False
    gated: bool = False
    library_name: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    likes: Optional[int] = None
    downloads: Optional[int] = None
    card_data: Optional[HubCardData] = Field(default=None, alias="cardData")

    @field_validator("gated", mode="before")
    @classmethod
    def _normalize_gated(cls, value: Any) -> bool:
        return normalize_gated(value)

    @field_validator("private", mode="before")
    @classmethod
    def _private_flag(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("likes", "downloads", mode="before")
    @classmethod
    def _count_or_none(cls, value: Any) -> Optional[int]:
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    @field_validator("card_data", mode="before")
    @classmethod
    def _card_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_list(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        return [t for t in value if isinstance(t, str)]

    @property
    def hub_id(self) -> str:
        """Model id, preferring ``modelId`` over ``id``."""
        return (self.model_id or self.id or "").strip()


# Listing rows are validated one at a time against ``HubModelEntry``.
HUB_ROWS = TypeAdapter(List[Any])


def normalize_gated(value: Any) -> bool:
    """Booleans pass through; strings are gated unless empty or ``"false"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        return v not in ("", "false")
    return False


__all__ = [
    "EMBEDDING_ROWS",
    "FeatureExtractionPayload",
    "HUB_ROWS",
    "HubCardData",
    "HubModelEntry",
    "WireChatCompletion",
    "WireChoice",
    "WireMessage",
    "WireUsage",
    "normalize_gated",
]
