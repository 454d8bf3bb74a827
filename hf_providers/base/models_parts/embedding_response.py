"""
Canonical embedding response.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .extra_fields import ExtraFields
from .usage import Usage


@dataclass
class EmbeddingData:
    """One vector, positioned like its input."""

    index: int
    embedding: List[float]
    object: str = "embedding"


@dataclass
class EmbeddingResponse:
    """Vectors for every input, in input order."""

    data: List[EmbeddingData] = field(default_factory=list)
    model: str = ""
    object: str = "list"
    usage: Optional[Usage] = None
    extra_fields: ExtraFields = field(default_factory=ExtraFields)


__all__ = ["EmbeddingData", "EmbeddingResponse"]
