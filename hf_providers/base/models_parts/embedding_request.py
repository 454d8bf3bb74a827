"""
Canonical embedding request and its feature-extraction options.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class EmbeddingParams:
    """Options understood by the feature-extraction pipeline.

    Attributes:
        normalize: Whether vectors are L2-normalized upstream.
        prompt_name: Named prompt template configured on the model.
        truncate: Whether over-long inputs are truncated instead of rejected.
        truncation_direction: ``"left"`` or ``"right"``.
        extra: Additional wire keys merged last.
    """

    normalize: Optional[bool] = None
    prompt_name: Optional[str] = None
    truncate: Optional[bool] = None
    truncation_direction: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EmbeddingRequest:
    """Text or texts to embed with ``model``."""

    model: str
    input: Union[str, List[str]] = ""
    params: Optional[EmbeddingParams] = None

    @property
    def texts(self) -> List[str]:
        """Inputs as a list, whatever shape the caller used."""
        return [self.input] if isinstance(self.input, str) else list(self.input)


__all__ = ["EmbeddingParams", "EmbeddingRequest"]
