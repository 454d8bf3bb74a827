"""
Canonical text completion request.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .sampling_params import SamplingParams


@dataclass
class TextCompletionRequest:
    """A prompt-in, text-out request.

    The upstream has no text-completion endpoint; the adapter serves this by
    synthesizing a single-message chat request from ``prompt``.
    """

    model: str
    prompt: Union[str, List[str]] = ""
    params: Optional[SamplingParams] = None


__all__ = ["TextCompletionRequest"]
