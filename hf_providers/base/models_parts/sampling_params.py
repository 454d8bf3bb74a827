"""
Generation parameters shared by chat and text-completion requests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class SamplingParams:
    """Optional sampling controls; ``None`` fields are not sent upstream.

    ``extra`` carries provider-specific keys and is merged into the wire body
    last.
    """

    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stop: Optional[Union[str, List[str]]] = None
    n: Optional[int] = None
    seed: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    user: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


__all__ = ["SamplingParams"]
