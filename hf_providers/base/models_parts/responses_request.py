"""
Canonical Responses API request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class ResponsesRequest:
    """A Responses API request forwarded to ``/responses`` as-is.

    ``params`` holds every other top-level body key (``instructions``,
    ``max_output_tokens``, ``tools``...). Only the model name is rewritten by
    alias resolution.
    """

    model: str
    input: Union[str, List[Dict[str, Any]]] = ""
    params: Dict[str, Any] = field(default_factory=dict)


__all__ = ["ResponsesRequest"]
