"""
Responses API reply and stream event.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .extra_fields import ExtraFields


@dataclass
class ResponsesResponse:
    """A ``/responses`` reply.

    Well-known keys are lifted into attributes; the full decoded body stays
    available in ``body``.
    """

    id: str = ""
    model: str = ""
    status: Optional[str] = None
    output: List[Dict[str, Any]] = field(default_factory=list)
    usage: Optional[Dict[str, Any]] = None
    body: Dict[str, Any] = field(default_factory=dict)
    extra_fields: ExtraFields = field(default_factory=ExtraFields)

    @property
    def output_text(self) -> str:
        """Concatenated ``output_text`` parts of every message output item."""
        parts: List[str] = []
        for item in self.output:
            for content in item.get("content") or []:
                if isinstance(content, dict) and content.get("type") == "output_text":
                    parts.append(content.get("text") or "")
        return "".join(parts)


@dataclass
class ResponsesStreamEvent:
    """One server-sent event of a Responses stream (``type`` plus payload)."""

    type: str = ""
    data: Dict[str, Any] = field(default_factory=dict)
    extra_fields: ExtraFields = field(default_factory=ExtraFields)


__all__ = ["ResponsesResponse", "ResponsesStreamEvent"]
