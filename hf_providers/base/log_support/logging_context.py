"""Structured logging context carried through provider events."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Common fields attached to every event of one provider call.

    ``request_kind`` is the operation tag; ``model_deployment`` is only set
    when an alias rewrote the requested model.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    model_deployment: Optional[str] = None
    request_kind: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        kind = data.get("request_kind")
        data["request_kind"] = getattr(kind, "value", kind)
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
