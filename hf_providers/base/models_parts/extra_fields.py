"""
Response metadata attached by the adapter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .request_kind import RequestKind


@dataclass
class ExtraFields:
    """Adapter-side metadata attached to every response and stream message.

    Attributes:
        provider: Provider key that served the call.
        request_type: Operation tag of the response (for a text stream this is
            ``text_completion_stream`` even though chat chunks were received).
        model_requested: Model name the caller asked for.
        model_deployment: Upstream model actually called; ``None`` whenever it
            equals ``model_requested``.
        latency_ms: Wall-clock time of the upstream call, or of the chunk
            since the stream started.
        chunk_index: Position of a stream message in its stream.
        raw_response: Decoded upstream body when raw passthrough is enabled.
    """

    provider: str = ""
    request_type: Optional[RequestKind] = None
    model_requested: Optional[str] = None
    model_deployment: Optional[str] = None
    latency_ms: Optional[float] = None
    chunk_index: Optional[int] = None
    raw_response: Any = None


__all__ = ["ExtraFields"]
