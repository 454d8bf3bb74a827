"""
Structured provider error exception type.

Wraps transport, decoding and upstream failures with a normalized
``ErrorCode`` plus the request context needed by callers and log sinks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"huggingface"``).
        model: Model requested by the caller, when known.
        request_kind: Operation tag (a ``RequestKind`` value) that failed.
        status_code: Upstream HTTP status when the failure came from a reply.
        retryable: Hint for callers that implement their own retry policy.
        raw: Original exception or nested error for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    request_kind: Optional[str] = None
    status_code: Optional[int] = None
    retryable: bool = False
    raw: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        status = f" [{self.status_code}]" if self.status_code is not None else ""
        return f"{self.provider}:{self.model or '-'} {self.code.value}{status}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view (the ``raw`` cause is rendered as text)."""
        kind = self.request_kind
        return {
            "code": self.code.value,
            "message": self.message,
            "provider": self.provider,
            "model": self.model,
            "request_kind": getattr(kind, "value", kind),
            "status_code": self.status_code,
            "retryable": self.retryable,
            "raw": None if self.raw is None else str(self.raw),
        }


__all__ = ["ProviderError"]
