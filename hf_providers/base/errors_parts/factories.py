"""Constructors for the errors raised before any network I/O happens."""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


def _kind_label(kind: object) -> str:
    return str(getattr(kind, "value", kind))


def unsupported_operation(kind: object, provider: str, model: Optional[str] = None) -> ProviderError:
    """Error for an operation the backend does not implement."""
    return ProviderError(
        code=ErrorCode.UNSUPPORTED,
        message=f"{_kind_label(kind)} is not supported by the {provider} provider",
        provider=provider,
        model=model,
        request_kind=kind,  # type: ignore[arg-type]
    )


def operation_not_allowed(kind: object, provider: str, model: Optional[str] = None) -> ProviderError:
    """Error for an operation disabled by provider configuration."""
    return ProviderError(
        code=ErrorCode.OPERATION_NOT_ALLOWED,
        message=f"{_kind_label(kind)} is not allowed for the {provider} provider",
        provider=provider,
        model=model,
        request_kind=kind,  # type: ignore[arg-type]
    )


def partial_catalog_failure(cause: ProviderError, key_label: str) -> ProviderError:
    """Wrap one credential's failure during a multi-credential catalog listing."""
    return ProviderError(
        code=ErrorCode.PARTIAL_CATALOG,
        message=f"model listing failed for credential {key_label}: {cause.message}",
        provider=cause.provider,
        model=cause.model,
        request_kind=cause.request_kind,
        status_code=cause.status_code,
        retryable=cause.retryable,
        raw=cause,
    )


__all__ = ["unsupported_operation", "operation_not_allowed", "partial_catalog_failure"]
