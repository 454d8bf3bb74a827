"""Unified provider error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``hf_providers.base.errors_parts`` so adapters import from a single stable
path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, is_retryable_status
from .errors_parts.factories import (
    operation_not_allowed,
    partial_catalog_failure,
    unsupported_operation,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "is_retryable_status",
    "operation_not_allowed",
    "partial_catalog_failure",
    "unsupported_operation",
]
