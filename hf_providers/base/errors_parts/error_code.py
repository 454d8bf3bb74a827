"""
Normalized provider error codes (taxonomy).

Every failure surfaced by an adapter carries exactly one of these codes.
Values are lowercase snake_case and are a stable contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure categories shared by every adapter.

    ``OPERATION_NOT_ALLOWED`` and ``UNSUPPORTED`` are raised before any I/O.
    ``TRANSPORT`` covers connection and timeout failures, ``DECODE`` covers
    bodies that could not be parsed, ``UPSTREAM_API`` covers non-2xx replies
    and ``PARTIAL_CATALOG`` marks a credential that failed during a
    multi-credential catalog listing.
    """

    OPERATION_NOT_ALLOWED = "operation_not_allowed"
    UNSUPPORTED = "unsupported"
    TRANSPORT = "transport"
    DECODE = "decode"
    UPSTREAM_API = "upstream_api"
    PARTIAL_CATALOG = "partial_catalog"
    CANCELLED = "cancelled"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
