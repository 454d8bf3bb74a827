"""Errors parts package public surface.

Prefer importing from ``hf_providers.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception

__all__ = ["ErrorCode", "ProviderError", "classify_exception"]
