"""Provider-agnostic base layer: models, errors, logging, streaming, HTTP."""

from .errors import ErrorCode, ProviderError
from .provider_base import BaseProvider

__all__ = ["BaseProvider", "ErrorCode", "ProviderError"]
