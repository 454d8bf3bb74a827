"""Provider interface public surface."""

from .interfaces_parts.inference_provider import InferenceProvider

__all__ = ["InferenceProvider"]
