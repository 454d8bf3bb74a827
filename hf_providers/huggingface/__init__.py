"""Hugging Face inference provider adapter."""

from .client import HuggingFaceProvider

__all__ = ["HuggingFaceProvider"]
