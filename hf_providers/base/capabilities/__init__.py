"""Capability detection helpers."""

from .core import detect_capabilities, supports

__all__ = ["detect_capabilities", "supports"]
