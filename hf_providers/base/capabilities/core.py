"""Capability detection for provider adapters.

Capabilities are read from what a provider declares through
``supported_operations()``; nothing is probed over the network. Providers
that predate the declaration get an empty set.
"""

from __future__ import annotations

from typing import FrozenSet

from ..models import RequestKind


def detect_capabilities(provider: object) -> FrozenSet[RequestKind]:
    """Return the operations ``provider`` declares support for.

    Args:
        provider: Any adapter instance.

    Returns:
        FrozenSet[RequestKind]: The declared operations, or an empty set when
        the provider exposes no ``supported_operations`` method.
    """
    declared = getattr(provider, "supported_operations", None)
    if not callable(declared):
        return frozenset()
    return frozenset(RequestKind(k) for k in declared())


def supports(provider: object, kind: RequestKind) -> bool:
    """Whether ``provider`` declares ``kind``."""
    return kind in detect_capabilities(provider)


__all__ = ["detect_capabilities", "supports"]
