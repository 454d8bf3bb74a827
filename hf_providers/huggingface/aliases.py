"""Model alias resolution against a credential's alias map.

Resolution is a pure lookup: the caller's request is never mutated. When an
alias applies, a shallow copy of the request carrying the deployment name is
returned instead.
"""
from __future__ import annotations

import dataclasses
from typing import Tuple, TypeVar

from ..base.models import Key

RequestT = TypeVar("RequestT")


def resolve_model_alias(key: Key, requested: str) -> Tuple[str, bool]:
    """Return ``(resolved_model, changed)`` for ``requested`` under ``key``.

    A missing alias map, a missing entry, or a target that is empty after
    trimming all resolve to ``(requested, False)``. Otherwise the trimmed
    target is returned and ``changed`` reports whether it differs from the
    requested name.
    """
    aliases = key.aliases if key is not None else None
    if not aliases:
        return requested, False
    target = aliases.get(requested)
    if target is None:
        return requested, False
    target = target.strip()
    if not target:
        return requested, False
    return target, target != requested


def prepare_request(request: RequestT, key: Key) -> Tuple[RequestT, str]:
    """Return ``(request_to_send, resolved_model)``.

    The original request is returned untouched when no alias applies; a copy
    with ``model`` replaced is returned otherwise.
    """
    requested = getattr(request, "model")
    resolved, changed = resolve_model_alias(key, requested)
    if not changed:
        return request, resolved
    return dataclasses.replace(request, model=resolved), resolved  # type: ignore[type-var]


__all__ = ["resolve_model_alias", "prepare_request"]
