"""Shared HTTP client pool for providers.

Purpose:
    Keep one reusable ``httpx.Client`` per ``(base_url, purpose)`` pair so
    chat, streaming, embedding and catalog calls reuse connections instead of
    allocating a client per request.

Timeout strategy:
    Timeouts come from :func:`get_timeout_config`. Purposes ending in
    ``.stream`` get the streaming idle timeout; all others get the regular
    HTTP timeout.

Lifecycle & cleanup:
    All clients are closed at interpreter exit via ``atexit``. Tests may call
    :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional base URL set on the client so callers can issue
            relative requests. ``None`` groups clients under a shared key.
        purpose: Short discriminator such as ``"huggingface.chat"`` or
            ``"huggingface.stream"``.

    Returns:
        A reusable ``httpx.Client`` instance.

    Thread-safety:
        Safe for concurrent use; creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        timeout = get_timeout_config().to_httpx(stream=purpose.endswith(".stream"))
        if base_url:
            client = httpx.Client(base_url=base_url, timeout=timeout)
        else:
            client = httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # nosec B110 - connection teardown failures are not actionable
            with contextlib.suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
