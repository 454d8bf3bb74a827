"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` is how a caller stops a live stream: the transport
reader polls it between lines and registered callbacks (closing the HTTP
response) run as soon as ``cancel`` is called.
"""

from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken"]
