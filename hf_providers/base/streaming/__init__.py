"""Streaming primitives: bounded message streams and the stream relay."""

from .message_stream import MessageStream
from .relay import StreamRelay, Transform

__all__ = ["MessageStream", "StreamRelay", "Transform"]
