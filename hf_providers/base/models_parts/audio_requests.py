"""
Speech and transcription requests.

No current backend serves these; they exist so the unsupported operations
have typed inputs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class SpeechRequest:
    """Text-to-speech request."""

    model: str
    input: str = ""
    voice: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TranscriptionRequest:
    """Speech-to-text request over raw audio bytes."""

    model: str
    file: bytes = b""
    language: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


__all__ = ["SpeechRequest", "TranscriptionRequest"]
