"""
Canonical text completion response (also used for stream chunks).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .chat_response import ResponseChoice
from .extra_fields import ExtraFields
from .usage import Usage


@dataclass
class TextCompletionResponse:
    """Text completion reply; every choice carries its payload in ``text``."""

    id: str = ""
    object: str = "text_completion"
    created: Optional[int] = None
    model: str = ""
    system_fingerprint: Optional[str] = None
    choices: List[ResponseChoice] = field(default_factory=list)
    usage: Optional[Usage] = None
    extra_fields: ExtraFields = field(default_factory=ExtraFields)

    @property
    def text(self) -> str:
        """Text of the first choice, or an empty string."""
        return (self.choices[0].text or "") if self.choices else ""


__all__ = ["TextCompletionResponse"]
