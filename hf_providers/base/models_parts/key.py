"""
Credential model with per-credential model aliases.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class Key:
    """An opaque credential plus its model alias map.

    Attributes:
        value: Secret sent as a bearer token. Empty means anonymous.
        aliases: Requested model name -> upstream deployment name. Entries
            whose target is empty or whitespace are ignored.
        id: Optional stable label used in logs and catalog warnings.
    """

    value: str = ""
    aliases: Mapping[str, str] = field(default_factory=dict)
    id: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "Key":
        """Return the credential used when the caller supplies none."""
        return cls(value="", id="anonymous")

    @property
    def label(self) -> str:
        """Identifier safe to log.

        Falls back to a short SHA-256 digest of the secret, never any of its
        characters.
        """
        if self.id:
            return self.id
        if not self.value:
            return "anonymous"
        return f"key-{hashlib.sha256(self.value.encode('utf-8')).hexdigest()[:8]}"

    def __repr__(self) -> str:
        return f"Key(id={self.label!r}, aliases={dict(self.aliases)!r})"


__all__ = ["Key"]
