"""
Token accounting model.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class Usage:
    """Token counts for one call.

    ``estimated`` is set when the counts were computed locally because the
    upstream returned none.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    estimated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["Usage"]
