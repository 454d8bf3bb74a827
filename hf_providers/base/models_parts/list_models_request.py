"""
Catalog listing request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ListModelsRequest:
    """Parameters for one catalog page.

    Attributes:
        page_size: Upstream ``limit`` and the size of the merged page. Zero
            or negative means the default page size.
        page_token: Opaque cursor returned as ``next_page_token`` by a
            previous page.
        extra_params: Additional Hub query parameters. Values are rendered to
            strings; empty strings are skipped.
    """

    page_size: int = 0
    page_token: Optional[str] = None
    extra_params: Dict[str, Any] = field(default_factory=dict)


__all__ = ["ListModelsRequest"]
