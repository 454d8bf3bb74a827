"""
Model catalog entry and page models.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Optional

from .extra_fields import ExtraFields
from .request_kind import RequestKind

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..errors import ProviderError


@dataclass
class CatalogEntry:
    """One deployable model as exposed to callers.

    Attributes:
        id: ``"<provider>/<hub model id>"``; unique within a page.
        canonical_url: Hub page of the model.
        name: Display name (card ``model_name`` or the model id).
        owned_by: Hub author.
        description: First non-empty of the card's description fields.
        capabilities: Operations the model can serve, inferred from its
            pipeline tag and tags. Never empty.
        hugging_face_id: Hub model id.
        deployment: Upstream name to call the model with.
        modality: Pipeline tag as reported by the Hub.
        gated: Whether access requires accepting the model's terms.
        private: Whether the model is private to its owner.
    """

    id: str
    canonical_url: str
    name: str
    capabilities: FrozenSet[RequestKind]
    hugging_face_id: str
    deployment: str
    owned_by: Optional[str] = None
    description: Optional[str] = None
    modality: Optional[str] = None
    gated: bool = False
    private: bool = False
    likes: Optional[int] = None
    downloads: Optional[int] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "canonical_url": self.canonical_url,
            "name": self.name,
            "owned_by": self.owned_by,
            "description": self.description,
            "capabilities": sorted(c.value for c in self.capabilities),
            "hugging_face_id": self.hugging_face_id,
            "deployment": self.deployment,
            "modality": self.modality,
            "gated": self.gated,
            "private": self.private,
            "likes": self.likes,
            "downloads": self.downloads,
            "created_at": self.created_at,
        }


@dataclass
class CatalogPage:
    """A merged catalog page.

    ``warnings`` lists per-credential failures that did not abort the
    listing; ``next_page_token`` is the upstream cursor, passed back verbatim.
    """

    entries: List[CatalogEntry] = field(default_factory=list)
    next_page_token: Optional[str] = None
    warnings: List["ProviderError"] = field(default_factory=list)
    extra_fields: ExtraFields = field(default_factory=ExtraFields)

    @property
    def ids(self) -> List[str]:
        return [e.id for e in self.entries]


__all__ = ["CatalogEntry", "CatalogPage"]
