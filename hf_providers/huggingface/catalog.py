"""Hub catalog aggregation for the Hugging Face provider.

Purpose:
    List the models that can be served through the ``hf-inference`` provider,
    infer what each model can do, and merge listings obtained with several
    credentials into a single sorted list that is paged after the merge.

Concurrency:
    One Hub query per credential, run concurrently on a short-lived
    ``ThreadPoolExecutor``. Results are joined in credential order and merged
    on the calling thread only, so there is no shared mutable state between
    the workers.

Partial failure:
    Advisory. Entries from the credentials that succeeded are returned and
    each failed credential is reported as a ``PARTIAL_CATALOG`` warning on
    the page (and logged). The call raises only when every credential failed,
    re-raising the first credential's error.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

import httpx
from pydantic import ValidationError

from ..base.errors import ErrorCode, ProviderError, partial_catalog_failure
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import CatalogEntry, CatalogPage, ExtraFields, Key, ListModelsRequest, RequestKind
from ..config.defaults import (
    ERROR_BODY_PREVIEW_CHARS,
    HUB_DEFAULT_PAGE_SIZE,
    HUB_INFERENCE_PROVIDER,
    HUB_LIST_MAX_WORKERS,
    HUB_MAX_PAGE_SIZE,
    HUB_NEXT_PAGE_HEADER,
    RESPONSE_PREVIEW_CHARS,
)
from .errors import map_upstream_error
from .wire import HUB_ROWS, HubModelEntry

CHAT_TASKS: FrozenSet[str] = frozenset(
    {"text-generation", "text2text-generation", "summarization", "conversational", "chat-completion"}
)
EMBEDDING_TASKS: FrozenSet[str] = frozenset(
    {"text-embedding", "sentence-similarity", "feature-extraction", "embeddings"}
)
CHAT_CAPABILITIES: FrozenSet[RequestKind] = frozenset(
    {RequestKind.CHAT_COMPLETION, RequestKind.TEXT_COMPLETION, RequestKind.RESPONSES}
)
EMBEDDING_CAPABILITIES: FrozenSet[RequestKind] = frozenset({RequestKind.EMBEDDING})
MERGED_PAGE_TOKEN_PREFIX = "merged:"


def derive_capabilities(pipeline_tag: Optional[str], tags: Iterable[str] = ()) -> FrozenSet[RequestKind]:
    """Infer the operations a Hub model supports.

    The pipeline tag and every tag are trimmed, lower-cased and matched
    against the chat-like and embedding-like task sets. The result may be
    empty, in which case the model is not listed.
    """
    labels = {(pipeline_tag or "").strip().lower()}
    labels.update(t.strip().lower() for t in tags if isinstance(t, str))
    caps: set[RequestKind] = set()
    if labels & CHAT_TASKS:
        caps |= CHAT_CAPABILITIES
    if labels & EMBEDDING_TASKS:
        caps |= EMBEDDING_CAPABILITIES
    return frozenset(caps)


def render_query_value(value: Any) -> Optional[str]:
    """Render an extra query parameter to its canonical string form.

    Strings pass through (empty strings are skipped), booleans become
    ``true``/``false``, integers and integral floats become decimal integers,
    everything else uses ``str()``. ``None`` is skipped.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_page_size(page_size: int) -> int:
    """Clamp a requested page size to ``(0, HUB_MAX_PAGE_SIZE]``; non-positive means default."""
    if page_size <= 0:
        return HUB_DEFAULT_PAGE_SIZE
    return min(page_size, HUB_MAX_PAGE_SIZE)


def build_hub_params(request: ListModelsRequest) -> Dict[str, str]:
    """Query parameters for ``GET /api/models``."""
    params: Dict[str, str] = {
        "inference_provider": HUB_INFERENCE_PROVIDER,
        "limit": str(normalize_page_size(request.page_size)),
        "full": "1",
        "sort": "likes",
        "direction": "-1",
    }
    cursor = (request.page_token or "").strip()
    if cursor:
        params["cursor"] = cursor
    for name, value in request.extra_params.items():
        rendered = render_query_value(value)
        if rendered is not None:
            params[name] = rendered
    return params


def _first_text(*values: Optional[str]) -> Optional[str]:
    for v in values:
        if v and v.strip():
            return v.strip()
    return None


def entry_from_hub(item: HubModelEntry, *, provider: str, hub_base_url: str) -> Optional[CatalogEntry]:
    """Convert one Hub item; ``None`` when it has no id or no usable capability."""
    model_id = item.hub_id
    if not model_id:
        return None
    caps = derive_capabilities(item.pipeline_tag, item.tags)
    if not caps:
        return None
    card = item.card_data
    return CatalogEntry(
        id=f"{provider}/{model_id}",
        canonical_url=f"{hub_base_url.rstrip('/')}/{model_id}",
        name=_first_text(card.model_name if card else None) or model_id,
        owned_by=item.author or None,
        description=_first_text(
            card.description if card else None,
            card.short_description if card else None,
            card.summary if card else None,
        ),
        capabilities=caps,
        hugging_face_id=model_id,
        deployment=model_id,
        modality=item.pipeline_tag or None,
        gated=item.gated,
        private=item.private,
        likes=item.likes,
        downloads=item.downloads,
        created_at=item.created_at,
    )


@dataclass
class KeyListing:
    """Catalog entries and upstream cursor obtained with one credential."""

    key: Key
    entries: List[CatalogEntry] = field(default_factory=list)
    cursor: Optional[str] = None
    error: Optional[ProviderError] = None


def merge_listings(listings: Sequence[KeyListing]) -> Tuple[List[CatalogEntry], Optional[str]]:
    """Union successful listings by id, first credential wins, sorted by id.

    Returns the merged entries and the first cursor reported, in credential
    order.
    """
    seen: Dict[str, CatalogEntry] = {}
    cursor: Optional[str] = None
    for listing in listings:
        if listing.error is not None:
            continue
        for entry in listing.entries:
            seen.setdefault(entry.id, entry)
        if cursor is None and listing.cursor:
            cursor = listing.cursor
    return sorted(seen.values(), key=lambda e: e.id), cursor


def split_page_token(token: Optional[str]) -> Tuple[Optional[str], int]:
    """Split a page token into ``(upstream_cursor, offset)``.

    Tokens minted by :func:`paginate` read ``merged:<offset>:<cursor>``.
    Anything else is an upstream cursor at offset zero.
    """
    token = (token or "").strip()
    if token.startswith(MERGED_PAGE_TOKEN_PREFIX):
        offset, _, cursor = token[len(MERGED_PAGE_TOKEN_PREFIX) :].partition(":")
        if offset.isdigit():
            return cursor or None, int(offset)
    return token or None, 0


def paginate(
    entries: Sequence[CatalogEntry],
    *,
    page_size: int,
    offset: int,
    upstream_cursor: Optional[str],
    next_cursor: Optional[str],
) -> Tuple[List[CatalogEntry], Optional[str]]:
    """Cut one page out of the merged, sorted entries.

    While merged entries remain past this page, the next token re-reads the
    same upstream page (``upstream_cursor``) at a larger offset. Once they
    are exhausted the upstream ``next_cursor`` is returned verbatim.
    """
    end = offset + normalize_page_size(page_size)
    page = list(entries[offset:end])
    if end < len(entries):
        return page, f"{MERGED_PAGE_TOKEN_PREFIX}{end}:{upstream_cursor or ''}"
    return page, next_cursor


def _preview(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


class CatalogAggregator:
    """Lists Hub models for one or more credentials.

    Parameters:
        provider: Provider key used for entry ids and error attribution.
        hub_base_url: Hub root (``https://huggingface.co`` by default).
        extra_headers: Headers added to every Hub request.
        max_workers: Upper bound on concurrent Hub queries.
    """

    def __init__(
        self,
        *,
        provider: str,
        hub_base_url: str,
        extra_headers: Optional[Mapping[str, str]] = None,
        max_workers: int = HUB_LIST_MAX_WORKERS,
    ) -> None:
        self._provider = provider
        self._hub_base_url = hub_base_url.rstrip("/")
        self._extra_headers = dict(extra_headers or {})
        self._max_workers = max(1, max_workers)
        self._logger = get_logger("huggingface.catalog")

    def _headers(self, key: Key) -> Dict[str, str]:
        headers = {"Accept": "application/json", **self._extra_headers}
        if key.value:
            headers["Authorization"] = f"Bearer {key.value}"
        return headers

    def _error(self, code: ErrorCode, message: str, raw: Any = None, status: Optional[int] = None) -> ProviderError:
        return ProviderError(
            code=code,
            message=message,
            provider=self._provider,
            request_kind=RequestKind.LIST_MODELS,
            status_code=status,
            raw=raw,
        )

    def fetch(self, key: Key, request: ListModelsRequest) -> KeyListing:
        """Query one catalog page with ``key``.

        Raises:
            ProviderError: ``TRANSPORT``, ``UPSTREAM_API`` or ``DECODE``.
        """
        ctx = LogContext(provider=self._provider, request_kind=RequestKind.LIST_MODELS, extra={"key": key.label})
        client = get_httpx_client(self._hub_base_url, purpose=f"{self._provider}.list_models")
        try:
            resp = client.get("/api/models", params=build_hub_params(request), headers=self._headers(key))
        except httpx.HTTPError as e:
            raise self._error(ErrorCode.TRANSPORT, str(e) or e.__class__.__name__, raw=e) from e
        if not resp.is_success:
            raise map_upstream_error(
                resp.status_code,
                resp.content,
                provider=self._provider,
                request_kind=RequestKind.LIST_MODELS,
            )
        text = resp.text
        log_event(
            self._logger,
            "catalog.fetch",
            ctx,
            level=logging.DEBUG,
            status_code=resp.status_code,
            preview=_preview(text, RESPONSE_PREVIEW_CHARS),
        )
        try:
            rows = HUB_ROWS.validate_json(resp.content)
        except ValidationError as e:
            log_event(
                self._logger,
                "catalog.decode_error",
                ctx,
                level=logging.ERROR,
                preview=_preview(text, ERROR_BODY_PREVIEW_CHARS),
            )
            raise self._error(ErrorCode.DECODE, f"invalid model listing: {e}", raw=e, status=resp.status_code) from e
        entries: List[CatalogEntry] = []
        for position, row in enumerate(rows):
            try:
                item = HubModelEntry.model_validate(row)
            except ValidationError as e:
                log_event(
                    self._logger,
                    "catalog.skip_entry",
                    ctx,
                    level=logging.WARNING,
                    position=position,
                    error=str(e),
                    preview=_preview(str(row), RESPONSE_PREVIEW_CHARS),
                )
                continue
            entry = entry_from_hub(item, provider=self._provider, hub_base_url=self._hub_base_url)
            if entry is not None:
                entries.append(entry)
        cursor = (resp.headers.get(HUB_NEXT_PAGE_HEADER) or "").strip() or None
        return KeyListing(key=key, entries=entries, cursor=cursor)

    def _fetch_outcome(self, key: Key, request: ListModelsRequest) -> KeyListing:
        try:
            return self.fetch(key, request)
        except ProviderError as e:
            return KeyListing(key=key, error=e)

    def list_models(self, keys: Sequence[Key], request: Optional[ListModelsRequest] = None) -> CatalogPage:
        """Return one merged catalog page for ``keys``.

        No credentials means a single anonymous query. Pagination applies to
        the merged, sorted list: when it holds more than one page, the
        returned token re-reads the same upstream page at the next offset.

        Raises:
            ProviderError: the first credential's error when every credential failed.
        """
        request = request or ListModelsRequest()
        keys = list(keys) or [Key.anonymous()]
        upstream_cursor, offset = split_page_token(request.page_token)
        upstream = replace(request, page_token=upstream_cursor)
        t0 = time.perf_counter()
        if len(keys) == 1:
            listings = [self._fetch_outcome(keys[0], upstream)]
        else:
            with ThreadPoolExecutor(max_workers=min(len(keys), self._max_workers)) as executor:
                futures = [executor.submit(self._fetch_outcome, k, upstream) for k in keys]
            listings = [f.result() for f in futures]

        failed = [listing for listing in listings if listing.error is not None]
        if len(failed) == len(listings):
            raise failed[0].error  # type: ignore[misc]

        merged, cursor = merge_listings(listings)
        entries, next_token = paginate(
            merged,
            page_size=request.page_size,
            offset=offset,
            upstream_cursor=upstream_cursor,
            next_cursor=cursor,
        )
        warnings = [partial_catalog_failure(f.error, f.key.label) for f in failed]  # type: ignore[arg-type]
        ctx = LogContext(provider=self._provider, request_kind=RequestKind.LIST_MODELS)
        for w in warnings:
            normalized_log_event(
                self._logger,
                "catalog.partial_failure",
                ctx,
                phase="finalize",
                error_code=w.code.value,
                emitted=None,
                level=logging.WARNING,
                message=w.message,
                status_code=w.status_code,
            )
        latency_ms = round((time.perf_counter() - t0) * 1000.0, 3)
        normalized_log_event(
            self._logger,
            "catalog.end",
            ctx,
            phase="finalize",
            emitted=bool(entries),
            count=len(entries),
            keys=len(keys),
            failed_keys=len(failed),
            latency_ms=latency_ms,
        )
        return CatalogPage(
            entries=entries,
            next_page_token=next_token,
            warnings=warnings,
            extra_fields=ExtraFields(
                provider=self._provider,
                request_type=RequestKind.LIST_MODELS,
                latency_ms=latency_ms,
            ),
        )


__all__ = [
    "CHAT_CAPABILITIES",
    "CHAT_TASKS",
    "CatalogAggregator",
    "EMBEDDING_CAPABILITIES",
    "EMBEDDING_TASKS",
    "KeyListing",
    "MERGED_PAGE_TOKEN_PREFIX",
    "build_hub_params",
    "derive_capabilities",
    "entry_from_hub",
    "merge_listings",
    "normalize_page_size",
    "paginate",
    "render_query_value",
    "split_page_token",
]
