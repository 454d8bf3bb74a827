"""HTTP helpers shared by the Hugging Face chat, embedding and stream paths.

Purpose:
    Build URLs and headers, send requests through the pooled ``httpx``
    clients and turn every transport, status and decode failure into a
    ``ProviderError`` carrying provider, model and request kind.

Notes:
    Consumers must define ``provider_name``, ``_base_url``, ``_extra_headers``
    and ``_logger``.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import httpx

from ..base.errors import ErrorCode, ProviderError, classify_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, normalized_log_event
from ..base.models import Key, RequestKind
from .errors import map_upstream_error


def inference_router_url(base_url: str) -> str:
    """Router root for the inference API: ``base_url`` without a ``/v1`` suffix."""
    base = base_url.rstrip("/")
    return base[: -len("/v1")] if base.endswith("/v1") else base


def feature_extraction_path(model: str) -> str:
    """Path of the feature-extraction pipeline for ``model``."""
    return f"/hf-inference/models/{quote(model, safe='/')}/pipeline/feature-extraction"


class HuggingFaceHTTPMixin:
    """Request plumbing for the Hugging Face provider."""

    provider_name: str
    _base_url: str
    _extra_headers: Dict[str, str]

    def _headers(self, key: Key) -> Dict[str, str]:
        """Content headers, configured extra headers and bearer auth when the key has a value."""
        headers: Dict[str, str] = {"Content-Type": "application/json", "Accept": "application/json"}
        headers.update(self._extra_headers)
        if key is not None and key.value:
            headers["Authorization"] = f"Bearer {key.value}"
        return headers

    def _client(self, base_url: str, purpose: str) -> httpx.Client:
        return get_httpx_client(base_url, purpose=f"{self.provider_name}.{purpose}")

    def _error(
        self,
        code: ErrorCode,
        message: str,
        kind: RequestKind,
        model: Optional[str],
        raw: Any = None,
        status: Optional[int] = None,
    ) -> ProviderError:
        return ProviderError(
            code=code,
            message=message,
            provider=self.provider_name,
            model=model,
            request_kind=kind,
            status_code=status,
            raw=raw,
        )

    def _wrap_exception(self, exc: Exception, kind: RequestKind, model: Optional[str]) -> ProviderError:
        if isinstance(exc, ProviderError):
            return exc
        return self._error(classify_exception(exc), str(exc) or exc.__class__.__name__, kind, model, raw=exc)

    def _raise_for_status(self, resp: httpx.Response, kind: RequestKind, model: Optional[str], ctx: LogContext) -> None:
        if resp.is_success:
            return
        err = map_upstream_error(
            resp.status_code,
            resp.content,
            provider=self.provider_name,
            model=model,
            request_kind=kind,
        )
        normalized_log_event(
            self._logger,  # type: ignore[attr-defined]
            "upstream.error",
            ctx,
            phase="finalize",
            error_code=err.code.value,
            emitted=False,
            status_code=resp.status_code,
            message=err.message,
        )
        raise err

    def _post_json(
        self,
        base_url: str,
        path: str,
        body: Dict[str, Any],
        key: Key,
        kind: RequestKind,
        model: Optional[str],
        ctx: LogContext,
    ) -> Tuple[Any, float]:
        """POST ``body`` and return ``(decoded_json, latency_ms)``.

        Raises:
            ProviderError: ``TRANSPORT`` on connection failures, ``UPSTREAM_API``
                on non-2xx replies and ``DECODE`` on non-JSON bodies.
        """
        client = self._client(base_url, kind.value)
        t0 = time.perf_counter()
        try:
            resp = client.post(path, json=body, headers=self._headers(key))
        except httpx.HTTPError as e:
            raise self._wrap_exception(e, kind, model) from e
        latency_ms = round((time.perf_counter() - t0) * 1000.0, 3)
        self._raise_for_status(resp, kind, model, ctx)
        try:
            return resp.json(), latency_ms
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise self._error(
                ErrorCode.DECODE,
                f"invalid JSON in {kind.value} response: {e}",
                kind,
                model,
                raw=e,
                status=resp.status_code,
            ) from e

    def _open_stream(
        self,
        base_url: str,
        path: str,
        body: Dict[str, Any],
        key: Key,
        kind: RequestKind,
        model: Optional[str],
        ctx: LogContext,
    ) -> httpx.Response:
        """Send a streaming POST and return the open response once its status is 2xx.

        The caller owns the returned response and must close it.
        """
        client = self._client(base_url, "stream")
        headers = self._headers(key)
        headers["Accept"] = "text/event-stream"
        request = client.build_request("POST", path, json=body, headers=headers)
        try:
            resp = client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise self._wrap_exception(e, kind, model) from e
        if not resp.is_success:
            try:
                resp.read()
            except httpx.HTTPError as e:
                raise self._wrap_exception(e, kind, model) from e
            finally:
                resp.close()
        self._raise_for_status(resp, kind, model, ctx)
        return resp


__all__ = ["HuggingFaceHTTPMixin", "feature_extraction_path", "inference_router_url"]
