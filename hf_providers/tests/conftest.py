"""Pytest configuration for the hf_providers test suite.

Fixtures:
- ``isolated_config`` (autouse): strips Hugging Face env vars and the external
  config file so tests see only built-in defaults.
- ``fake_upstream``: replaces the pooled ``httpx`` clients used by the adapter
  with clients backed by ``httpx.MockTransport``; routes are registered per test.
- ``sse``: builds a server-sent-events body from JSON payloads.
- ``log_capture``: collects records emitted under the package logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import httpx
import pytest

from hf_providers.base.http import close_all_clients
from hf_providers.base.logging import get_logger
from hf_providers.config import reset_config_cache

_ENV_VARS = (
    "HUGGINGFACE_API_KEY",
    "HF_TOKEN",
    "HUGGINGFACE_BASE_URL",
    "HUGGINGFACE_HUB_BASE_URL",
    "HUGGINGFACE_PROVIDER_NAME",
    "HUGGINGFACE_SEND_BACK_RAW_RESPONSE",
    "HUGGINGFACE_STREAM_BUFFER_SIZE",
    "HUGGINGFACE_ALLOWED_OPERATIONS",
    "PROVIDERS_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against built-in defaults only."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


Responder = Callable[[httpx.Request], httpx.Response]


class FakeUpstream:
    """Routes requests to per-test responders and records them.

    Routes match on method and URL path suffix; the first match wins.
    Unmatched requests get a 404 with a Hugging Face style error body.
    """

    def __init__(self) -> None:
        self.routes: List[Tuple[str, str, Responder]] = []
        self.requests: List[httpx.Request] = []

    def route(self, method: str, path_suffix: str, responder: Responder) -> None:
        self.routes.append((method.upper(), path_suffix, responder))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for method, suffix, responder in self.routes:
            if request.method == method and request.url.path.endswith(suffix):
                return responder(request)
        return httpx.Response(404, json={"error": f"no route for {request.url.path}"})

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture()
def fake_upstream(monkeypatch: pytest.MonkeyPatch) -> FakeUpstream:
    """Swap the adapter's HTTP client pool for ``MockTransport`` clients."""
    upstream = FakeUpstream()

    def _client(base_url: Optional[str], purpose: str) -> httpx.Client:
        transport = httpx.MockTransport(upstream)
        if base_url:
            return httpx.Client(base_url=base_url, transport=transport)
        return httpx.Client(transport=transport)

    monkeypatch.setattr("hf_providers.huggingface.helpers.get_httpx_client", _client)
    monkeypatch.setattr("hf_providers.huggingface.catalog.get_httpx_client", _client)
    return upstream


def _sse(*payloads: Any, done: bool = True) -> bytes:
    chunks = []
    for p in payloads:
        data = p if isinstance(p, str) else json.dumps(p)
        chunks.append(f"data: {data}\n\n")
    if done:
        chunks.append("data: [DONE]\n\n")
    return "".join(chunks).encode("utf-8")


@pytest.fixture()
def sse() -> Callable[..., bytes]:
    """Return a builder: ``sse(payload, ..., done=True) -> bytes``."""
    return _sse


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[logging.LogRecord]]:
    """Collect records emitted under the ``hf_providers`` logger (DEBUG and up)."""
    monkeypatch.setenv("PROVIDERS_LOG_LEVEL", "DEBUG")
    records: List[logging.LogRecord] = []
    logger = get_logger()
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore[method-assign]
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
