"""Unit tests for the shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- Streaming purposes get the stream read timeout.
"""
from __future__ import annotations

from hf_providers.base.http import close_all_clients, get_httpx_client
from hf_providers.base.timeouts import TimeoutConfig, get_timeout_config


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://router.example.com/v1", purpose="huggingface.chat_completion")
    c2 = get_httpx_client("https://router.example.com/v1", purpose="huggingface.chat_completion")
    assert c1 is c2  # nosec B101


def test_different_purpose_or_base_url_returns_different_instances():
    c1 = get_httpx_client("https://router.example.com/v1", purpose="huggingface.embedding")
    c2 = get_httpx_client("https://router.example.com/v1", purpose="huggingface.stream")
    c3 = get_httpx_client("https://hub.example.com", purpose="huggingface.embedding")
    assert c1 is not c2 and c1 is not c3  # nosec B101


def test_stream_purpose_uses_stream_timeout(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "7")
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "90")
    regular = get_httpx_client("https://router.example.com/v1", purpose="huggingface.chat_completion")
    streaming = get_httpx_client("https://router.example.com/v1", purpose="huggingface.stream")
    assert regular.timeout.read == 7.0  # nosec B101
    assert streaming.timeout.read == 90.0  # nosec B101
    assert streaming.timeout.connect == 10.0  # nosec B101


def test_close_all_clients_resets_pool():
    c1 = get_httpx_client(None, purpose="huggingface.list_models")
    close_all_clients()
    assert c1.is_closed  # nosec B101
    assert get_httpx_client(None, purpose="huggingface.list_models") is not c1  # nosec B101


def test_timeout_config_ignores_invalid_values(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_CONNECT_SECONDS", "-1")
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "abc")
    assert get_timeout_config() == TimeoutConfig()  # nosec B101
