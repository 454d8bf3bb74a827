from __future__ import annotations

import json

import pytest

from hf_providers.config import ConfigError, get_provider_config, reset_config_cache
from hf_providers.config.env import is_placeholder, parse_bool, resolve_api_key
from hf_providers.huggingface import HuggingFaceProvider


def test_defaults():
    cfg = get_provider_config("huggingface")
    assert cfg["base_url"] == "https://router.huggingface.co/v1"  # nosec B101
    assert cfg["hub_base_url"] == "https://huggingface.co"  # nosec B101
    assert cfg["send_back_raw_response"] is False  # nosec B101
    assert cfg["allowed_operations"] is None and "api_key" not in cfg  # nosec B101


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HUGGINGFACE_BASE_URL", "https://proxy.local/v1")
    monkeypatch.setenv("HUGGINGFACE_SEND_BACK_RAW_RESPONSE", "yes")
    monkeypatch.setenv("HUGGINGFACE_STREAM_BUFFER_SIZE", "16")
    monkeypatch.setenv("HUGGINGFACE_ALLOWED_OPERATIONS", "chat_completion, list_models,")
    cfg = get_provider_config("huggingface")
    assert cfg["base_url"] == "https://proxy.local/v1"  # nosec B101
    assert cfg["send_back_raw_response"] is True  # nosec B101
    assert cfg["stream_buffer_size"] == 16  # nosec B101
    assert cfg["allowed_operations"] == ["chat_completion", "list_models"]  # nosec B101


def test_api_key_aliases(monkeypatch):
    assert resolve_api_key("huggingface") == (None, None)  # nosec B101
    monkeypatch.setenv("HF_TOKEN", "hf_alias")
    assert resolve_api_key("huggingface") == ("hf_alias", "HF_TOKEN")  # nosec B101
    monkeypatch.setenv("HUGGINGFACE_API_KEY", "hf_canonical")
    assert get_provider_config("huggingface")["api_key"] == "hf_canonical"  # nosec B101
    monkeypatch.setenv("HUGGINGFACE_API_KEY", "your_token_here")
    assert resolve_api_key("huggingface") == ("hf_alias", "HF_TOKEN")  # nosec B101


def test_json_config_file(tmp_path, monkeypatch):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"huggingface": {"base_url": "https://file.local/v1", "provider_name": "hf-file"}}))
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("HUGGINGFACE_PROVIDER_NAME", "hf-env")
    cfg = get_provider_config("huggingface", overrides={"base_url": None})
    assert cfg["base_url"] == "https://file.local/v1"  # nosec B101
    assert cfg["provider_name"] == "hf-env"  # nosec B101


def test_yaml_config_file_and_overrides(tmp_path, monkeypatch):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "huggingface:\n"
        "  extra_headers:\n"
        "    X-Org: research\n"
        "  allowed_operations: [chat_completion]\n"
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    provider = HuggingFaceProvider(provider_name="hf-custom")
    assert provider.provider_name == "hf-custom"  # nosec B101
    assert provider._extra_headers == {"X-Org": "research"}  # nosec B101
    assert [k.value for k in provider.supported_operations()] == ["chat_completion"]  # nosec B101


def test_unparseable_config_file(tmp_path, monkeypatch):
    path = tmp_path / "broken.yaml"
    path.write_text("huggingface: [unclosed\n")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    with pytest.raises(ConfigError):
        get_provider_config("huggingface")
    reset_config_cache()


@pytest.mark.parametrize("raw, expected", [("1", True), ("Off", False), ("maybe", None), (None, None)])
def test_parse_bool(raw, expected):
    assert parse_bool(raw) is expected  # nosec B101


def test_is_placeholder():
    assert is_placeholder("CHANGEME")  # nosec B101
    assert not is_placeholder("hf_abc123")  # nosec B101
    assert not is_placeholder(None)  # nosec B101
