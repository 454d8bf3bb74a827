"""Unified configuration layer for providers.

Merge order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``PROVIDERS_CONFIG_FILE``
    3. Environment variables (``HUGGINGFACE_API_KEY``, ``HUGGINGFACE_BASE_URL``...)
    4. In-code overrides passed to :func:`get_provider_config`

External config file example::

    huggingface:
      base_url: https://router.huggingface.co/v1
      send_back_raw_response: true
      extra_headers:
        X-Team: research
      allowed_operations: [chat_completion, chat_completion_stream, list_models]

Recognized keys: ``api_key``, ``base_url``, ``hub_base_url``,
``provider_name``, ``send_back_raw_response``, ``stream_buffer_size``,
``extra_headers`` (mapping), ``allowed_operations`` (list of request kinds;
absent means every supported operation is allowed).
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .defaults import (
    HUGGINGFACE_DEFAULT_BASE_URL,
    HUGGINGFACE_DEFAULT_HUB_BASE_URL,
    HUGGINGFACE_PROVIDER_NAME,
    HUGGINGFACE_STREAM_BUFFER_SIZE,
)
from .env import ENV_FIELD_MAP, parse_bool, resolve_api_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "huggingface": {
        "base_url": HUGGINGFACE_DEFAULT_BASE_URL,
        "hub_base_url": HUGGINGFACE_DEFAULT_HUB_BASE_URL,
        "provider_name": HUGGINGFACE_PROVIDER_NAME,
        "send_back_raw_response": False,
        "stream_buffer_size": HUGGINGFACE_STREAM_BUFFER_SIZE,
        "extra_headers": {},
        "allowed_operations": None,
    },
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


class ConfigError(ValueError):
    """Raised when the external config file cannot be parsed."""


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the file named by ``PROVIDERS_CONFIG_FILE``.

    JSON is tried first, then YAML. A missing variable or file yields ``{}``;
    a file that is neither valid JSON nor YAML raises ``ConfigError``.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - module cache
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"cannot parse {path}: {e}") from e
    _FILE_CACHE = data if isinstance(data, dict) else {}
    _FILE_CACHE_PATH = path
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external config file (tests and reload hooks)."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - module cache
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


def _split_list(raw: str) -> List[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is None or field == "api_key":
            continue
        if field == "send_back_raw_response":
            flag = parse_bool(val)
            if flag is not None:
                out[field] = flag
        elif field == "stream_buffer_size":
            if val.strip().isdigit():
                out[field] = int(val.strip())
        elif field == "allowed_operations":
            out[field] = _split_list(val)
        else:
            out[field] = val
    key, _ = resolve_api_key(provider)
    if key:
        out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = [
    "ConfigError",
    "DEFAULTS",
    "get_provider_config",
    "reset_config_cache",
]
