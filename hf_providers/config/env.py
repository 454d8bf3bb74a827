"""hf_providers.config.env
=======================

Environment variable names for the Hugging Face adapter and small helpers to
read them. Helpers never raise on unset variables; callers decide how to
proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Config field -> env var suffix (prefixed with the upper-cased provider name).
ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "hub_base_url": "HUB_BASE_URL",
    "provider_name": "PROVIDER_NAME",
    "send_back_raw_response": "SEND_BACK_RAW_RESPONSE",
    "stream_buffer_size": "STREAM_BUFFER_SIZE",
    "allowed_operations": "ALLOWED_OPERATIONS",
}

# Provider -> ordered env var names accepted for the API key (canonical first).
API_KEY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "huggingface": ("HUGGINGFACE_API_KEY", "HF_TOKEN"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a secret.

    Heuristics: contains 'placeholder', 'changeme' or 'your_', case-insensitive.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or v.startswith("your_")


def parse_bool(val: Optional[str]) -> Optional[bool]:
    """Parse common truthy/falsy spellings; ``None`` when unrecognized."""
    if val is None:
        return None
    v = val.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return None


def resolve_api_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_name)`` for the first usable API key variable."""
    name = (provider or "").lower()
    candidates = API_KEY_ALIASES.get(name, (f"{name.upper()}_API_KEY",))
    for env_name in candidates:
        val = os.getenv(env_name)
        if val and not is_placeholder(val):
            return val, env_name
    return None, None


__all__ = [
    "ENV_FIELD_MAP",
    "API_KEY_ALIASES",
    "is_placeholder",
    "parse_bool",
    "resolve_api_key",
]
