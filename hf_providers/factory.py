"""Provider factory.

Adapters are imported lazily with ``importlib`` so importing the package
does not pull in every backend.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict


class UnknownProviderError(Exception):
    """Raised when a provider name is not registered or cannot be built."""


class ProviderFactory:
    """Create provider adapters from a canonical name (e.g. ``"huggingface"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "huggingface": {"module": "hf_providers.huggingface.client", "class": "HuggingFaceProvider"},
    }

    @classmethod
    def supported(cls) -> list[str]:
        return sorted(cls._PROVIDERS)

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Instantiate the adapter registered under ``provider``.

        Raises:
            UnknownProviderError: for unknown names, import failures, missing
                classes and constructor errors.
        """
        name = (provider or "").strip().lower()
        spec = cls._PROVIDERS.get(name)
        if spec is None:
            raise UnknownProviderError(
                f"unknown provider {provider!r}; supported: {', '.join(cls.supported())}"
            )
        try:
            module = import_module(spec["module"])
        except ImportError as e:
            raise UnknownProviderError(f"failed to import adapter for {name!r}: {e}") from e
        adapter_cls = getattr(module, spec["class"], None)
        if adapter_cls is None:
            raise UnknownProviderError(f"adapter class {spec['class']!r} missing in {spec['module']}")
        try:
            return adapter_cls(**kwargs)
        except Exception as e:
            raise UnknownProviderError(f"failed to initialize {name!r}: {e}") from e


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
