from __future__ import annotations

import pytest

from hf_providers import ProviderFactory, UnknownProviderError, create_provider
from hf_providers.huggingface import HuggingFaceProvider


def test_supported_names():
    assert ProviderFactory.supported() == ["huggingface"]  # nosec B101


def test_create_passes_kwargs():
    provider = create_provider(" HuggingFace ", provider_name="hf-mirror", base_url="https://mirror.local/v1")
    assert isinstance(provider, HuggingFaceProvider)  # nosec B101
    assert provider.provider_name == "hf-mirror"  # nosec B101
    assert provider.base_url == "https://mirror.local/v1"  # nosec B101


def test_unknown_provider():
    with pytest.raises(UnknownProviderError, match="unknown provider"):
        ProviderFactory.create("not-a-provider")


def test_constructor_errors_are_wrapped():
    with pytest.raises(UnknownProviderError, match="failed to initialize"):
        ProviderFactory.create("huggingface", allowed_operations=["teleport"])
