"""Canonical model parts; import from ``hf_providers.base.models``."""
