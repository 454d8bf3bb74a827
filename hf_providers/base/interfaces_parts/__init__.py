"""Interface parts; import from ``hf_providers.base.interfaces``."""
