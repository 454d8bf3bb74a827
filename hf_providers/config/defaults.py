"""hf_providers.config.defaults
===========================

Small, stable default values for the Hugging Face adapter. Everything here
can be overridden through ``get_provider_config``; this module performs no
I/O and imports nothing from the rest of the package.
"""

from __future__ import annotations

HUGGINGFACE_PROVIDER_NAME = "huggingface"

# Inference router (OpenAI-compatible chat and responses endpoints).
HUGGINGFACE_DEFAULT_BASE_URL = "https://router.huggingface.co/v1"
# Model Hub hosting the catalog API and model pages.
HUGGINGFACE_DEFAULT_HUB_BASE_URL = "https://huggingface.co"

# Buffer size of upstream message streams (relay output mirrors it).
HUGGINGFACE_STREAM_BUFFER_SIZE = 256

# ---- Catalog ----
HUB_INFERENCE_PROVIDER = "hf-inference"
HUB_DEFAULT_PAGE_SIZE = 200
HUB_MAX_PAGE_SIZE = 1000
HUB_NEXT_PAGE_HEADER = "X-Next-Page"
# Concurrent catalog queries when several credentials are listed.
HUB_LIST_MAX_WORKERS = 8

# ---- Diagnostics ----
RESPONSE_PREVIEW_CHARS = 500
ERROR_BODY_PREVIEW_CHARS = 1000
