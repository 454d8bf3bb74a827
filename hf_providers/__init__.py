"""hf_providers: provider-agnostic inference models served by Hugging Face.

Public entry points::

    from hf_providers import create_provider, Key
    from hf_providers.base.models import ChatRequest, ChatMessage

    provider = create_provider("huggingface")
    reply = provider.chat_completion(Key(value=token), ChatRequest(model=..., messages=[...]))
"""

from .base.errors import ErrorCode, ProviderError
from .factory import ProviderFactory, UnknownProviderError, create_provider
from .base.models import Key, RequestKind

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "Key",
    "ProviderError",
    "ProviderFactory",
    "RequestKind",
    "UnknownProviderError",
    "create_provider",
    "__version__",
]
