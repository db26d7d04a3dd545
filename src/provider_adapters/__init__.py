"""Provider adapters for Discord, GitHub and OpenAI."""

from .base_adapter import BaseAdapter
from .config import Settings, configure_logging, get_settings
from .exceptions import (
    AdapterError,
    EmptyResponseArrayError,
    InvalidEncodingError,
    MalformedResponseError,
    ProviderError,
    RequestFailedError,
)
from .factory import AdapterFactory
from .models import AdapterCapability, AdapterCategory, AdapterConfig, AdapterRequest, AdapterResponse
from .registry import AdapterRegistry, adapter_registry

__all__ = [
    "BaseAdapter",
    "Settings",
    "configure_logging",
    "get_settings",
    "AdapterError",
    "EmptyResponseArrayError",
    "InvalidEncodingError",
    "MalformedResponseError",
    "ProviderError",
    "RequestFailedError",
    "AdapterFactory",
    "AdapterCapability",
    "AdapterCategory",
    "AdapterConfig",
    "AdapterRequest",
    "AdapterResponse",
    "AdapterRegistry",
    "adapter_registry",
]
