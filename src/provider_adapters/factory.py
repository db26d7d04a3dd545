"""Factory for creating adapter instances."""

import logging
from typing import Any, Dict, Optional, Type
import importlib
import inspect

import httpx

from .base_adapter import BaseAdapter
from .models import AdapterCategory, AdapterConfig
from .registry import adapter_registry


logger = logging.getLogger(__name__)


class AdapterFactory:
    """Factory for creating adapter instances dynamically."""

    # Known adapter implementations
    ADAPTER_MAPPINGS = {
        "discord": "provider_adapters.implementations.communication.discord_adapter.DiscordAdapter",
        "github": "provider_adapters.implementations.integration.github_adapter.GitHubAdapter",
        "openai": "provider_adapters.implementations.ai.openai_adapter.OpenAIAdapter",
    }

    ADAPTER_CATEGORIES = {
        "discord": AdapterCategory.COMMUNICATION,
        "github": AdapterCategory.INTEGRATION,
        "openai": AdapterCategory.AI,
    }

    @classmethod
    def create_adapter(
        cls,
        adapter_type: str,
        config: Optional[Dict[str, Any]] = None,
        client: Optional[httpx.AsyncClient] = None
    ) -> BaseAdapter:
        """Create an adapter instance from type and config."""
        adapter_type = adapter_type.lower()

        adapter_class = cls._get_adapter_class(adapter_type)
        adapter_config = cls._create_config(adapter_type, dict(config or {}))

        adapter = adapter_class(adapter_config, client=client)
        logger.info(f"Created adapter {adapter_type} ({adapter.base_url})")

        return adapter

    @classmethod
    def create_and_register_adapter(
        cls,
        adapter_type: str,
        config: Optional[Dict[str, Any]] = None,
        client: Optional[httpx.AsyncClient] = None
    ) -> BaseAdapter:
        """Create an adapter and register it with the global registry."""
        adapter_type = adapter_type.lower()

        if adapter_type not in adapter_registry.adapter_classes:
            adapter_registry.register_adapter_class(adapter_type, cls._get_adapter_class(adapter_type))

        adapter = cls.create_adapter(adapter_type, config, client=client)
        return adapter_registry.add_adapter(adapter)

    @classmethod
    def _get_adapter_class(cls, adapter_type: str) -> Type[BaseAdapter]:
        """Get adapter class by type."""
        if adapter_type in cls.ADAPTER_MAPPINGS:
            return cls._load_adapter_class(cls.ADAPTER_MAPPINGS[adapter_type])

        # Check registry for already loaded classes
        registered = adapter_registry.get_adapter_class(adapter_type)
        if registered:
            return registered

        raise ValueError(f"Unknown adapter type: {adapter_type}")

    @classmethod
    def _load_adapter_class(cls, class_path: str) -> Type[BaseAdapter]:
        """Load an adapter class from module path."""
        module_path, class_name = class_path.rsplit(".", 1)
        try:
            module = importlib.import_module(module_path)
            adapter_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Failed to load adapter class {class_path}: {str(e)}") from e

        if not inspect.isclass(adapter_class) or not issubclass(adapter_class, BaseAdapter):
            raise ValueError(f"{class_path} is not a valid BaseAdapter subclass")

        return adapter_class

    @classmethod
    def _create_config(cls, adapter_type: str, config_dict: Dict[str, Any]) -> AdapterConfig:
        """Create adapter config from dictionary."""
        config_dict.setdefault("name", adapter_type)
        config_dict.setdefault("version", "1.0.0")

        if "category" not in config_dict:
            config_dict["category"] = cls.ADAPTER_CATEGORIES.get(adapter_type, AdapterCategory.INTEGRATION)

        return AdapterConfig(**config_dict)

    @classmethod
    def get_available_adapters(cls) -> Dict[str, str]:
        """Get list of available adapter types and their class paths."""
        return cls.ADAPTER_MAPPINGS.copy()
