"""Adapter registry for managing adapter instances."""

import logging
from typing import Dict, List, Optional, Type

from .base_adapter import BaseAdapter
from .models import AdapterCategory, AdapterConfig, AdapterInfo


logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry for managing adapter instances.

    Adapters hold configuration only, so the registry never sees a credential.
    """

    def __init__(self):
        # Registered adapter classes
        self._adapter_classes: Dict[str, Type[BaseAdapter]] = {}

        # Active adapter instances
        self._adapters: Dict[str, BaseAdapter] = {}

    def register_adapter_class(self, name: str, adapter_class: Type[BaseAdapter]):
        """Register an adapter class that can be instantiated."""
        if not issubclass(adapter_class, BaseAdapter):
            raise ValueError(f"{adapter_class} must be a subclass of BaseAdapter")

        self._adapter_classes[name] = adapter_class
        logger.info(f"Registered adapter class: {name}")

    def get_adapter_class(self, name: str) -> Optional[Type[BaseAdapter]]:
        """Get a registered adapter class by name."""
        return self._adapter_classes.get(name)

    def create_adapter(self, name: str, config: AdapterConfig) -> BaseAdapter:
        """Create an adapter instance from a registered class."""
        if name not in self._adapter_classes:
            raise ValueError(f"Unknown adapter class: {name}")

        adapter_id = f"{config.name}-{config.version}"
        if adapter_id in self._adapters:
            raise ValueError(f"Adapter {adapter_id} already exists")

        adapter = self._adapter_classes[name](config)
        return self.add_adapter(adapter)

    def add_adapter(self, adapter: BaseAdapter) -> BaseAdapter:
        """Track an already constructed adapter."""
        if adapter.id in self._adapters:
            raise ValueError(f"Adapter {adapter.id} already exists")

        self._adapters[adapter.id] = adapter
        logger.info(f"Added adapter {adapter.id} ({adapter.config.category.value})")
        return adapter

    def get_adapter(self, adapter_id: str) -> Optional[BaseAdapter]:
        """Get an adapter instance by ID."""
        return self._adapters.get(adapter_id)

    def get_adapters_by_category(self, category: AdapterCategory) -> List[BaseAdapter]:
        """Get all adapters in a category."""
        return [
            adapter for adapter in self._adapters.values()
            if adapter.config.category == category
        ]

    def get_adapters_by_capability(self, capability: str) -> List[BaseAdapter]:
        """Get adapters that provide a specific capability."""
        adapters = []

        for adapter in self._adapters.values():
            capabilities = {cap.name for cap in adapter.get_capabilities()}
            if capability in capabilities:
                adapters.append(adapter)

        return adapters

    def remove_adapter(self, adapter_id: str) -> bool:
        """Remove an adapter instance."""
        if adapter_id not in self._adapters:
            return False

        del self._adapters[adapter_id]
        logger.info(f"Removed adapter {adapter_id}")
        return True

    def list_adapters(self, category: Optional[AdapterCategory] = None) -> List[AdapterInfo]:
        """List all registered adapters, optionally filtered by category."""
        adapters = []

        for adapter in self._adapters.values():
            info = adapter.get_info()
            if category and info.category != category:
                continue
            adapters.append(info)

        return adapters

    def clear(self):
        """Forget all adapter classes and instances."""
        self._adapter_classes.clear()
        self._adapters.clear()

    @property
    def adapter_classes(self) -> Dict[str, Type[BaseAdapter]]:
        """Get registered adapter classes."""
        return self._adapter_classes.copy()


# Global adapter registry
adapter_registry = AdapterRegistry()
