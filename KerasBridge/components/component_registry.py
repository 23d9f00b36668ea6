"""
# @ Create Time: 2026-09-28 10:12:41
# @ Modified time: 2026-10-11 18:03:27
# @ Description:
"""

"""
Component registry for managing the bridge components.
This allows registration and retrieval of optimizer specs, engine backends and models.
"""

import logging
from typing import Any, Dict, Type, Optional

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Registry for managing the bridge components."""

    def __init__(self):
        self._optimizers: Dict[str, Type] = {}
        self._backends: Dict[str, Type] = {}
        self._models: Dict[str, Type] = {}

    def optimizer(self, name: str):
        """Decorator to register an optimizer spec class."""

        def decorator(cls: Type):
            self._optimizers[name] = cls
            logger.info(f"Registered optimizer: {name}")
            return cls

        return decorator

    def backend(self, name: str):
        """Decorator to register an engine backend class."""

        def decorator(cls: Type):
            self._backends[name] = cls
            logger.info(f"Registered backend: {name}")
            return cls

        return decorator

    def model(self, name: str):
        """Decorator to register a model builder class."""

        def decorator(cls: Type):
            self._models[name] = cls
            logger.info(f"Registered model: {name}")
            return cls

        return decorator

    def get_optimizer(self, name: str) -> Optional[Type]:
        """Get optimizer spec class by name."""
        return self._optimizers.get(name)

    def get_backend(self, name: str) -> Optional[Type]:
        """Get backend class by name."""
        return self._backends.get(name)

    def get_model(self, name: str) -> Optional[Type]:
        """Get model builder class by name."""
        return self._models.get(name)

    def list_optimizers(self) -> list[str]:
        """List all registered optimizers."""
        return list(self._optimizers.keys())

    def list_backends(self) -> list[str]:
        """List all registered backends."""
        return list(self._backends.keys())

    def list_models(self) -> list[str]:
        """List all registered models."""
        return list(self._models.keys())


# Global registry instance
registry = ComponentRegistry()


class ComponentFactory:
    """Factory for creating components using the registry."""

    @staticmethod
    def create_optimizer(name: str, **kwargs) -> Any:
        """Create a validated optimizer spec."""
        optimizer_class = registry.get_optimizer(name)
        if optimizer_class is None:
            raise ValueError(
                f"Unknown optimizer: {name}. Available: {registry.list_optimizers()}"
            )
        return optimizer_class.from_dict({"name": name, **kwargs})

    @staticmethod
    def create_backend(name: str, **kwargs) -> Any:
        """Create an engine backend instance."""
        backend_class = registry.get_backend(name)
        if backend_class is None:
            raise ValueError(
                f"Unknown backend: {name}. Available: {registry.list_backends()}"
            )
        return backend_class(**kwargs)

    @staticmethod
    def create_model(name: str, **kwargs) -> Any:
        """Create a model builder instance."""
        model_class = registry.get_model(name)
        if model_class is None:
            raise ValueError(
                f"Unknown model: {name}. Available: {registry.list_models()}"
            )
        return model_class(**kwargs)
