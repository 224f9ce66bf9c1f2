"""
Shipping Method Registry and Factory

- register_method maps a plugin id to a BaseShippingMethod subclass
- ShippingMethodFactory creates configured plugin instances by plugin id
- Plugins are chosen at configuration time; no dynamic class loading
"""
from typing import Any, Dict, List, Optional, Type
import logging

from shipping_engine.core.exceptions import UnknownShippingMethodError
from shipping_engine.modules.shipping.methods.base import BaseShippingMethod

logger = logging.getLogger(__name__)

# Registry of shipping method plugin implementations
_METHOD_REGISTRY: Dict[str, Type[BaseShippingMethod]] = {}


def register_method(plugin_id: str):
    """
    Decorator to register a shipping method plugin.

    Usage:
        @register_method("flat_rate")
        class FlatRate(BaseShippingMethod):
            ...
    """
    def decorator(cls: Type[BaseShippingMethod]):
        cls.plugin_id = plugin_id
        _METHOD_REGISTRY[plugin_id] = cls
        logger.debug(f"Registered shipping method plugin: {plugin_id} -> {cls.__name__}")
        return cls
    return decorator


class ShippingMethodFactory:
    """Factory for creating shipping method plugin instances."""

    @classmethod
    def create(
        cls,
        plugin_id: str,
        configuration: Optional[Dict[str, Any]] = None,
        parent_method_id: Optional[str] = None,
    ) -> BaseShippingMethod:
        """
        Create a plugin instance.

        Raises:
            UnknownShippingMethodError if no plugin is registered under plugin_id
        """
        plugin_cls = _METHOD_REGISTRY.get(plugin_id)
        if not plugin_cls:
            raise UnknownShippingMethodError(plugin_id, kind="shipping method plugin")
        return plugin_cls(configuration, parent_method_id)

    @classmethod
    def get_registered_methods(cls) -> List[str]:
        """Get list of all registered plugin ids."""
        return list(_METHOD_REGISTRY.keys())


def create_method(
    plugin_id: str,
    configuration: Optional[Dict[str, Any]] = None,
    parent_method_id: Optional[str] = None,
) -> BaseShippingMethod:
    """Equivalent to ShippingMethodFactory.create()."""
    return ShippingMethodFactory.create(plugin_id, configuration, parent_method_id)


# Import plugins to trigger registration
# These imports must be at the bottom to avoid circular imports
from shipping_engine.modules.shipping.methods.flat_rate import FlatRate, FlatRatePerItem  # noqa: E402, F401
