"""
Shipping Module

- BaseShippingMethod interface for all method plugins
- ShippingMethodFactory / register_method plugin registry
- Conditions deciding which methods apply to a shipment
"""
from shipping_engine.modules.shipping.methods import (
    ShippingMethodFactory,
    create_method,
    register_method,
)
from shipping_engine.modules.shipping.methods.base import BaseShippingMethod

__all__ = [
    "ShippingMethodFactory",
    "create_method",
    "register_method",
    "BaseShippingMethod",
]
