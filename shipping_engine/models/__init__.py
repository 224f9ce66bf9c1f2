from shipping_engine.models.price import Price
from shipping_engine.models.weight import Weight
from shipping_engine.models.adjustment import Adjustment
from shipping_engine.models.rate import (
    ShippingService,
    ShippingRate,
    ShippingRateOption,
    build_rate_id,
)
from shipping_engine.models.shipment import (
    OWNED_BY_PACKER,
    PackageType,
    Shipment,
    ShipmentItem,
    ShippingProfile,
)
from shipping_engine.models.order import Order, OrderItem, OrderSnapshot
from shipping_engine.models.shipping_method import ShippingMethod

__all__ = [
    "Price",
    "Weight",
    "Adjustment",
    "ShippingService",
    "ShippingRate",
    "ShippingRateOption",
    "build_rate_id",
    "OWNED_BY_PACKER",
    "PackageType",
    "Shipment",
    "ShipmentItem",
    "ShippingProfile",
    "Order",
    "OrderItem",
    "OrderSnapshot",
    "ShippingMethod",
]
