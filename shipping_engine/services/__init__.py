# Services layer for rate calculation, selection and order processing
from shipping_engine.services.rate_events import RateEventDispatcher
from shipping_engine.services.storage import ShipmentStorage, ShippingMethodStorage
from shipping_engine.services.shipment_manager import ShipmentManager
from shipping_engine.services.rate_options_builder import ShippingRateOptionsBuilder
from shipping_engine.services.rate_selection import RateSelection, RateSelector
from shipping_engine.services.shipping_order_manager import DefaultPacker, Packer, ShippingOrderManager
from shipping_engine.services.order_processor import ShipmentOrderProcessor, should_repack
from shipping_engine.services.promotions import ShipmentPercentageOff

__all__ = [
    "RateEventDispatcher",
    "ShipmentStorage",
    "ShippingMethodStorage",
    "ShipmentManager",
    "ShippingRateOptionsBuilder",
    "RateSelection",
    "RateSelector",
    "DefaultPacker",
    "Packer",
    "ShippingOrderManager",
    "ShipmentOrderProcessor",
    "should_repack",
    "ShipmentPercentageOff",
]
