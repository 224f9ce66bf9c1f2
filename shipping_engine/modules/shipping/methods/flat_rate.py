"""
Flat rate shipping methods

flat_rate          - one fixed amount per shipment
flat_rate_per_item - the fixed amount times the number of items shipped

Configuration:
    {
        "rate_label": "Flat rate",
        "rate_description": "Delivery in 3 to 5 business days.",   # optional
        "rate_amount": {"number": "5.00", "currency_code": "USD"},
    }
"""
import logging
from typing import Any, Dict, List

from shipping_engine.models.rate import ShippingRate, ShippingService
from shipping_engine.models.shipment import Shipment
from shipping_engine.modules.shipping.methods import register_method
from shipping_engine.modules.shipping.methods.base import BaseShippingMethod

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_ID = "default"


@register_method("flat_rate")
class FlatRate(BaseShippingMethod):
    """Charges the configured amount for every shipment."""

    label = "Flat rate"

    def default_configuration(self) -> Dict[str, Any]:
        return {
            **super().default_configuration(),
            "rate_label": "",
            "rate_description": None,
            "rate_amount": None,
        }

    def build_services(self) -> Dict[str, ShippingService]:
        # The rate label doubles as the single service label
        label = self.configuration.get("rate_label") or self.label
        return {DEFAULT_SERVICE_ID: ShippingService(DEFAULT_SERVICE_ID, label)}

    def calculate_rates(self, shipment: Shipment) -> List[ShippingRate]:
        amount = self.get_config_price("rate_amount")
        return [
            ShippingRate(
                shipping_method_id=self.parent_method_id,
                service=self.services[DEFAULT_SERVICE_ID],
                amount=amount,
                delivery_terms=self.configuration.get("rate_description"),
            )
        ]


@register_method("flat_rate_per_item")
class FlatRatePerItem(FlatRate):
    """Charges the configured amount once per shipped item."""

    label = "Flat rate per item"

    def calculate_rates(self, shipment: Shipment) -> List[ShippingRate]:
        quantity = shipment.get_total_quantity()
        amount = self.get_config_price("rate_amount").multiply(quantity)
        logger.debug(f"Flat rate per item: {quantity} items -> {amount}")
        return [
            ShippingRate(
                shipping_method_id=self.parent_method_id,
                service=self.services[DEFAULT_SERVICE_ID],
                amount=amount,
                delivery_terms=self.configuration.get("rate_description"),
            )
        ]
