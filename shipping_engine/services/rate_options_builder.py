"""
Shipping rate options builder

Turns calculated rates into labelled, selectable options and picks the
default one for a shipment.
"""
import logging
from typing import Dict, Optional

from shipping_engine.core.currency import CurrencyFormatter, currency_formatter as default_formatter
from shipping_engine.models.rate import ShippingRateOption, build_rate_id
from shipping_engine.models.shipment import Shipment
from shipping_engine.services.shipment_manager import ShipmentManager

logger = logging.getLogger(__name__)


class ShippingRateOptionsBuilder:

    def __init__(self, shipment_manager: ShipmentManager, currency_formatter: Optional[CurrencyFormatter] = None):
        self.shipment_manager = shipment_manager
        self.currency_formatter = currency_formatter or default_formatter

    def build_options(self, shipment: Shipment) -> Dict[str, ShippingRateOption]:
        """
        Build the rate options for the given shipment.

        Returns:
            Dict of option id -> ShippingRateOption, in rate order.
            Option ids match the rate ids returned by the shipment manager.
        """
        options: Dict[str, ShippingRateOption] = {}
        rates = self.shipment_manager.calculate_rates(shipment)

        for option_id, rate in rates.items():
            amount = rate.amount
            formatted_amount = self.currency_formatter.format(amount.number, amount.currency_code)
            options[option_id] = ShippingRateOption(
                id=option_id,
                label=f"{rate.service.label}: {formatted_amount}",
                shipping_method_id=rate.shipping_method_id,
                shipping_rate=rate,
            )

        return options

    def select_default_option(
        self,
        shipment: Shipment,
        options: Dict[str, ShippingRateOption],
    ) -> ShippingRateOption:
        """
        Select the default option for the given shipment.

        Keeps the shipment's current selection when it is still offered,
        otherwise falls back to the first option. Callers must not pass an
        empty options dict.
        """
        default_option_id = None
        if shipment.shipping_method_id and shipment.shipping_service:
            default_option_id = build_rate_id(shipment.shipping_method_id, shipment.shipping_service)

        # The applied rate is no longer available, or none was selected
        if not default_option_id or default_option_id not in options:
            if default_option_id:
                logger.debug(f"Selected rate {default_option_id} is no longer available for shipment {shipment.id}")
            default_option_id = next(iter(options), None)

        return options[default_option_id]
