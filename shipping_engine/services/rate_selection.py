"""
Rate selection

Offers a shipment's rate options and applies the customer's choice back to
the shipment through the owning method's select_rate().
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from shipping_engine.core.config import settings
from shipping_engine.core.exceptions import InvalidRateSelectionError
from shipping_engine.models.rate import ShippingRateOption
from shipping_engine.models.shipment import Shipment
from shipping_engine.services.rate_options_builder import ShippingRateOptionsBuilder
from shipping_engine.services.storage import ShippingMethodStorage

logger = logging.getLogger(__name__)


@dataclass
class RateSelection:
    """Options offered for one shipment."""
    options: Dict[str, ShippingRateOption] = field(default_factory=dict)
    default_option_id: Optional[str] = None
    message: Optional[str] = None  # shown instead of the options when there are none

    @property
    def has_options(self) -> bool:
        return bool(self.options)

    @property
    def labels(self) -> Dict[str, str]:
        return {option_id: option.label for option_id, option in self.options.items()}


class RateSelector:

    def __init__(self, options_builder: ShippingRateOptionsBuilder, method_storage: ShippingMethodStorage):
        self.options_builder = options_builder
        self.method_storage = method_storage

    def get_selection(self, shipment: Shipment) -> RateSelection:
        options = self.options_builder.build_options(shipment)
        if not options:
            logger.info(f"No shipping rates available for shipment {shipment.id}")
            return RateSelection(message=settings.SHIPPING_NO_RATES_MESSAGE)

        default_option = self.options_builder.select_default_option(shipment, options)
        return RateSelection(options=options, default_option_id=default_option.id)

    def select(self, shipment: Shipment, option_id: Optional[str], options: Dict[str, ShippingRateOption]) -> ShippingRateOption:
        """
        Apply the chosen option to the shipment.

        Raises:
            InvalidRateSelectionError if option_id is empty or not offered
            UnknownShippingMethodError if the option's method no longer exists;
            the shipment is left unchanged
        """
        option = options.get(option_id) if option_id else None
        if option is None:
            raise InvalidRateSelectionError(settings.SHIPPING_SELECTION_REQUIRED_MESSAGE, option_id)

        # Resolve the method before touching the shipment
        shipping_method = self.method_storage.load(option.shipping_method_id)
        plugin = shipping_method.plugin
        shipment.shipping_method_id = option.shipping_method_id
        if not shipment.package_type:
            shipment.package_type = plugin.get_default_package_type()
        plugin.select_rate(shipment, option.shipping_rate)

        logger.info(f"Shipment {shipment.id}: selected {option.id} ({option.label})")
        return option
