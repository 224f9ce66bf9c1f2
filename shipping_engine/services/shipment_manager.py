"""
Shipment Manager

Aggregates rates for a shipment from every eligible shipping method:
- Methods come from method storage, ordered by priority weight
- A failing method is logged and skipped, never aborting the call
- Rate listeners may alter each method's rates before they are merged
- Rates are keyed by "<method id>--<service id>"

Usage:
    manager = ShipmentManager(method_storage)
    rates = manager.calculate_rates(shipment)
"""
import logging
from typing import Dict, List, Optional

from shipping_engine.core.monitoring import MetricsCollector, metrics as default_metrics
from shipping_engine.models.rate import ShippingRate, build_rate_id
from shipping_engine.models.shipment import Shipment
from shipping_engine.services.rate_events import RateEventDispatcher
from shipping_engine.services.storage import ShippingMethodStorage

logger = logging.getLogger(__name__)


class ShipmentManager:
    """
    Service for calculating the shipping rates of a shipment.

    Queries every method that applies to the shipment and returns one
    combined rate mapping.
    """

    def __init__(
        self,
        method_storage: ShippingMethodStorage,
        event_dispatcher: Optional[RateEventDispatcher] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.method_storage = method_storage
        self.event_dispatcher = event_dispatcher or RateEventDispatcher()
        self.metrics = metrics or default_metrics

    def calculate_rates(self, shipment: Shipment) -> Dict[str, ShippingRate]:
        """
        Calculate rates for the given shipment.

        Args:
            shipment: The shipment to quote

        Returns:
            Dict of rate id -> ShippingRate, in method priority order
        """
        all_rates: Dict[str, ShippingRate] = {}
        shipping_methods = self.method_storage.load_multiple_for_shipment(shipment)

        if not shipping_methods:
            logger.info(f"No shipping methods available for shipment {shipment.id}")

        for shipping_method in shipping_methods:
            try:
                rates: List[ShippingRate] = shipping_method.plugin.calculate_rates(shipment)
            except Exception as e:
                logger.error(
                    f"Exception occurred when calculating rates for {shipping_method.name}: {e}"
                )
                self.metrics.increment(
                    "shipping.rates.method_failure",
                    labels={"method": shipping_method.id},
                )
                continue

            # Allow the rates to be altered via code
            rates = self.event_dispatcher.dispatch_rates_computed(rates, shipping_method, shipment)

            for rate in rates:
                rate_id = build_rate_id(shipping_method.id, rate.service.id)
                all_rates[rate_id] = rate

            logger.debug(f"Got {len(rates)} rates from {shipping_method.name}")

        self.metrics.increment("shipping.rates.calculated")
        self.metrics.observe("shipping.rates.per_shipment", len(all_rates))
        logger.info(f"Calculated {len(all_rates)} rates for shipment {shipment.id}")

        return all_rates
