"""
Rate mutation hooks

After a method computes its rates the shipment manager passes them through
every registered listener, in registration order. A listener receives
(rates, method, shipment) and returns the list to continue with; returning
None keeps the current list.

Usage:
    dispatcher = RateEventDispatcher()

    @dispatcher.listener
    def add_handling_fee(rates, method, shipment):
        fee = Price("1.00", "USD")
        return [rate.with_amount(rate.amount.add(fee)) for rate in rates]
"""
import logging
from typing import Callable, Iterable, List, Optional

from shipping_engine.models.rate import ShippingRate
from shipping_engine.models.shipment import Shipment
from shipping_engine.models.shipping_method import ShippingMethod

logger = logging.getLogger(__name__)

RatesListener = Callable[[List[ShippingRate], ShippingMethod, Shipment], Optional[List[ShippingRate]]]


class RateEventDispatcher:
    """Ordered, synchronous list of rate listeners."""

    def __init__(self, listeners: Optional[Iterable[RatesListener]] = None):
        self._listeners: List[RatesListener] = list(listeners or [])

    def add_listener(self, listener: RatesListener) -> None:
        self._listeners.append(listener)

    def listener(self, func: RatesListener) -> RatesListener:
        """Decorator form of add_listener()."""
        self.add_listener(func)
        return func

    def remove_listener(self, listener: RatesListener) -> None:
        self._listeners.remove(listener)

    @property
    def listeners(self) -> List[RatesListener]:
        return list(self._listeners)

    def dispatch_rates_computed(
        self,
        rates: List[ShippingRate],
        method: ShippingMethod,
        shipment: Shipment,
    ) -> List[ShippingRate]:
        """Run the listeners over the rates; the last returned list wins."""
        rates = list(rates)
        for listener in self._listeners:
            result = listener(rates, method, shipment)
            if result is not None:
                rates = list(result)
        return rates
