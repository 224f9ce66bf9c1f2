"""
In-memory storage for shipping methods and shipments.

The engine only depends on the small interfaces below; an embedding
system backs them with its own persistence.
"""
import logging
from typing import Dict, Iterable, List, Optional

from shipping_engine.core.exceptions import UnknownShippingMethodError
from shipping_engine.models.shipment import Shipment
from shipping_engine.models.shipping_method import ShippingMethod

logger = logging.getLogger(__name__)


class ShippingMethodStorage:
    """Holds configured shipping methods and resolves the ones eligible for a shipment."""

    def __init__(self, methods: Optional[Iterable[ShippingMethod]] = None):
        self._methods: Dict[str, ShippingMethod] = {}
        for method in methods or []:
            self.save(method)

    def save(self, method: ShippingMethod) -> ShippingMethod:
        self._methods[method.id] = method
        return method

    def delete(self, method_id: str) -> None:
        self._methods.pop(method_id, None)

    def load(self, method_id: str) -> ShippingMethod:
        method = self._methods.get(method_id)
        if not method:
            raise UnknownShippingMethodError(method_id)
        return method

    def load_multiple(self) -> List[ShippingMethod]:
        return list(self._methods.values())

    def load_multiple_for_shipment(self, shipment: Shipment) -> List[ShippingMethod]:
        """
        Load the shipping methods available for the given shipment.

        Filters out disabled methods, methods not offered in the shipment's
        store and methods whose conditions fail. Sorted by ascending weight;
        methods with equal weight keep their insertion order.
        """
        methods = []
        for method in self._methods.values():
            if not method.is_enabled():
                continue
            if not method.is_available_in_store(shipment.store_id):
                continue
            if not method.applies(shipment):
                logger.debug(f"Shipping method {method.name} does not apply to shipment {shipment.id}")
                continue
            methods.append(method)

        methods.sort(key=lambda m: m.weight)
        return methods


class ShipmentStorage:
    """Shipments by id. Missing ids resolve to nothing rather than raising."""

    def __init__(self, shipments: Optional[Iterable[Shipment]] = None):
        self._shipments: Dict[str, Shipment] = {}
        for shipment in shipments or []:
            self.save(shipment)

    def save(self, shipment: Shipment) -> Shipment:
        self._shipments[shipment.id] = shipment
        return shipment

    def save_multiple(self, shipments: Iterable[Shipment]) -> None:
        for shipment in shipments:
            self.save(shipment)

    def load(self, shipment_id: str) -> Optional[Shipment]:
        return self._shipments.get(shipment_id)

    def load_multiple(self, shipment_ids: Iterable[str]) -> List[Shipment]:
        """Load the referenced shipments, skipping ids that no longer exist."""
        return [self._shipments[sid] for sid in shipment_ids if sid in self._shipments]

    def delete(self, shipments: Iterable[Shipment]) -> None:
        for shipment in shipments:
            self._shipments.pop(shipment.id, None)

    def __len__(self) -> int:
        return len(self._shipments)
