"""
Shipment order processor

Runs on every order refresh:
- Repacks the order's shipments when its items may have changed
- Adds one "shipping" adjustment per rated shipment

The repack decision compares the previous and current OrderSnapshot, which
the caller passes in explicitly.
"""
import logging
from typing import List, Optional, Sequence

from shipping_engine.core.config import settings
from shipping_engine.models.adjustment import Adjustment
from shipping_engine.models.order import Order, OrderSnapshot
from shipping_engine.models.shipment import OWNED_BY_PACKER, Shipment
from shipping_engine.services.shipping_order_manager import ShippingOrderManager
from shipping_engine.services.storage import ShipmentStorage

logger = logging.getLogger(__name__)

SHIPPING_ADJUSTMENT_TYPE = "shipping"


def should_repack(
    shipments: Sequence[Shipment],
    previous: Optional[OrderSnapshot],
    current: OrderSnapshot,
) -> bool:
    """
    Determine whether the order's shipments should be repacked.

    Shipments created outside of the packing process (edited by hand, for
    example) are never repacked. Order item quantity changes can't be seen
    here, so every refresh repacks, except for a checkout step change with
    the same order items.
    """
    for shipment in shipments:
        if not shipment.get_data(OWNED_BY_PACKER):
            return False

    if previous is not None and previous.checkout_step and current.checkout_step:
        if (
            previous.checkout_step != current.checkout_step
            and list(previous.order_item_ids) == list(current.order_item_ids)
        ):
            return False

    return True


class ShipmentOrderProcessor:
    """Processes the order's shipments."""

    def __init__(self, order_manager: ShippingOrderManager, shipment_storage: ShipmentStorage):
        self.order_manager = order_manager
        self.shipment_storage = shipment_storage

    def process(self, order: Order, previous: Optional[OrderSnapshot] = None) -> None:
        """
        Process the order.

        Args:
            order: The order being refreshed
            previous: Snapshot of the order before this refresh, if known
        """
        if not order.has_shipments():
            return

        shipments = self.shipment_storage.load_multiple(order.shipment_ids)
        if not shipments:
            # The order can reference shipments that no longer exist
            logger.warning(f"Order {order.id} references missing shipments: {order.shipment_ids}")
            return

        if should_repack(shipments, previous, order.snapshot()):
            shipping_profile = self.order_manager.get_profile(order)
            # If the shipping profile does not exist, delete all shipments
            if not shipping_profile:
                logger.warning(f"Order {order.id} has no shipping profile, deleting {len(shipments)} shipments")
                self.shipment_storage.delete(shipments)
                order.shipment_ids = []
                order.clear_adjustments([SHIPPING_ADJUSTMENT_TYPE])
                return
            shipments = self._repack(order, shipments, shipping_profile)

        self._add_adjustments(order, shipments)

    def _repack(self, order: Order, old_shipments: List[Shipment], shipping_profile) -> List[Shipment]:
        shipments = self.order_manager.pack(order, shipping_profile, old_shipments)
        self.shipment_storage.save_multiple(shipments)

        new_ids = {shipment.id for shipment in shipments}
        stale = [shipment for shipment in old_shipments if shipment.id not in new_ids]
        self.shipment_storage.delete(stale)

        order.shipment_ids = [shipment.id for shipment in shipments]
        logger.info(f"Repacked order {order.id}: {len(old_shipments)} -> {len(shipments)} shipments")
        return shipments

    def _add_adjustments(self, order: Order, shipments: List[Shipment]) -> None:
        order.clear_adjustments([SHIPPING_ADJUSTMENT_TYPE])
        single_shipment = len(shipments) == 1
        for shipment in shipments:
            # Shipments without an amount are incomplete / unrated
            if shipment.amount is None:
                continue
            order.add_adjustment(Adjustment(
                type=SHIPPING_ADJUSTMENT_TYPE,
                label=settings.SHIPPING_ADJUSTMENT_LABEL if single_shipment else shipment.title,
                amount=shipment.amount,
                source_id=shipment.id,
            ))
