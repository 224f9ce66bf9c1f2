"""
Shipping order manager

Resolves the order's shipping profile and packs its items into shipments.
Packers are tried in order; the first one that applies to the order wins.
DefaultPacker applies to everything and puts all shippable items into a
single shipment. Packing fills in the order's existing shipments first,
keeping their selected rate.
"""
import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Callable, Iterable, List, Optional
from uuid import uuid4

from shipping_engine.models.order import Order, OrderItem
from shipping_engine.models.shipment import (
    OWNED_BY_PACKER,
    Shipment,
    ShipmentItem,
    ShippingProfile,
)
from shipping_engine.models.weight import Weight

logger = logging.getLogger(__name__)

ProfileResolver = Callable[[Order], Optional[ShippingProfile]]


def build_shipment_item(order_item: OrderItem) -> ShipmentItem:
    quantity = Decimal(str(order_item.quantity))
    unit_weight = order_item.weight or Weight(Decimal("0"), "g")
    return ShipmentItem(
        order_item_id=order_item.id,
        title=order_item.title,
        quantity=quantity,
        weight=unit_weight.multiply(quantity),
        declared_value=order_item.get_total_price(),
    )


class Packer(ABC):
    """Splits an order's items into shipments."""

    @abstractmethod
    def applies(self, order: Order, profile: ShippingProfile) -> bool:
        pass

    @abstractmethod
    def pack(self, order: Order, profile: ShippingProfile) -> List[List[OrderItem]]:
        """Group the order items; one group per shipment."""
        pass


class DefaultPacker(Packer):
    """Puts every shippable order item into one shipment."""

    def applies(self, order: Order, profile: ShippingProfile) -> bool:
        return True

    def pack(self, order: Order, profile: ShippingProfile) -> List[List[OrderItem]]:
        items = [item for item in order.order_items if item.shippable]
        return [items] if items else []


class ShippingOrderManager:

    def __init__(self, packers: Optional[Iterable[Packer]] = None, profile_resolver: Optional[ProfileResolver] = None):
        self.packers: List[Packer] = list(packers or []) or [DefaultPacker()]
        self.profile_resolver = profile_resolver

    def get_profile(self, order: Order) -> Optional[ShippingProfile]:
        if not self.profile_resolver:
            return None
        return self.profile_resolver(order)

    def pack(
        self,
        order: Order,
        profile: ShippingProfile,
        shipments: Optional[List[Shipment]] = None,
    ) -> List[Shipment]:
        """
        Pack the order into populated shipments.

        Existing shipments are reused by position: they keep their id and
        their selected method, service, amount and package type, and only
        get new items and profile. Extra groups get new shipments. Surplus
        existing shipments are not returned; the caller deletes them.
        """
        existing = list(shipments or [])
        for packer in self.packers:
            if not packer.applies(order, profile):
                continue
            groups = packer.pack(order, profile)
            logger.debug(f"{packer.__class__.__name__} packed order {order.id} into {len(groups)} shipments")
            packed = []
            for index, group in enumerate(groups, start=1):
                if index <= len(existing):
                    packed.append(self._populate_shipment(existing[index - 1], order, profile, group, index))
                else:
                    packed.append(self._build_shipment(order, profile, group, index))
            return packed

        logger.warning(f"No packer applies to order {order.id}")
        return []

    def _populate_shipment(
        self,
        shipment: Shipment,
        order: Order,
        profile: ShippingProfile,
        items: List[OrderItem],
        index: int,
    ) -> Shipment:
        shipment.title = f"Shipment #{index}"
        shipment.order_id = order.id
        shipment.store_id = order.store_id
        shipment.items = [build_shipment_item(item) for item in items]
        shipment.shipping_profile = profile
        shipment.set_data(OWNED_BY_PACKER, True)
        return shipment

    def _build_shipment(self, order: Order, profile: ShippingProfile, items: List[OrderItem], index: int) -> Shipment:
        return Shipment(
            id=f"{order.id}-{uuid4().hex[:12]}",
            title=f"Shipment #{index}",
            order_id=order.id,
            store_id=order.store_id,
            items=[build_shipment_item(item) for item in items],
            shipping_profile=profile,
            data={OWNED_BY_PACKER: True},
        )
