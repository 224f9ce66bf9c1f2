"""
Order entity

The order references its shipments by id; the shipments themselves live
in shipment storage. OrderSnapshot captures the fields the repack decision
compares between two states of the same order.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from shipping_engine.models.adjustment import Adjustment
from shipping_engine.models.price import Price
from shipping_engine.models.weight import Weight


@dataclass(frozen=True)
class OrderSnapshot:
    """Order state as seen by one refresh."""
    checkout_step: Optional[str]
    order_item_ids: Tuple[str, ...]


@dataclass
class OrderItem:
    id: str
    title: str
    quantity: Decimal
    unit_price: Price
    weight: Optional[Weight] = None
    shippable: bool = True

    def get_total_price(self) -> Price:
        return self.unit_price.multiply(self.quantity)


@dataclass
class Order:
    id: str
    store_id: Optional[str] = None
    order_items: List[OrderItem] = field(default_factory=list)
    shipment_ids: List[str] = field(default_factory=list)
    checkout_step: Optional[str] = None
    adjustments: List[Adjustment] = field(default_factory=list)

    def has_shipments(self) -> bool:
        return bool(self.shipment_ids)

    def add_item(self, order_item: OrderItem) -> None:
        if not self.has_item(order_item):
            self.order_items.append(order_item)

    def remove_item(self, order_item: OrderItem) -> None:
        self.order_items = [item for item in self.order_items if item.id != order_item.id]

    def has_item(self, order_item: OrderItem) -> bool:
        return any(item.id == order_item.id for item in self.order_items)

    def get_order_item_ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self.order_items)

    def add_adjustment(self, adjustment: Adjustment) -> None:
        self.adjustments.append(adjustment)

    def get_adjustments(self, adjustment_types: Optional[Sequence[str]] = None) -> List[Adjustment]:
        if not adjustment_types:
            return list(self.adjustments)
        return [a for a in self.adjustments if a.type in adjustment_types]

    def clear_adjustments(self, adjustment_types: Optional[Sequence[str]] = None) -> None:
        if not adjustment_types:
            self.adjustments = []
            return
        self.adjustments = [a for a in self.adjustments if a.type not in adjustment_types]

    def get_subtotal_price(self) -> Optional[Price]:
        subtotal = None
        for item in self.order_items:
            total = item.get_total_price()
            subtotal = total if subtotal is None else subtotal.add(total)
        return subtotal

    def snapshot(self) -> OrderSnapshot:
        return OrderSnapshot(
            checkout_step=self.checkout_step,
            order_item_ids=self.get_order_item_ids(),
        )
