"""
Shipment entity

Shipments are owned by the embedding system. The engine reads their
contents and mutates only the selection fields (method, service, amount,
package type), the adjustment list and the data bag.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from shipping_engine.models.adjustment import Adjustment
from shipping_engine.models.price import Price
from shipping_engine.models.weight import Weight

# Data bag key marking shipments created by the packing process
OWNED_BY_PACKER = "owned_by_packer"


@dataclass(frozen=True)
class PackageType:
    """Package the shipment is sent in."""
    id: str
    label: str
    weight: Weight = field(default_factory=lambda: Weight(Decimal("0"), "g"))


@dataclass
class ShippingProfile:
    """Destination the order is shipped to."""
    id: str
    country_code: str
    postal_code: Optional[str] = None
    administrative_area: Optional[str] = None
    locality: Optional[str] = None


@dataclass(frozen=True)
class ShipmentItem:
    order_item_id: str
    title: str
    quantity: Decimal
    weight: Weight
    declared_value: Optional[Price] = None


@dataclass
class Shipment:
    id: str
    title: str
    order_id: Optional[str] = None
    store_id: Optional[str] = None
    items: List[ShipmentItem] = field(default_factory=list)
    package_type: Optional[PackageType] = None
    shipping_profile: Optional[ShippingProfile] = None
    shipping_method_id: Optional[str] = None
    shipping_service: Optional[str] = None
    amount: Optional[Price] = None
    adjustments: List[Adjustment] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set_data(self, key: str, value: Any) -> None:
        self.data[key] = value

    def get_total_quantity(self) -> Decimal:
        return sum((Decimal(str(item.quantity)) for item in self.items), Decimal("0"))

    def get_weight(self, unit: str = "g") -> Weight:
        """Total weight of the items plus the package, in the given unit."""
        total = Weight(Decimal("0"), unit)
        for item in self.items:
            total = total.add(item.weight)
        if self.package_type:
            total = total.add(self.package_type.weight)
        return total

    def get_total_declared_value(self) -> Optional[Price]:
        total = None
        for item in self.items:
            if item.declared_value is None:
                continue
            total = item.declared_value if total is None else total.add(item.declared_value)
        return total

    def add_adjustment(self, adjustment: Adjustment) -> None:
        self.adjustments.append(adjustment)

    def get_adjusted_amount(self) -> Optional[Price]:
        """Shipment amount with its own adjustments (promotions) applied."""
        if self.amount is None:
            return None
        adjusted = self.amount
        for adjustment in self.adjustments:
            adjusted = adjusted.add(adjustment.amount)
        return adjusted
