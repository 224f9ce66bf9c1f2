"""
ShippingMethod configuration entity

A configured carrier/strategy: which plugin computes its rates, which
stores it is offered in, whether it is enabled, its priority weight
(lower weight is queried first) and the conditions a shipment must meet.
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from shipping_engine.models.shipment import Shipment

if TYPE_CHECKING:
    from shipping_engine.modules.shipping.conditions import Condition
    from shipping_engine.modules.shipping.methods.base import BaseShippingMethod


@dataclass
class ShippingMethod:
    id: str
    name: str
    plugin: "BaseShippingMethod"
    stores: List[str] = field(default_factory=list)  # empty = every store
    status: bool = True
    weight: int = 0
    conditions: List["Condition"] = field(default_factory=list)
    condition_operator: str = "AND"

    def __post_init__(self):
        from shipping_engine.modules.shipping.conditions import CONDITION_OPERATORS

        self.condition_operator = self.condition_operator.upper()
        if self.condition_operator not in CONDITION_OPERATORS:
            raise ValueError(f"Invalid condition operator: {self.condition_operator}")
        if self.plugin.parent_method_id is None:
            self.plugin.parent_method_id = self.id

    def is_enabled(self) -> bool:
        return self.status

    def is_available_in_store(self, store_id) -> bool:
        return not self.stores or store_id in self.stores

    def applies(self, shipment: Shipment) -> bool:
        from shipping_engine.modules.shipping.conditions import evaluate_conditions

        return evaluate_conditions(self.conditions, shipment, self.condition_operator)
