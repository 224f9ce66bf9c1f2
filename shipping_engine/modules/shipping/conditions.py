"""
Shipping method conditions

A ShippingMethod only applies to a shipment when its conditions pass,
combined with AND (all) or OR (any).
"""
import operator
from abc import ABC, abstractmethod
from typing import Iterable, List

from shipping_engine.models.shipment import Shipment
from shipping_engine.models.weight import Weight

CONDITION_OPERATORS = ("AND", "OR")

_COMPARISONS = {
    "<": operator.lt,
    "<=": operator.le,
    ">=": operator.ge,
    ">": operator.gt,
    "==": operator.eq,
}


class Condition(ABC):
    """Base class for shipment conditions."""

    @abstractmethod
    def evaluate(self, shipment: Shipment) -> bool:
        pass


class ShipmentWeightCondition(Condition):
    """Compares the total shipment weight against a limit."""

    def __init__(self, operator: str, weight: Weight):
        if operator not in _COMPARISONS:
            raise ValueError(f"Invalid comparison operator: {operator}")
        self.operator = operator
        self.weight = weight

    def evaluate(self, shipment: Shipment) -> bool:
        shipment_weight = shipment.get_weight(self.weight.unit)
        return _COMPARISONS[self.operator](shipment_weight.compare_to(self.weight), 0)


class ShippingAddressCondition(Condition):
    """Passes when the shipping profile's country is in the allowed list."""

    def __init__(self, country_codes: Iterable[str]):
        self.country_codes: List[str] = [code.upper() for code in country_codes]

    def evaluate(self, shipment: Shipment) -> bool:
        profile = shipment.shipping_profile
        if not profile or not profile.country_code:
            return False
        return profile.country_code.upper() in self.country_codes


def evaluate_conditions(conditions: List[Condition], shipment: Shipment, condition_operator: str = "AND") -> bool:
    if not conditions:
        return True
    if condition_operator == "OR":
        return any(condition.evaluate(shipment) for condition in conditions)
    return all(condition.evaluate(shipment) for condition in conditions)
