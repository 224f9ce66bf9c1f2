"""Price adjustment applied to an order or a shipment."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from shipping_engine.core.exceptions import InvalidPropertyTypeError, MissingPropertyError
from shipping_engine.models.price import Price


@dataclass(frozen=True)
class Adjustment:
    type: str  # shipping, shipping_promotion, ...
    label: str
    amount: Price
    source_id: Optional[str] = None
    percentage: Optional[Decimal] = None

    def __post_init__(self):
        for required_property in ("type", "label", "amount"):
            if not getattr(self, required_property):
                raise MissingPropertyError(required_property)
        if not isinstance(self.amount, Price):
            raise InvalidPropertyTypeError("amount", Price)

    def is_positive(self) -> bool:
        return self.amount.number > 0

    def is_negative(self) -> bool:
        return self.amount.is_negative()
