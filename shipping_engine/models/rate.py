"""
Rate value objects

A ShippingRate is one priced quote from one method/service pair for one
shipment. A ShippingRateOption wraps a rate with a display label so it can
be offered for selection. Both are rebuilt on every rate calculation and
never persisted.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional

from shipping_engine.core.exceptions import InvalidPropertyTypeError, MissingPropertyError
from shipping_engine.models.price import Price

RATE_ID_SEPARATOR = "--"


def build_rate_id(shipping_method_id: str, service_id: str) -> str:
    """Composite key used to identify a rate across methods."""
    return f"{shipping_method_id}{RATE_ID_SEPARATOR}{service_id}"


@dataclass(frozen=True)
class ShippingService:
    """A named tier offered by a shipping method (e.g. standard, express)."""
    id: str
    label: str


@dataclass(frozen=True)
class ShippingRate:
    """Shipping rate quote."""
    shipping_method_id: Optional[str] = None
    service: Optional[ShippingService] = None
    amount: Optional[Price] = None
    id: Optional[str] = None
    delivery_date: Optional[datetime] = None
    delivery_terms: Optional[str] = None  # e.g. "Delivery in 1 to 3 business days."

    def __post_init__(self):
        for required_property in ("shipping_method_id", "service", "amount"):
            if not getattr(self, required_property):
                raise MissingPropertyError(required_property)
        if not isinstance(self.service, ShippingService):
            raise InvalidPropertyTypeError("service", ShippingService)
        if not isinstance(self.amount, Price):
            raise InvalidPropertyTypeError("amount", Price)
        # Most methods return one rate per service, so the id is optional
        if not self.id:
            object.__setattr__(self, "id", build_rate_id(self.shipping_method_id, self.service.id))

    def with_amount(self, amount: Price) -> "ShippingRate":
        return replace(self, amount=amount)

    def with_delivery_date(self, delivery_date: datetime) -> "ShippingRate":
        return replace(self, delivery_date=delivery_date)

    def with_delivery_terms(self, delivery_terms: str) -> "ShippingRate":
        return replace(self, delivery_terms=delivery_terms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "shipping_method_id": self.shipping_method_id,
            "service": self.service,
            "amount": self.amount,
            "delivery_date": self.delivery_date,
            "delivery_terms": self.delivery_terms,
        }


@dataclass(frozen=True)
class ShippingRateOption:
    """A rate prepared for presentation, keyed by its rate id."""
    id: Optional[str] = None
    label: Optional[str] = None
    shipping_method_id: Optional[str] = None
    shipping_rate: Optional[ShippingRate] = field(default=None, repr=False)

    def __post_init__(self):
        for required_property in ("id", "label", "shipping_method_id", "shipping_rate"):
            if not getattr(self, required_property):
                raise MissingPropertyError(
                    required_property,
                    f'Missing required property "{required_property}".',
                )
