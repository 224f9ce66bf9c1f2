"""
Pytest configuration and fixtures for shipping engine tests.
"""
import os
from decimal import Decimal
from typing import List

import pytest

# Set test environment before importing engine modules
os.environ["ENVIRONMENT"] = "development"

from shipping_engine.core.monitoring import MetricsCollector
from shipping_engine.models import (
    Price,
    Shipment,
    ShipmentItem,
    ShippingMethod,
    ShippingRate,
    Weight,
)
from shipping_engine.modules.shipping import BaseShippingMethod, create_method, register_method
from shipping_engine.services import (
    RateEventDispatcher,
    ShipmentManager,
    ShipmentStorage,
    ShippingMethodStorage,
    ShippingRateOptionsBuilder,
)

STORE_ID = "1"


@register_method("exception_thrower")
class ExceptionThrower(BaseShippingMethod):
    """Test plugin that always fails."""

    def calculate_rates(self, shipment: Shipment) -> List[ShippingRate]:
        raise RuntimeError("Carrier API is down")


def alter_rate_listener(rates, method, shipment):
    """Doubles every rate when the shipment asks for it."""
    if not shipment.get_data("alter_rate"):
        return None
    return [rate.with_amount(rate.amount.multiply("2")) for rate in rates]


def make_flat_rate_method(
    method_id: str,
    name: str,
    amount: str,
    weight: int = 0,
    currency_code: str = "USD",
    plugin_id: str = "flat_rate",
    **kwargs,
) -> ShippingMethod:
    plugin = create_method(
        plugin_id,
        {
            "rate_label": "Flat rate",
            "rate_amount": {"number": amount, "currency_code": currency_code},
        },
    )
    return ShippingMethod(
        id=method_id,
        name=name,
        plugin=plugin,
        stores=kwargs.pop("stores", [STORE_ID]),
        weight=weight,
        **kwargs,
    )


@pytest.fixture
def metrics() -> MetricsCollector:
    """Fresh metrics collector per test."""
    return MetricsCollector()


@pytest.fixture
def method_storage() -> ShippingMethodStorage:
    """
    Storage with three methods: a failing one and two flat rates.

    "another" (weight 0) is queried before "example" (weight 1).
    """
    return ShippingMethodStorage([
        make_flat_rate_method("example", "Example", "5", weight=1),
        ShippingMethod(
            id="bad",
            name="Broken carrier",
            plugin=create_method("exception_thrower"),
            stores=[STORE_ID],
        ),
        make_flat_rate_method("another", "Another shipping method", "20", weight=0),
    ])


@pytest.fixture
def event_dispatcher() -> RateEventDispatcher:
    return RateEventDispatcher([alter_rate_listener])


@pytest.fixture
def shipment_manager(method_storage, event_dispatcher, metrics) -> ShipmentManager:
    return ShipmentManager(method_storage, event_dispatcher, metrics)


@pytest.fixture
def options_builder(shipment_manager) -> ShippingRateOptionsBuilder:
    return ShippingRateOptionsBuilder(shipment_manager)


@pytest.fixture
def shipment() -> Shipment:
    """Sample rated shipment."""
    return Shipment(
        id="1",
        title="Shipment",
        order_id="6",
        store_id=STORE_ID,
        items=[
            ShipmentItem(
                order_item_id="1",
                title="T-shirt (red, large)",
                quantity=Decimal("2"),
                weight=Weight("40", "kg"),
                declared_value=Price("30", "USD"),
            ),
        ],
        amount=Price("5", "USD"),
    )


@pytest.fixture
def shipment_storage() -> ShipmentStorage:
    return ShipmentStorage()


@pytest.fixture
def make_method():
    """Factory for flat rate shipping methods offered in the test store."""
    return make_flat_rate_method
