"""
Tests for ShipmentOrderProcessor: packing, repacking and shipping adjustments.
"""
import logging
from decimal import Decimal

import pytest

from shipping_engine.models import (
    OWNED_BY_PACKER,
    Adjustment,
    Order,
    OrderItem,
    OrderSnapshot,
    Price,
    Shipment,
    ShippingProfile,
    Weight,
)
from shipping_engine.services import (
    DefaultPacker,
    Packer,
    ShipmentOrderProcessor,
    RateSelector,
    ShippingOrderManager,
)
from shipping_engine.services.order_processor import SHIPPING_ADJUSTMENT_TYPE


class PerItemPacker(Packer):
    """Ships every order item separately."""

    def applies(self, order, profile):
        return len(order.order_items) > 1

    def pack(self, order, profile):
        return [[item] for item in order.order_items if item.shippable]


def make_item(item_id, title="T-shirt", quantity="1", price="30.00"):
    return OrderItem(
        id=item_id,
        title=title,
        quantity=Decimal(quantity),
        unit_price=Price(price, "USD"),
        weight=Weight("500", "g"),
    )


@pytest.fixture
def profiles():
    """Shipping profiles by order id."""
    return {"6": ShippingProfile(id="p1", country_code="US", postal_code="94043")}


@pytest.fixture
def order_manager(profiles):
    return ShippingOrderManager(profile_resolver=lambda order: profiles.get(order.id))


@pytest.fixture
def processor(order_manager, shipment_storage):
    return ShipmentOrderProcessor(order_manager, shipment_storage)


@pytest.fixture
def order(order_manager, shipment_storage, profiles):
    """Order with one packed and rated shipment."""
    order = Order(id="6", store_id="1", checkout_step="order_information")
    order.add_item(make_item("1", "T-shirt (red, large)"))

    shipments = order_manager.pack(order, profiles["6"])
    shipments[0].amount = Price("5.00", "USD")
    shipment_storage.save_multiple(shipments)
    order.shipment_ids = [s.id for s in shipments]
    return order


def manual_shipment(shipment_id, title, amount=None):
    return Shipment(
        id=shipment_id,
        title=title,
        order_id="6",
        store_id="1",
        amount=Price(amount, "USD") if amount else None,
    )


class TestProcess:
    """ShipmentOrderProcessor.process()"""

    def test_checkout_step_change_keeps_shipments(self, processor, order, shipment_storage):
        shipment_ids = list(order.shipment_ids)
        previous = order.snapshot()
        order.checkout_step = "review"

        processor.process(order, previous)

        assert order.shipment_ids == shipment_ids
        adjustments = order.get_adjustments([SHIPPING_ADJUSTMENT_TYPE])
        assert len(adjustments) == 1
        assert adjustments[0].label == "Shipping"
        assert adjustments[0].amount == Price("5.00", "USD")
        assert adjustments[0].source_id == shipment_ids[0]

    def test_adding_item_repacks(self, processor, order, shipment_storage):
        shipment_ids = list(order.shipment_ids)
        previous = order.snapshot()
        order.add_item(make_item("2", "Hoodie"))

        processor.process(order, previous)

        # The existing shipment is filled in again, keeping its rate
        assert order.shipment_ids == shipment_ids
        shipment = shipment_storage.load(shipment_ids[0])
        assert [item.order_item_id for item in shipment.items] == ["1", "2"]
        assert shipment.get_data(OWNED_BY_PACKER) is True
        assert [a.amount for a in order.get_adjustments([SHIPPING_ADJUSTMENT_TYPE])] == [Price("5.00", "USD")]

    def test_selected_rate_survives_refresh(
        self, processor, order, shipment_storage, options_builder, method_storage
    ):
        shipment = shipment_storage.load(order.shipment_ids[0])
        shipment.amount = None
        selector = RateSelector(options_builder, method_storage)
        selector.select(shipment, "example--default", selector.get_selection(shipment).options)

        processor.process(order, order.snapshot())
        processor.process(order, order.snapshot())

        shipment = shipment_storage.load(order.shipment_ids[0])
        assert shipment.shipping_method_id == "example"
        assert shipment.shipping_service == "default"
        assert shipment.amount == Price("5.00", "USD")
        assert shipment.package_type.id == "custom_box"
        adjustments = order.get_adjustments([SHIPPING_ADJUSTMENT_TYPE])
        assert [(a.label, a.amount) for a in adjustments] == [("Shipping", Price("5.00", "USD"))]

    def test_removing_item_repacks(self, processor, order, shipment_storage):
        order.add_item(make_item("2", "Hoodie"))
        processor.process(order)
        previous = order.snapshot()

        order.remove_item(make_item("2"))
        processor.process(order, previous)

        shipments = shipment_storage.load_multiple(order.shipment_ids)
        assert len(shipments) == 1
        assert [item.order_item_id for item in shipments[0].items] == ["1"]
        assert len(shipment_storage) == 1

    def test_shipment_item_contents(self, processor, order, shipment_storage):
        order.add_item(make_item("2", "Hoodie", quantity="3", price="40.00"))
        processor.process(order)

        shipment = shipment_storage.load(order.shipment_ids[0])
        hoodie = shipment.items[1]
        assert hoodie.quantity == Decimal("3")
        assert hoodie.weight == Weight("1500", "g")
        assert hoodie.declared_value == Price("120.00", "USD")
        assert shipment.shipping_profile.country_code == "US"
        assert shipment.get_total_declared_value() == Price("150.00", "USD")
        assert order.get_subtotal_price() == Price("150.00", "USD")

    def test_no_profile_deletes_shipments(self, processor, order, shipment_storage, profiles):
        promotion = Adjustment("promotion", "10% off", Price("-3.00", "USD"))
        order.add_adjustment(Adjustment(SHIPPING_ADJUSTMENT_TYPE, "Shipping", Price("5.00", "USD")))
        order.add_adjustment(promotion)
        profiles.clear()

        processor.process(order)

        assert order.shipment_ids == []
        assert len(shipment_storage) == 0
        assert order.adjustments == [promotion]

    def test_broken_reference_is_noop(self, processor, order, shipment_storage, caplog):
        order.shipment_ids = ["missing"]
        existing = Adjustment(SHIPPING_ADJUSTMENT_TYPE, "Shipping", Price("5.00", "USD"))
        order.add_adjustment(existing)

        with caplog.at_level(logging.WARNING):
            processor.process(order)

        assert order.shipment_ids == ["missing"]
        assert order.adjustments == [existing]
        assert "missing" in caplog.text

    def test_no_shipments_is_noop(self, processor, shipment_storage):
        order = Order(id="7", store_id="1")
        order.add_item(make_item("1"))

        processor.process(order)

        assert order.shipment_ids == []
        assert order.adjustments == []
        assert len(shipment_storage) == 0

    def test_manual_shipments_never_repacked(self, processor, shipment_storage):
        order = Order(id="6", store_id="1", checkout_step="review")
        order.add_item(make_item("1"))
        shipment_storage.save(manual_shipment("m1", "By hand", "8.00"))
        order.shipment_ids = ["m1"]

        order.add_item(make_item("2"))
        processor.process(order)

        assert order.shipment_ids == ["m1"]
        assert [a.amount for a in order.adjustments] == [Price("8.00", "USD")]

    def test_multiple_shipments_use_titles(self, processor, shipment_storage):
        order = Order(id="6", store_id="1")
        shipment_storage.save_multiple([
            manual_shipment("m1", "Shipment #1", "5.00"),
            manual_shipment("m2", "Shipment #2", "7.50"),
            manual_shipment("m3", "Shipment #3"),
        ])
        order.shipment_ids = ["m1", "m2", "m3"]

        processor.process(order)

        adjustments = order.get_adjustments([SHIPPING_ADJUSTMENT_TYPE])
        # The unrated shipment contributes nothing
        assert [(a.label, a.amount, a.source_id) for a in adjustments] == [
            ("Shipment #1", Price("5.00", "USD"), "m1"),
            ("Shipment #2", Price("7.50", "USD"), "m2"),
        ]

    def test_repeated_processing_does_not_duplicate(self, processor, order):
        previous = order.snapshot()
        order.checkout_step = "review"
        processor.process(order, previous)
        processor.process(order, OrderSnapshot("order_information", order.get_order_item_ids()))

        assert len(order.get_adjustments([SHIPPING_ADJUSTMENT_TYPE])) == 1


class TestPacking:
    """ShippingOrderManager packers."""

    def test_custom_packer_splits_items(self, shipment_storage, profiles):
        order_manager = ShippingOrderManager(
            packers=[PerItemPacker(), DefaultPacker()],
            profile_resolver=lambda order: profiles.get(order.id),
        )
        processor = ShipmentOrderProcessor(order_manager, shipment_storage)
        order = Order(id="6", store_id="1")
        order.add_item(make_item("1"))
        order.add_item(make_item("2"))
        shipment_storage.save(manual_shipment("placeholder", "Placeholder"))
        shipment_storage.load("placeholder").set_data(OWNED_BY_PACKER, True)
        order.shipment_ids = ["placeholder"]

        processor.process(order)

        shipments = shipment_storage.load_multiple(order.shipment_ids)
        assert order.shipment_ids[0] == "placeholder"
        assert [s.title for s in shipments] == ["Shipment #1", "Shipment #2"]
        assert [[i.order_item_id for i in s.items] for s in shipments] == [["1"], ["2"]]
        assert all(s.get_data(OWNED_BY_PACKER) for s in shipments)

    def test_surplus_shipments_deleted(self, shipment_storage, profiles):
        order_manager = ShippingOrderManager(
            packers=[PerItemPacker(), DefaultPacker()],
            profile_resolver=lambda order: profiles.get(order.id),
        )
        processor = ShipmentOrderProcessor(order_manager, shipment_storage)
        order = Order(id="6", store_id="1")
        order.add_item(make_item("1"))
        order.add_item(make_item("2"))
        shipments = order_manager.pack(order, profiles["6"])
        shipments[0].amount = Price("5.00", "USD")
        shipments[1].amount = Price("7.00", "USD")
        shipment_storage.save_multiple(shipments)
        order.shipment_ids = [s.id for s in shipments]
        first_id, second_id = order.shipment_ids
        previous = order.snapshot()

        order.remove_item(make_item("2"))
        processor.process(order, previous)

        assert order.shipment_ids == [first_id]
        assert shipment_storage.load(second_id) is None
        assert len(shipment_storage) == 1
        assert [(a.label, a.amount) for a in order.adjustments] == [("Shipping", Price("5.00", "USD"))]

    def test_pack_reuses_given_shipments(self, profiles):
        order = Order(id="6", store_id="1")
        order.add_item(make_item("1"))
        existing = manual_shipment("s1", "Old title", "9.00")
        existing.shipping_method_id = "example"
        existing.shipping_service = "default"

        shipments = ShippingOrderManager().pack(order, profiles["6"], [existing])

        assert shipments == [existing]
        assert existing.title == "Shipment #1"
        assert existing.amount == Price("9.00", "USD")
        assert existing.shipping_method_id == "example"
        assert existing.shipping_profile is profiles["6"]
        assert [i.order_item_id for i in existing.items] == ["1"]

    def test_falls_through_to_default_packer(self, profiles):
        order_manager = ShippingOrderManager(packers=[PerItemPacker(), DefaultPacker()])
        order = Order(id="6", store_id="1")
        order.add_item(make_item("1"))

        shipments = order_manager.pack(order, profiles["6"])
        assert len(shipments) == 1
        assert shipments[0].store_id == "1"
        assert shipments[0].order_id == "6"

    def test_non_shippable_items_skipped(self, profiles):
        order = Order(id="6", store_id="1")
        gift_card = make_item("9", "Gift card")
        gift_card.shippable = False
        order.add_item(gift_card)

        assert ShippingOrderManager().pack(order, profiles["6"]) == []

    def test_no_resolver_means_no_profile(self):
        assert ShippingOrderManager().get_profile(Order(id="6")) is None
