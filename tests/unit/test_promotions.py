"""
Tests for ShipmentPercentageOff.
"""
from decimal import Decimal

import pytest

from shipping_engine.models import Adjustment, Price
from shipping_engine.services import ShipmentPercentageOff
from shipping_engine.services.promotions import SHIPPING_PROMOTION_ADJUSTMENT_TYPE


class TestShipmentPercentageOff:

    def test_applies_discount(self, shipment):
        shipment.amount = Price("12.35", "USD")
        offer = ShipmentPercentageOff("0.1")

        adjustment = offer.apply_to_shipment(shipment, "promo-1")

        assert adjustment.type == SHIPPING_PROMOTION_ADJUSTMENT_TYPE
        assert adjustment.label == "Shipping Discount"
        # 1.235 rounds half up
        assert adjustment.amount == Price("-1.24", "USD")
        assert adjustment.source_id == "promo-1"
        assert adjustment.percentage == Decimal("0.1")
        assert shipment.adjustments == [adjustment]
        assert shipment.get_adjusted_amount() == Price("11.11", "USD")

    def test_capped_at_remaining_amount(self, shipment):
        shipment.amount = Price("10.00", "USD")
        shipment.add_adjustment(Adjustment("shipping_promotion", "Earlier", Price("-8.00", "USD")))

        adjustment = ShipmentPercentageOff("0.5").apply_to_shipment(shipment, "promo-2")

        assert adjustment.amount == Price("-2.00", "USD")
        assert shipment.get_adjusted_amount().is_zero()

    def test_free_shipping(self, shipment):
        adjustment = ShipmentPercentageOff(1).apply_to_shipment(shipment, "free")
        assert adjustment.amount == Price("-5.00", "USD")

    def test_unrated_shipment_skipped(self, shipment):
        shipment.amount = None
        assert ShipmentPercentageOff("0.2").apply_to_shipment(shipment, "promo") is None
        assert shipment.adjustments == []

    @pytest.mark.parametrize("percentage", ["0", "-0.1", "1.5"])
    def test_invalid_percentage(self, percentage):
        with pytest.raises(ValueError):
            ShipmentPercentageOff(percentage)

    def test_nothing_left_to_discount(self, shipment):
        shipment.amount = Price("10.00", "USD")
        earlier = Adjustment("shipping_promotion", "Earlier", Price("-12.00", "USD"))
        shipment.add_adjustment(earlier)

        assert ShipmentPercentageOff("0.5").apply_to_shipment(shipment, "promo-3") is None
        assert shipment.adjustments == [earlier]
        assert shipment.get_adjusted_amount() == Price("-2.00", "USD")
