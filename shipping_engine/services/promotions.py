"""
Shipment promotion offers

ShipmentPercentageOff takes a percentage off a shipment's amount and
records it on the shipment as a negative "shipping_promotion" adjustment.
"""
import logging
from decimal import Decimal
from typing import Optional

from shipping_engine.core.config import settings
from shipping_engine.core.currency import Rounder, rounder as default_rounder
from shipping_engine.models.adjustment import Adjustment
from shipping_engine.models.price import Number, to_decimal
from shipping_engine.models.shipment import Shipment

logger = logging.getLogger(__name__)

SHIPPING_PROMOTION_ADJUSTMENT_TYPE = "shipping_promotion"


class ShipmentPercentageOff:
    """Percentage off the shipment amount."""

    def __init__(self, percentage: Number, rounder: Optional[Rounder] = None):
        percentage = to_decimal(percentage)
        if percentage <= 0 or percentage > 1:
            raise ValueError(f"Percentage must be in (0, 1], got {percentage}")
        self.percentage: Decimal = percentage
        self.rounder = rounder or default_rounder

    def apply_to_shipment(self, shipment: Shipment, promotion_id: str) -> Optional[Adjustment]:
        if shipment.amount is None:
            logger.debug(f"Shipment {shipment.id} is not rated yet, skipping promotion {promotion_id}")
            return None

        # The offer amount is calculated from the unreduced shipment amount
        amount = self.rounder.round(shipment.amount.multiply(self.percentage))
        # Can't exceed the remaining shipment amount, to avoid a negative total
        remaining_amount = shipment.get_adjusted_amount()
        if remaining_amount.is_negative() or remaining_amount.is_zero():
            logger.debug(f"Shipment {shipment.id} has nothing left to discount, skipping promotion {promotion_id}")
            return None
        if amount.greater_than(remaining_amount):
            amount = remaining_amount

        adjustment = Adjustment(
            type=SHIPPING_PROMOTION_ADJUSTMENT_TYPE,
            label=settings.SHIPPING_PROMOTION_LABEL,
            amount=amount.multiply("-1"),
            source_id=promotion_id,
            percentage=self.percentage,
        )
        shipment.add_adjustment(adjustment)
        return adjustment
