"""Weight value object with unit conversion."""
from dataclasses import dataclass
from decimal import Decimal

from shipping_engine.models.price import Number, to_decimal

# Grams per unit
WEIGHT_UNITS = {
    "g": Decimal("1"),
    "kg": Decimal("1000"),
    "oz": Decimal("28.349523125"),
    "lb": Decimal("453.59237"),
}


@dataclass(frozen=True)
class Weight:
    number: Decimal
    unit: str = "g"

    def __post_init__(self):
        unit = str(self.unit).lower()
        if unit not in WEIGHT_UNITS:
            raise ValueError(f"Invalid weight unit: {self.unit!r}")
        object.__setattr__(self, "number", to_decimal(self.number))
        object.__setattr__(self, "unit", unit)

    def convert(self, unit: str) -> "Weight":
        unit = unit.lower()
        if unit not in WEIGHT_UNITS:
            raise ValueError(f"Invalid weight unit: {unit!r}")
        if unit == self.unit:
            return self
        grams = self.number * WEIGHT_UNITS[self.unit]
        return Weight(grams / WEIGHT_UNITS[unit], unit)

    def add(self, other: "Weight") -> "Weight":
        other = other.convert(self.unit)
        return Weight(self.number + other.number, self.unit)

    def multiply(self, factor: Number) -> "Weight":
        return Weight(self.number * to_decimal(factor), self.unit)

    def compare_to(self, other: "Weight") -> int:
        other = other.convert(self.unit)
        if self.number == other.number:
            return 0
        return 1 if self.number > other.number else -1

    def is_zero(self) -> bool:
        return self.number == 0

    def __str__(self) -> str:
        return f"{self.number} {self.unit}"
