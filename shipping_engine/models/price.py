"""
Price value object

Currency-aware Decimal amount. Prices are immutable; every operation
returns a new Price.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from shipping_engine.core.exceptions import CurrencyMismatchError

Number = Union[Decimal, str, int, float]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal, going through str for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid number: {value!r}")
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, AttributeError):
        raise ValueError(f"Invalid number: {value!r}")


@dataclass(frozen=True)
class Price:
    number: Decimal
    currency_code: str

    def __post_init__(self):
        number = to_decimal(self.number)
        if not number.is_finite():
            raise ValueError(f"Invalid number: {self.number!r}")
        currency_code = str(self.currency_code or "").upper()
        if len(currency_code) != 3 or not currency_code.isalpha():
            raise ValueError(f"Invalid currency code: {self.currency_code!r}")
        object.__setattr__(self, "number", number)
        object.__setattr__(self, "currency_code", currency_code)

    @classmethod
    def from_dict(cls, data: dict) -> "Price":
        return cls(data["number"], data["currency_code"])

    def to_dict(self) -> dict:
        return {"number": str(self.number), "currency_code": self.currency_code}

    def _assert_same_currency(self, other: "Price") -> None:
        if self.currency_code != other.currency_code:
            raise CurrencyMismatchError(self.currency_code, other.currency_code)

    def add(self, other: "Price") -> "Price":
        self._assert_same_currency(other)
        return Price(self.number + other.number, self.currency_code)

    def subtract(self, other: "Price") -> "Price":
        self._assert_same_currency(other)
        return Price(self.number - other.number, self.currency_code)

    def multiply(self, factor: Number) -> "Price":
        return Price(self.number * to_decimal(factor), self.currency_code)

    def divide(self, divisor: Number) -> "Price":
        return Price(self.number / to_decimal(divisor), self.currency_code)

    def compare_to(self, other: "Price") -> int:
        self._assert_same_currency(other)
        if self.number == other.number:
            return 0
        return 1 if self.number > other.number else -1

    def greater_than(self, other: "Price") -> bool:
        return self.compare_to(other) == 1

    def less_than(self, other: "Price") -> bool:
        return self.compare_to(other) == -1

    def is_zero(self) -> bool:
        return self.number == 0

    def is_negative(self) -> bool:
        return self.number < 0

    def __str__(self) -> str:
        return f"{self.number} {self.currency_code}"
