"""
Currency helpers

CurrencyFormatter renders amounts for rate option labels.
Rounder rounds prices to the number of minor units of their currency.
Money is Decimal throughout, never float.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

# ISO 4217 minor units for currencies that differ from the default of 2
CURRENCY_FRACTION_DIGITS: Dict[str, int] = {
    "BHD": 3,
    "CLP": 0,
    "ISK": 0,
    "JOD": 3,
    "JPY": 0,
    "KRW": 0,
    "KWD": 3,
    "OMR": 3,
    "TND": 3,
    "VND": 0,
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "AUD": "A$",
    "CAD": "CA$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "KRW": "₩",
    "UAH": "₴",
    "USD": "$",
}


def get_fraction_digits(currency_code: str) -> int:
    return CURRENCY_FRACTION_DIGITS.get(currency_code.upper(), 2)


def _quantum(currency_code: str) -> Decimal:
    digits = get_fraction_digits(currency_code)
    return Decimal(1).scaleb(-digits)


class CurrencyFormatter:
    """
    Formats an amount with its currency symbol.

    Known currencies use their symbol ("$1,234.50"); everything else falls
    back to the ISO code ("CHF 12.00").
    """

    def __init__(self, symbols: Optional[Dict[str, str]] = None):
        self._symbols = dict(CURRENCY_SYMBOLS)
        if symbols:
            self._symbols.update(symbols)

    def format(self, number: Union[Decimal, str, int], currency_code: str) -> str:
        currency_code = currency_code.upper()
        amount = Decimal(str(number)).quantize(_quantum(currency_code), rounding=ROUND_HALF_UP)
        digits = get_fraction_digits(currency_code)
        sign = "-" if amount < 0 else ""
        body = f"{abs(amount):,.{digits}f}"

        symbol = self._symbols.get(currency_code)
        if symbol:
            return f"{sign}{symbol}{body}"
        return f"{sign}{currency_code} {body}"


class Rounder:
    """Rounds prices to their currency's minor units (half up)."""

    def __init__(self, rounding: str = ROUND_HALF_UP):
        self.rounding = rounding

    def round(self, price):
        number = price.number.quantize(_quantum(price.currency_code), rounding=self.rounding)
        return price.__class__(number, price.currency_code)


# Shared instances
currency_formatter = CurrencyFormatter()
rounder = Rounder()
