"""
Shipping engine exceptions

All errors raised by the engine derive from ShippingError, which carries a
machine-readable code next to the message. Concrete errors also derive from
the matching builtin so callers can catch ValueError / TypeError directly.
"""
from typing import Any, Dict, Optional


class ShippingError(Exception):
    """Shipping engine error."""

    def __init__(self, message: str, code: str = "SHIPPING_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class MissingPropertyError(ShippingError, ValueError):
    """A required property was absent when building a value object."""

    def __init__(self, property_name: str, message: Optional[str] = None):
        super().__init__(
            message or f"Missing required property {property_name}.",
            code="MISSING_PROPERTY",
            details={"property": property_name},
        )
        self.property_name = property_name


class InvalidPropertyTypeError(ShippingError, TypeError):
    """A property was given a value of the wrong type."""

    def __init__(self, property_name: str, expected: type):
        super().__init__(
            f'Property "{property_name}" should be an instance of {expected.__name__}.',
            code="INVALID_PROPERTY_TYPE",
            details={"property": property_name, "expected": expected.__name__},
        )
        self.property_name = property_name


class CurrencyMismatchError(ShippingError, ValueError):
    """Arithmetic between prices in different currencies."""

    def __init__(self, first: str, second: str):
        super().__init__(
            f"The provided prices have mismatched currencies: {first}, {second}.",
            code="CURRENCY_MISMATCH",
            details={"currencies": [first, second]},
        )


class UnknownShippingMethodError(ShippingError, LookupError):
    """No shipping method (or method plugin) exists for the given id."""

    def __init__(self, method_id: str, kind: str = "shipping method"):
        super().__init__(
            f"Unknown {kind}: {method_id}",
            code="METHOD_NOT_FOUND",
            details={"id": method_id},
        )


class InvalidRateSelectionError(ShippingError, ValueError):
    """The selected rate option is not among the available options."""

    def __init__(self, message: str, option_id: Optional[str] = None):
        super().__init__(
            message,
            code="INVALID_RATE_SELECTION",
            details={"option_id": option_id},
        )
