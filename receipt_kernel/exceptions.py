"""
Typed Exception Hierarchy for the Receipt Tax Engine.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers must be able to react to a bad price, a bad rate or a broken rule
graph without parsing message strings. Every error therefore:
  1. Has its own exception class (catch by type, not message)
  2. Carries a CODE class attribute (machine-readable)
  3. Stores its context as attributes (not just a message string)

Example:
    try:
        rule = CompositeTaxRule([sales, nested])
    except CyclicCompositeError as e:
        log.error("bad rule graph", extra={"code": e.code, "path": e.path})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    ReceiptTaxError (base)
    |
    +-- ParseError
    |
    +-- ConfigurationError
    |   +-- CyclicCompositeError
    |   +-- InvalidRateError
    |   +-- InvalidIncrementError
    |   +-- UnknownPresetError
    |
    +-- PricingError
        +-- NegativePriceError
        +-- InvalidItemError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                | When Raised
----------------|---------------------|-----------------------------------------
Input           | PARSE_ERROR         | Malformed decimal string, float input
----------------|---------------------|-----------------------------------------
Configuration   | CONFIGURATION_ERROR | Bad rule list, missing config keys
                | CYCLIC_COMPOSITE    | Composite reachable from its own children
                | INVALID_RATE        | Negative rate, unordered brackets
                | INVALID_INCREMENT   | Rounding increment <= 0 or sub-cent
                | UNKNOWN_PRESET      | Builder asked for an unknown preset
----------------|---------------------|-----------------------------------------
Pricing         | NEGATIVE_PRICE      | Item constructed with a negative price
                | INVALID_ITEM        | Item name missing or wrong field types

All of these are raised at construction time. Once a rule or an item exists,
tax computation over it cannot fail.
"""


class ReceiptTaxError(Exception):
    """
    Base exception for all receipt tax engine errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "RECEIPT_TAX_ERROR"


# Input parsing


class ParseError(ReceiptTaxError):
    """A numeric input could not be read as an exact decimal."""

    code: str = "PARSE_ERROR"

    def __init__(self, value: object, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot parse {value!r}: {reason}")


# Configuration-related exceptions


class ConfigurationError(ReceiptTaxError):
    """Base exception for rule and preset configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class CyclicCompositeError(ConfigurationError):
    """
    A composite rule would contain itself, directly or transitively.

    Computing tax over such a graph never terminates, so it is rejected
    when the composite is built.
    """

    code: str = "CYCLIC_COMPOSITE"

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(
            "Composite tax rule contains itself: " + " -> ".join(path)
        )


class InvalidRateError(ConfigurationError):
    """A tax rate or bracket table is not acceptable."""

    code: str = "INVALID_RATE"

    def __init__(self, rate: object, reason: str):
        self.rate = rate
        self.reason = reason
        super().__init__(f"Invalid tax rate {rate}: {reason}")


class InvalidIncrementError(ConfigurationError):
    """Rounding increment must be positive and a whole number of cents."""

    code: str = "INVALID_INCREMENT"

    def __init__(self, increment: object):
        self.increment = increment
        super().__init__(
            f"Invalid rounding increment {increment}: "
            "must be positive and a multiple of 0.01"
        )


class UnknownPresetError(ConfigurationError):
    """Requested preset key is not defined."""

    code: str = "UNKNOWN_PRESET"

    def __init__(self, key: str, available: list[str]):
        self.key = key
        self.available = available
        super().__init__(
            f"Unknown tax preset {key!r}; available: {', '.join(available)}"
        )


# Pricing-related exceptions


class PricingError(ReceiptTaxError):
    """Base exception for priced item errors."""

    code: str = "PRICING_ERROR"


class NegativePriceError(PricingError):
    """Base price of an item is below zero."""

    code: str = "NEGATIVE_PRICE"

    def __init__(self, item_name: str, price: object):
        self.item_name = item_name
        self.price = price
        super().__init__(f"Item {item_name!r} has negative base price {price}")


class InvalidItemError(PricingError):
    """Item fields are missing or of the wrong type."""

    code: str = "INVALID_ITEM"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid item: {reason}")
