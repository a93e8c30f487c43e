"""
Values -- Immutable, self-validating money value object.

Responsibility:
    Provides Money, the only representation of a price or a tax amount
    anywhere in the engine, and parse_decimal, the single boundary where
    caller input becomes a Decimal.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other module. No outward dependencies except
    receipt_kernel.exceptions.

Invariants enforced:
    - Decimal-only arithmetic: float input is rejected, never converted.
    - Fixed scale: every Money amount carries exactly two fractional digits.
      Values that would need more digits are rejected, not rounded.
    - No magnitude limit: arithmetic runs in exact_context(), so large
      amounts are never rounded to the default 28-digit precision.

Failure modes:
    - ParseError on malformed strings, floats, NaN or infinities.
    - ParseError when an amount has sub-cent precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal, InvalidOperation, localcontext
from typing import Iterable

from receipt_kernel.exceptions import ParseError

CENT = Decimal("0.01")


def exact_context(*operands: Decimal) -> Context:
    """
    Decimal context wide enough for exact arithmetic over operands.

    Sums, differences, products and divmod of the operands never round
    in this context, however many digits they carry.
    """
    width = sum(len(op.as_tuple().digits) + abs(op.adjusted()) for op in operands)
    return Context(prec=max(28, width + 28))


def parse_decimal(value: Decimal | str | int) -> Decimal:
    """
    Convert caller input into an exact Decimal.

    Preconditions:
        - value is a Decimal, an int or a decimal string such as "12.25".

    Postconditions:
        - Returns a finite Decimal equal to the input.

    Raises:
        ParseError: for floats, bools, malformed strings, NaN and infinities.
    """
    if isinstance(value, (bool, float)):
        raise ParseError(value, "binary floating point is not accepted")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ParseError(value, "not a decimal number") from e
    else:
        raise ParseError(value, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise ParseError(value, "must be a finite number")
    return result


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount value object.

    Contract:
        Wraps a Decimal amount quantized to cents. Arithmetic between Money
        values is exact; multiplying by a rate is done on the raw Decimal by
        the tax rules, which round back into Money.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - amount is always a Decimal (never float) with exponent -2
        - str() always renders two fractional digits

    Non-goals:
        - Does NOT carry a currency (single-currency engine)
        - Does NOT round -- sub-cent inputs are rejected
    """

    amount: Decimal

    def __post_init__(self) -> None:
        amount = parse_decimal(self.amount)
        with localcontext(exact_context(amount)):
            quantized = amount.quantize(CENT)
        if quantized != amount:
            raise ParseError(self.amount, "more than two fractional digits")
        object.__setattr__(self, "amount", quantized)

    @classmethod
    def of(cls, amount: Decimal | str | int) -> Money:
        """
        Factory method for creating Money.

        Raises:
            ParseError: If amount is malformed, a float, or sub-cent.
        """
        return cls(amount=parse_decimal(amount))

    @classmethod
    def zero(cls) -> Money:
        """Create a zero amount."""
        return cls(amount=Decimal("0"))

    @classmethod
    def sum_of(cls, values: Iterable[Money]) -> Money:
        """Exact sum of Money values; zero for an empty iterable."""
        total = cls.zero()
        for value in values:
            total = total + value
        return total

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        with localcontext(exact_context(self.amount, other.amount)):
            total = self.amount + other.amount
        return Money(amount=total)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        with localcontext(exact_context(self.amount, other.amount)):
            difference = self.amount - other.amount
        return Money(amount=difference)

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    def __repr__(self) -> str:
        return f"Money({str(self)!r})"
