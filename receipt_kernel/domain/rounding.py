"""
Rounding -- Round-up-to-increment policy for tax amounts.

Responsibility:
    Turns the raw, full-precision product of a base value and a tax rate
    into a Money amount, rounding UP to the nearest multiple of a
    configurable increment (0.05 by default).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - round_up(v, i) is a multiple of i and never below v (for v >= 0).
    - Exact Decimal arithmetic: the ceiling is taken from divmod in
      exact_context(), so no digit of the value is rounded away first.
    - The increment is a positive whole number of cents, so every
      rounded result fits in Money's two-digit scale.

Failure modes:
    - InvalidIncrementError when the increment is zero, negative or sub-cent.
    - ParseError when the increment is not a valid decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from receipt_kernel.domain.values import CENT, Money, exact_context, parse_decimal
from receipt_kernel.exceptions import InvalidIncrementError

DEFAULT_INCREMENT = Decimal("0.05")


def _validate_increment(increment: Decimal) -> None:
    if increment <= 0:
        raise InvalidIncrementError(increment)
    with localcontext(exact_context(increment)):
        if increment % CENT != 0:
            raise InvalidIncrementError(increment)


def round_up(value: Decimal, increment: Decimal = DEFAULT_INCREMENT) -> Decimal:
    """
    Round value up to the nearest multiple of increment.

    The value is split into whole increments and a remainder; any
    positive remainder adds one more increment, e.g. 0.101 -> 2 steps
    remainder 0.001 -> 3 steps -> 0.15.

    Raises:
        InvalidIncrementError: If increment is not a positive whole number
            of cents.
    """
    _validate_increment(increment)
    with localcontext(exact_context(value, increment)):
        steps, remainder = divmod(value, increment)
        if remainder > 0:
            steps += 1
        return (steps * increment).quantize(CENT)


@dataclass(frozen=True, slots=True)
class RoundingPolicy:
    """
    Rounding increment applied by tax rules.

    Immutable and shareable; one instance normally serves every rule.
    """

    increment: Decimal = DEFAULT_INCREMENT

    def __post_init__(self) -> None:
        increment = parse_decimal(self.increment)
        _validate_increment(increment)
        object.__setattr__(self, "increment", increment)

    def apply(self, value: Decimal) -> Money:
        """Round a raw tax figure up to the increment and wrap it as Money."""
        return Money(amount=round_up(value, self.increment))


DEFAULT_ROUNDING = RoundingPolicy()
