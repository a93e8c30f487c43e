"""
Pure domain layer.

Immutable value objects and rounding rules with NO dependencies on
I/O, configuration files or the engine layer.
"""

from receipt_kernel.domain.rounding import (
    DEFAULT_INCREMENT,
    DEFAULT_ROUNDING,
    RoundingPolicy,
    round_up,
)
from receipt_kernel.domain.values import CENT, Money, exact_context, parse_decimal

__all__ = [
    "CENT",
    "DEFAULT_INCREMENT",
    "DEFAULT_ROUNDING",
    "Money",
    "RoundingPolicy",
    "exact_context",
    "parse_decimal",
    "round_up",
]
