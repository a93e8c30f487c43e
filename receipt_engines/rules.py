"""
Module: receipt_engines.rules
Responsibility:
    Tax rule strategies.  A tax rule derives a rounded, non-negative tax
    amount from a base value; items hold exactly one rule and delegate
    their tax to it.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import receipt_kernel.

Invariants enforced:
    - Each rule rounds its OWN result.  Rates of separate rules are never
      summed and rounded once: round(a) + round(b) != round(a + b) in
      general, and the per-rule sum is the correct receipt figure.
    - Rules are immutable frozen dataclasses, safe to share across items
      and threads.
    - Rates are exact Decimals; float rates are rejected.  Products are
      taken in exact_context(), so no digit is lost before rounding.

Failure modes:
    - ParseError on malformed or float rates and thresholds.
    - InvalidRateError on negative rates or badly ordered bracket tables.

Extension:
    New rule types subclass TaxRule and implement compute_tax().  Rules
    that wrap other rules also override children() so composite
    validation can walk through them.

Usage:
    from receipt_engines.rules import FlatRateRule, NO_TAX
    from receipt_kernel.domain.values import Money

    sales = FlatRateRule("0.18", name="sales")
    sales.compute_tax(Money.of("12.25"))   # Money('2.25')
    NO_TAX.compute_tax(Money.of("48.50"))  # Money('0.00')
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, localcontext

from receipt_kernel.domain.rounding import DEFAULT_ROUNDING, RoundingPolicy
from receipt_kernel.domain.values import Money, exact_context, parse_decimal
from receipt_kernel.exceptions import InvalidRateError
from receipt_kernel.logging_config import get_logger

logger = get_logger("engines.rules")


class TaxRule(ABC):
    """
    Abstract base for tax rules.

    Rules MUST be:
    - Pure: No side effects
    - Deterministic: Same value always produces same tax
    - Immutable: No internal state changes
    """

    name: str

    @abstractmethod
    def compute_tax(self, value: Money) -> Money:
        """
        Compute the rounded tax owed on a base value.

        Args:
            value: Non-negative base price.

        Returns:
            Non-negative tax amount with two fractional digits.
        """
        ...

    def children(self) -> tuple[TaxRule, ...]:
        """Rules this rule delegates to.  Leaf rules have none."""
        return ()


@dataclass(frozen=True)
class NoTaxRule(TaxRule):
    """
    Null-object rule: no tax, whatever the value.

    Behaves as the neutral element of composition.  Use the shared
    NO_TAX instance rather than building new ones.
    """

    name: str = "no_tax"

    def compute_tax(self, value: Money) -> Money:
        return Money.zero()


NO_TAX = NoTaxRule()


def rule_label(rule: TaxRule) -> str:
    """Display name of a rule; custom rules without a name use their class."""
    return getattr(rule, "name", type(rule).__name__)


def _parse_rate(rate: Decimal | str | int) -> Decimal:
    parsed = parse_decimal(rate)
    if parsed < 0:
        logger.error("tax_rate_negative", extra={"rate": str(parsed)})
        raise InvalidRateError(parsed, "rate cannot be negative")
    return parsed


@dataclass(frozen=True)
class FlatRateRule(TaxRule):
    """
    Flat percentage of the base value, rounded up to the policy increment.

    rate is a fraction: Decimal("0.18") for 18%.
    """

    rate: Decimal
    name: str = "flat_rate"
    rounding: RoundingPolicy = DEFAULT_ROUNDING

    def __post_init__(self) -> None:
        object.__setattr__(self, "rate", _parse_rate(self.rate))

    def compute_tax(self, value: Money) -> Money:
        with localcontext(exact_context(value.amount, self.rate)):
            raw = value.amount * self.rate
        tax = self.rounding.apply(raw)
        logger.debug("flat_rate_tax_computed", extra={
            "rule": self.name,
            "base_value": str(value.amount),
            "rate": str(self.rate),
            "raw_tax": str(raw),
            "tax": str(tax.amount),
        })
        return tax


@dataclass(frozen=True)
class TaxBracket:
    """
    One band of a bracket table.

    The rate applies to the part of the value from threshold up to the
    next bracket's threshold (or without limit for the last bracket).
    """

    threshold: Decimal
    rate: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "threshold", parse_decimal(self.threshold))
        object.__setattr__(self, "rate", _parse_rate(self.rate))


@dataclass(frozen=True)
class BracketRateRule(TaxRule):
    """
    Marginal-rate rule over value brackets.

    Each bracket taxes only the slice of the value that falls inside it,
    and the rule rounds the combined figure once.  For example 3.5% below
    200 and 5% above taxes 300 as 200 * 0.035 + 100 * 0.05 = 12.00.
    """

    brackets: tuple[TaxBracket, ...]
    name: str = "bracket_rate"
    rounding: RoundingPolicy = DEFAULT_ROUNDING

    def __post_init__(self) -> None:
        brackets = tuple(
            b if isinstance(b, TaxBracket) else TaxBracket(*b)
            for b in self.brackets
        )
        if not brackets:
            raise InvalidRateError(brackets, "at least one bracket is required")
        if brackets[0].threshold != 0:
            raise InvalidRateError(
                brackets[0].threshold, "first bracket must start at 0"
            )
        for lower, upper in zip(brackets, brackets[1:]):
            if upper.threshold <= lower.threshold:
                logger.error("tax_brackets_unordered", extra={
                    "rule": self.name,
                    "thresholds": [str(b.threshold) for b in brackets],
                })
                raise InvalidRateError(
                    upper.threshold, "bracket thresholds must strictly increase"
                )
        object.__setattr__(self, "brackets", brackets)

    @classmethod
    def of(
        cls,
        bands: Iterable[tuple[Decimal | str | int, Decimal | str | int]],
        name: str = "bracket_rate",
        rounding: RoundingPolicy = DEFAULT_ROUNDING,
    ) -> BracketRateRule:
        """Build from (threshold, rate) pairs."""
        return cls(
            brackets=tuple(TaxBracket(t, r) for t, r in bands),
            name=name,
            rounding=rounding,
        )

    def compute_tax(self, value: Money) -> Money:
        raw = Decimal("0")
        uppers = [b.threshold for b in self.brackets[1:]] + [None]
        operands = [value.amount]
        for b in self.brackets:
            operands += (b.threshold, b.rate)
        with localcontext(exact_context(*operands)):
            for bracket, upper in zip(self.brackets, uppers):
                if value.amount <= bracket.threshold:
                    break
                top = value.amount if upper is None else min(value.amount, upper)
                raw += (top - bracket.threshold) * bracket.rate
        tax = self.rounding.apply(raw)
        logger.debug("bracket_tax_computed", extra={
            "rule": self.name,
            "base_value": str(value.amount),
            "raw_tax": str(raw),
            "tax": str(tax.amount),
        })
        return tax
