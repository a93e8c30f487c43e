"""
Module: receipt_engines.item
Responsibility:
    PricedItem, the immutable pairing of a name, a base price and one tax
    rule, and ItemBuilder, the chained helper that collects rules and
    produces finished items.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - A PricedItem holds exactly one rule; several rules are combined in a
      CompositeTaxRule.
    - Base prices are non-negative Money values.
    - tax and selling_price are derived on demand and never stored, so they
      always agree with the rule.
    - ItemBuilder.build() does not consume the builder: repeated calls give
      distinct, equal items.

Failure modes:
    - ParseError when a price string is malformed.
    - NegativePriceError / InvalidItemError on bad item fields.
    - UnknownPresetError when the builder is asked for a missing preset.
    - CyclicCompositeError from build() when a custom rule closes a cycle.

Usage:
    from receipt_engines.item import ItemBuilder

    calculator = (
        ItemBuilder("Imported Calculator", "12.25")
        .add_sales_tax()
        .add_import_tax()
        .add_eco_tax()
        .build()
    )
    calculator.tax             # Money('3.30')
    calculator.selling_price   # Money('15.55')
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from receipt_kernel.domain.values import Money
from receipt_kernel.exceptions import InvalidItemError, NegativePriceError
from receipt_kernel.logging_config import LogContext, get_logger
from receipt_engines.composite import CompositeTaxRule
from receipt_engines.presets import DEFAULT_PRESETS, ECO, IMPORT, SALES, TaxPresets
from receipt_engines.rules import NO_TAX, FlatRateRule, TaxRule, rule_label

logger = get_logger("engines.item")


def _to_money(price: Money | Decimal | str | int) -> Money:
    return price if isinstance(price, Money) else Money.of(price)


@dataclass(frozen=True)
class TaxLine:
    """Tax charged by one leaf rule on one item."""

    rule_name: str
    tax_amount: Money


@dataclass(frozen=True)
class PricedItem:
    """
    Immutable item on a receipt.

    Construct directly with a Money price and a rule, via with_rates(), or
    through ItemBuilder.
    """

    name: str
    base_price: Money
    tax_rule: TaxRule = NO_TAX

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidItemError("name is required")
        if not isinstance(self.base_price, Money):
            raise InvalidItemError(
                f"base_price must be Money, got {type(self.base_price).__name__}"
            )
        if not isinstance(self.tax_rule, TaxRule):
            raise InvalidItemError(
                f"tax_rule must be a TaxRule, got {type(self.tax_rule).__name__}"
            )
        if self.base_price.is_negative:
            with LogContext.bind(item_name=self.name):
                logger.error("item_negative_price", extra={
                    "base_price": str(self.base_price),
                })
            raise NegativePriceError(self.name, self.base_price.amount)

    @classmethod
    def with_rates(
        cls,
        name: str,
        base_price: Money | Decimal | str | int,
        *rates: Decimal | str | int,
    ) -> PricedItem:
        """
        Item taxed by one flat-rate rule per given rate.

        PricedItem.with_rates("Imported Calculator", "12.25", "0.18", "0.03", "0.05")
        charges each rate separately, exactly like the builder's presets.
        """
        rules = tuple(FlatRateRule(rate) for rate in rates)
        return cls(
            name=name,
            base_price=_to_money(base_price),
            tax_rule=CompositeTaxRule(rules=rules),
        )

    @property
    def tax(self) -> Money:
        """Total tax on this item, as computed by its rule."""
        with LogContext.bind(item_name=self.name):
            return self.tax_rule.compute_tax(self.base_price)

    @property
    def selling_price(self) -> Money:
        """Base price plus tax."""
        return self.base_price + self.tax

    def tax_lines(self) -> tuple[TaxLine, ...]:
        """Per-rule breakdown; nested composites are expanded to their leaves."""
        if isinstance(self.tax_rule, CompositeTaxRule):
            leaves = self.tax_rule.flatten()
        else:
            leaves = (self.tax_rule,)
        with LogContext.bind(item_name=self.name):
            return tuple(
                TaxLine(rule_name=rule_label(rule), tax_amount=rule.compute_tax(self.base_price))
                for rule in leaves
            )

    def __str__(self) -> str:
        return f"{self.name}: {self.selling_price}"


class ItemBuilder:
    """
    Collects tax rules for one item and builds it.

    Not thread-safe: a builder belongs to the code that created it.
    Every mutator returns the builder so calls can be chained.
    """

    def __init__(
        self,
        name: str,
        base_price: Money | Decimal | str | int,
        presets: TaxPresets | None = None,
    ):
        self._name = name
        self._base_price = _to_money(base_price)
        self._presets = presets if presets is not None else DEFAULT_PRESETS
        self._rules: list[TaxRule] = []

    @property
    def rules(self) -> tuple[TaxRule, ...]:
        """Rules collected so far, in charge order."""
        return tuple(self._rules)

    def add_rule(self, rule: TaxRule) -> ItemBuilder:
        """Add any rule, including custom TaxRule subclasses."""
        self._rules.append(rule)
        return self

    def add_preset(self, key: str) -> ItemBuilder:
        """Add the preset rule registered under key."""
        return self.add_rule(self._presets[key])

    def add_sales_tax(self) -> ItemBuilder:
        return self.add_preset(SALES)

    def add_import_tax(self) -> ItemBuilder:
        return self.add_preset(IMPORT)

    def add_eco_tax(self) -> ItemBuilder:
        return self.add_preset(ECO)

    def add_all_standard_taxes(self) -> ItemBuilder:
        """Sales, import and eco taxes, in that order."""
        for rule in self._presets.standard():
            self.add_rule(rule)
        return self

    def build(self) -> PricedItem:
        """Create a new item from the current rules.  The builder is unchanged."""
        with LogContext.bind(item_name=self._name):
            item = PricedItem(
                name=self._name,
                base_price=self._base_price,
                tax_rule=CompositeTaxRule(rules=tuple(self._rules)),
            )
            logger.debug("item_built", extra={
                "base_price": str(self._base_price),
                "rules": [rule_label(r) for r in self._rules],
            })
        return item
