"""
Module: receipt_engines.receipt
Responsibility:
    Receipt aggregation.  Collects priced items in insertion order and
    reports item count, total tax and total price, plus a plain-text
    rendering of the receipt.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Rendering returns a
    string; printing it is the caller's job.

Invariants enforced:
    - Totals are exact Money sums over the items, recomputed on demand.
    - total_price == sum of base prices + total_tax.
    - No rule validation happens here; items arrive already valid.

Usage:
    from receipt_engines.receipt import Receipt, render_receipt

    receipt = Receipt()
    receipt.add(book)
    receipt.add(calculator)
    receipt.total_tax     # Money('3.30')
    print(render_receipt(receipt))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from receipt_kernel.domain.values import Money
from receipt_kernel.logging_config import get_logger
from receipt_engines.item import PricedItem
from receipt_engines.tracer import traced_engine

logger = get_logger("engines.receipt")


@dataclass(frozen=True)
class ReceiptSummary:
    """Totals of a receipt at one point in time."""

    count: int
    total_tax: Money
    total_price: Money


@traced_engine("receipt", "1.0", fingerprint_fields=("items",))
def summarize_receipt(items: Sequence[PricedItem]) -> ReceiptSummary:
    """
    Compute count and totals over items.

    Each item's tax is computed once and reused for its selling price.
    """
    total_tax = Money.zero()
    total_price = Money.zero()
    for item in items:
        tax = item.tax
        total_tax = total_tax + tax
        total_price = total_price + item.base_price + tax
    return ReceiptSummary(
        count=len(items),
        total_tax=total_tax,
        total_price=total_price,
    )


class Receipt:
    """
    Ordered collection of priced items.

    Not thread-safe: share only behind external locking.
    """

    def __init__(self, items: Iterable[PricedItem] = ()):
        self._items: list[PricedItem] = []
        for item in items:
            self.add(item)

    def add(self, item: PricedItem) -> None:
        if not isinstance(item, PricedItem):
            raise TypeError(f"Receipt accepts PricedItem, got {type(item).__name__}")
        self._items.append(item)
        logger.debug("receipt_item_added", extra={
            "item": item.name,
            "base_price": str(item.base_price),
            "position": len(self._items),
        })

    @property
    def items(self) -> tuple[PricedItem, ...]:
        return tuple(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def total_tax(self) -> Money:
        return Money.sum_of(item.tax for item in self._items)

    @property
    def total_price(self) -> Money:
        return Money.sum_of(item.selling_price for item in self._items)

    def summary(self) -> ReceiptSummary:
        """Count and both totals in one pass."""
        return summarize_receipt(items=self.items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PricedItem]:
        return iter(self._items)


def render_receipt(receipt: Receipt) -> str:
    """
    Plain-text receipt.

    One "name: selling price" line per item in insertion order, then the
    tax and grand totals:

        Book: 48.50
        Imported Calculator: 15.55
        Sales Taxes: 3.30
        Total: 64.05
    """
    summary = receipt.summary()
    lines = [str(item) for item in receipt]
    lines.append(f"Sales Taxes: {summary.total_tax}")
    lines.append(f"Total: {summary.total_price}")
    return "\n".join(lines)
