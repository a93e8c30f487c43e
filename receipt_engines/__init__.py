"""
Module: receipt_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the tax
    calculation engine.  This is the canonical import surface for
    configuration tooling, scripts and tests.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import receipt_kernel (and sibling engine modules).
    MUST NOT import receipt_config.

Invariants enforced:
    - Decimal-only arithmetic: all amounts are Money; floats are rejected.
    - Per-rule rounding: every rule rounds its own tax before any summing.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from receipt_engines import ItemBuilder, Receipt, render_receipt

    receipt = Receipt()
    receipt.add(ItemBuilder("Book", "48.50").build())
    receipt.add(ItemBuilder("Imported Calculator", "12.25").add_all_standard_taxes().build())
    print(render_receipt(receipt))
"""

from receipt_engines.composite import CompositeTaxRule, find_cycle
from receipt_engines.item import ItemBuilder, PricedItem, TaxLine
from receipt_engines.presets import (
    DEFAULT_PRESETS,
    ECO,
    ECO_TAX,
    IMPORT,
    IMPORT_TAX,
    SALES,
    SALES_TAX,
    STANDARD_KEYS,
    TaxPresets,
)
from receipt_engines.receipt import (
    Receipt,
    ReceiptSummary,
    render_receipt,
    summarize_receipt,
)
from receipt_engines.rules import (
    NO_TAX,
    BracketRateRule,
    FlatRateRule,
    NoTaxRule,
    TaxBracket,
    TaxRule,
    rule_label,
)
from receipt_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # Rules
    "TaxRule",
    "NoTaxRule",
    "NO_TAX",
    "FlatRateRule",
    "TaxBracket",
    "BracketRateRule",
    "CompositeTaxRule",
    "find_cycle",
    "rule_label",
    # Presets
    "SALES",
    "IMPORT",
    "ECO",
    "STANDARD_KEYS",
    "SALES_TAX",
    "IMPORT_TAX",
    "ECO_TAX",
    "TaxPresets",
    "DEFAULT_PRESETS",
    # Items
    "PricedItem",
    "TaxLine",
    "ItemBuilder",
    # Receipt
    "Receipt",
    "ReceiptSummary",
    "summarize_receipt",
    "render_receipt",
    # Tracing
    "traced_engine",
    "compute_input_fingerprint",
]
