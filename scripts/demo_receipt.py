#!/usr/bin/env python3
"""
Print the reference basket receipt.

Builds the three-item basket (a book with no tax, an imported calculator
with every standard tax, imported medicine with import duty only) and
prints its receipt.

Usage:
    python3 scripts/demo_receipt.py
    python3 scripts/demo_receipt.py --presets my_presets.yaml
    python3 scripts/demo_receipt.py --log-level DEBUG   # JSON logs on stderr
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from receipt_config import get_active_presets  # noqa: E402
from receipt_engines import ItemBuilder, Receipt, TaxPresets, render_receipt  # noqa: E402
from receipt_kernel.exceptions import ReceiptTaxError  # noqa: E402
from receipt_kernel.logging_config import LogContext, configure_logging  # noqa: E402


def build_basket(presets: TaxPresets) -> Receipt:
    receipt = Receipt()
    receipt.add(ItemBuilder("Book", "48.50", presets).build())
    receipt.add(
        ItemBuilder("Imported Calculator", "12.25", presets)
        .add_all_standard_taxes()
        .build()
    )
    receipt.add(
        ItemBuilder("Imported Medicine", "8.40", presets)
        .add_import_tax()
        .build()
    )
    return receipt


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the reference basket receipt")
    parser.add_argument(
        "--presets", type=Path, default=None,
        help="YAML preset file (default: shipped standard presets)",
    )
    parser.add_argument(
        "--log-level", default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Emit structured JSON logs to stderr at this level",
    )
    args = parser.parse_args(argv)

    if args.log_level:
        configure_logging(level=getattr(logging, args.log_level))

    try:
        with LogContext.bind(receipt_id="demo-basket"):
            presets = get_active_presets(args.presets)
            receipt = build_basket(presets)
            print(render_receipt(receipt))
    except (ReceiptTaxError, OSError, yaml.YAMLError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
