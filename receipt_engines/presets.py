"""
Standard tax presets.

Three flat-rate rules cover the ordinary receipt: sales tax (18%),
import duty (3%) and eco tax (5%), all rounded up to 0.05.  A TaxPresets
table maps preset keys to rules; ItemBuilder reads from one.  Alternative
tables are loaded from YAML by receipt_config.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from receipt_kernel.exceptions import UnknownPresetError
from receipt_engines.rules import FlatRateRule, TaxRule

SALES = "sales"
IMPORT = "import"
ECO = "eco"

# Order used by ItemBuilder.add_all_standard_taxes()
STANDARD_KEYS = (SALES, IMPORT, ECO)

SALES_TAX = FlatRateRule(Decimal("0.18"), name=SALES)
IMPORT_TAX = FlatRateRule(Decimal("0.03"), name=IMPORT)
ECO_TAX = FlatRateRule(Decimal("0.05"), name=ECO)


@dataclass(frozen=True)
class TaxPresets(Mapping[str, TaxRule]):
    """Read-only table of named rules."""

    rules: Mapping[str, TaxRule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", dict(self.rules))

    def __getitem__(self, key: str) -> TaxRule:
        try:
            return self.rules[key]
        except KeyError:
            raise UnknownPresetError(key, sorted(self.rules)) from None

    def __contains__(self, key: object) -> bool:
        return key in self.rules

    def get(self, key: str, default: TaxRule | None = None) -> TaxRule | None:
        return self.rules.get(key, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __hash__(self) -> int:
        return hash(tuple(self.rules.items()))

    def standard(self) -> tuple[TaxRule, ...]:
        """Sales, import and eco rules, in that order."""
        return tuple(self[key] for key in STANDARD_KEYS)


DEFAULT_PRESETS = TaxPresets({SALES: SALES_TAX, IMPORT: IMPORT_TAX, ECO: ECO_TAX})
