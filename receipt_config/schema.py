"""
Tax preset configuration schema.

Defines the human-authored source artifact for tax presets.  YAML files
are parsed into these types by the loader and turned into engine rules by
the bridges.

Values are kept as the exact strings (or ints) found in the file; they
become Decimals only in the bridge, through the kernel's parse_decimal.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BracketDef:
    """One (threshold, rate) band of a bracket preset."""

    threshold: str | int
    rate: str | int


@dataclass(frozen=True)
class PresetDef:
    """
    A named preset.

    Exactly one of rate (flat-rate rule) or brackets (bracket rule) is set.
    """

    key: str
    rate: str | int | None = None
    brackets: tuple[BracketDef, ...] = ()

    @property
    def is_bracket(self) -> bool:
        return bool(self.brackets)


@dataclass(frozen=True)
class TaxPresetsDef:
    """A full preset file: rounding increment plus named presets."""

    rounding_increment: str | int
    presets: tuple[PresetDef, ...]
    checksum: str = ""
