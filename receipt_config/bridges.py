"""
Config -> Engine Bridges.

Turns parsed preset definitions into engine rules.  These live in
receipt_config (the producer) because the engines must NEVER import
receipt_config.

Usage:
    from receipt_config.bridges import build_presets
    from receipt_config.loader import load_presets_file

    presets = build_presets(load_presets_file(path))
"""

from __future__ import annotations

from receipt_kernel.domain.rounding import RoundingPolicy
from receipt_engines.presets import TaxPresets
from receipt_engines.rules import BracketRateRule, FlatRateRule, TaxBracket, TaxRule
from receipt_config.schema import PresetDef, TaxPresetsDef


def build_rule(preset: PresetDef, rounding: RoundingPolicy) -> TaxRule:
    """Build the engine rule for one preset definition."""
    if preset.is_bracket:
        return BracketRateRule(
            brackets=tuple(TaxBracket(b.threshold, b.rate) for b in preset.brackets),
            name=preset.key,
            rounding=rounding,
        )
    return FlatRateRule(preset.rate, name=preset.key, rounding=rounding)


def build_presets(definition: TaxPresetsDef) -> TaxPresets:
    """
    Build an engine preset table.

    Raises:
        ParseError: for malformed or float decimal values.
        InvalidRateError / InvalidIncrementError: for unacceptable values.
    """
    rounding = RoundingPolicy(definition.rounding_increment)
    return TaxPresets({p.key: build_rule(p, rounding) for p in definition.presets})
