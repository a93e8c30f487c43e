"""
receipt_config -- public entrypoints for tax preset configuration.

Responsibility:
    Provides the ways to obtain preset tables: ``get_active_presets()`` for
    runtime use (traced) and ``load_presets()`` for plain parsing.  YAML
    loading is internal tooling; callers receive an engine ``TaxPresets``
    table ready for ``ItemBuilder``.

Architecture position:
    Configuration -- YAML-driven presets.  Sits above ``receipt_kernel``
    and ``receipt_engines``; neither of them may import this package.

Failure modes:
    - ``FileNotFoundError`` -- the preset file does not exist.
    - ``yaml.YAMLError`` -- invalid YAML syntax.
    - ``ConfigurationError`` -- wrong document shape, bad increment or rate.
    - ``ParseError`` -- malformed or unquoted-float decimal values.

Audit relevance:
    Every successful call emits a ``RECEIPT_CONFIG_TRACE`` log entry with
    the source path, checksum and preset keys, tying computed receipts
    back to the exact preset file that priced them.
"""

from __future__ import annotations

from pathlib import Path

from receipt_kernel.logging_config import get_logger
from receipt_engines.presets import TaxPresets
from receipt_config.bridges import build_presets
from receipt_config.loader import load_presets_file

_logger = get_logger("config")

# Default preset file shipped with the package
DEFAULT_PRESETS_PATH = Path(__file__).parent / "defaults" / "standard_presets.yaml"


def get_active_presets(path: Path | str | None = None) -> TaxPresets:
    """Runtime configuration entrypoint.

    Args:
        path: Preset file to load.  Defaults to the shipped
            ``defaults/standard_presets.yaml`` (sales 18%, import 3%,
            eco 5%, increment 0.05).

    Returns:
        TaxPresets table for ``ItemBuilder(presets=...)``.
    """
    source = Path(path) if path is not None else DEFAULT_PRESETS_PATH
    definition = load_presets_file(source)
    presets = build_presets(definition)

    _logger.info(
        "RECEIPT_CONFIG_TRACE",
        extra={
            "trace_type": "RECEIPT_CONFIG_TRACE",
            "source": str(source),
            "checksum": definition.checksum,
            "rounding_increment": str(definition.rounding_increment),
            "preset_keys": list(presets),
        },
    )
    return presets


def load_presets(path: Path | str) -> TaxPresets:
    """Parse a preset file into a TaxPresets table.  Emits no trace."""
    return build_presets(load_presets_file(Path(path)))


__all__ = ["DEFAULT_PRESETS_PATH", "get_active_presets", "load_presets"]
