"""
Configuration Loader (``receipt_config.loader``).

Responsibility
--------------
Loads YAML preset files and parses them into typed
``receipt_config.schema`` dataclass instances.  Runtime callers go
through ``receipt_config.get_active_presets()`` instead.

Invariants enforced
-------------------
* Parse errors raise ``ConfigurationError`` naming the offending key; no
  silent defaults for required fields.
* Decimal values must be written as strings or ints.  A YAML float
  (an unquoted ``0.18``) is rejected with ``ParseError`` by the bridge.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong document shape  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from receipt_kernel.exceptions import ConfigurationError
from receipt_config.schema import BracketDef, PresetDef, TaxPresetsDef

DEFAULT_ROUNDING_INCREMENT = "0.05"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return data


def parse_bracket(data: Any) -> BracketDef:
    """Parse a bracket from ``[threshold, rate]`` or ``{threshold:, rate:}``."""
    if isinstance(data, dict):
        try:
            return BracketDef(threshold=data["threshold"], rate=data["rate"])
        except KeyError as e:
            raise ConfigurationError(f"Bracket is missing {e.args[0]!r}") from None
    if isinstance(data, (list, tuple)) and len(data) == 2:
        return BracketDef(threshold=data[0], rate=data[1])
    raise ConfigurationError(f"Cannot parse bracket from {data!r}")


def parse_preset(key: str, data: Any) -> PresetDef:
    """
    Parse one preset entry.

    A scalar is a flat rate; a mapping holds either ``rate`` or
    ``brackets``.
    """
    if not isinstance(data, dict):
        return PresetDef(key=key, rate=data)

    has_rate = "rate" in data
    has_brackets = "brackets" in data
    if has_rate == has_brackets:
        raise ConfigurationError(
            f"Preset {key!r} must define exactly one of 'rate' or 'brackets'"
        )
    if has_rate:
        return PresetDef(key=key, rate=data["rate"])
    brackets = data["brackets"]
    if not isinstance(brackets, list) or not brackets:
        raise ConfigurationError(f"Preset {key!r}: 'brackets' must be a non-empty list")
    return PresetDef(key=key, brackets=tuple(parse_bracket(b) for b in brackets))


def parse_presets_document(data: dict[str, Any]) -> TaxPresetsDef:
    """
    Parse a whole preset document.

    Raises:
        ConfigurationError: if ``presets`` is missing or not a mapping.
    """
    presets = data.get("presets")
    if not isinstance(presets, dict) or not presets:
        raise ConfigurationError("Preset file must define a non-empty 'presets' mapping")

    return TaxPresetsDef(
        rounding_increment=data.get("rounding_increment", DEFAULT_ROUNDING_INCREMENT),
        presets=tuple(parse_preset(str(k), v) for k, v in presets.items()),
        checksum=compute_checksum(data),
    )


def load_presets_file(path: Path) -> TaxPresetsDef:
    """Load and parse a YAML preset file."""
    return parse_presets_document(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
