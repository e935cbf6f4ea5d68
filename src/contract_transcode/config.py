# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the ``.contract-transcode.yaml`` settings file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from contract_transcode.errors import ConfigError
from contract_transcode.transcoder import TranscoderOptions

CONFIG_FILE_NAME = ".contract-transcode.yaml"

OUTPUT_FORMATS = ("literal", "json")

# ###############
# Public Interface
# ###############


@dataclass
class TranscodeConfig:
    """Settings of the command-line tool.

    Attributes:
        case_insensitive_variants: Match variant names case-insensitively when
            no case matches exactly.
        output_format: How decoded values are printed, ``literal`` or ``json``.
        max_suggestions: Number of close names reported for an unknown name.
    """

    case_insensitive_variants: bool = True
    output_format: str = "literal"
    max_suggestions: int = 3

    def transcoder_options(self) -> TranscoderOptions:
        return TranscoderOptions(
            case_insensitive_variants=self.case_insensitive_variants,
            max_suggestions=self.max_suggestions,
        )


def load_config(path: Path) -> TranscodeConfig:
    """Load and parse a settings file.

    Args:
        path: Path to the ``.contract-transcode.yaml`` file.

    Returns:
        A TranscodeConfig populated from the file; unset keys keep their defaults.

    Raises:
        ConfigError: If the file cannot be read or the settings are invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def find_config(directory: Path) -> Path | None:
    """Return the settings file in *directory*, if there is one."""
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"case-insensitive-variants", "output-format", "max-suggestions"})


def _parse_config(text: str, source_label: str = "<string>") -> TranscodeConfig:
    """Parse settings YAML text into a TranscodeConfig.

    An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is invalid, a key is unknown or a value has
            the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return TranscodeConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown setting(s): {', '.join(unknown)}")

    config = TranscodeConfig()
    if "case-insensitive-variants" in data:
        config.case_insensitive_variants = _require_bool(data, "case-insensitive-variants", source_label)
    if "output-format" in data:
        output_format = data["output-format"]
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"{source_label}: 'output-format' must be one of: {', '.join(OUTPUT_FORMATS)}")
        config.output_format = output_format
    if "max-suggestions" in data:
        max_suggestions = data["max-suggestions"]
        if isinstance(max_suggestions, bool) or not isinstance(max_suggestions, int) or max_suggestions < 0:
            raise ConfigError(f"{source_label}: 'max-suggestions' must be a non-negative integer")
        config.max_suggestions = max_suggestions
    return config


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be true or false")
    return value
