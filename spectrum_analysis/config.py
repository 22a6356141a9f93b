# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Configuration for the spectrum analysis pipeline.

Analyzer settings are immutable values passed into each call, so one
analyzer can be shared between threads. Settings can also be read from a
YAML or JSON file:

    analyzer:
      psd_frame_size: 2048
      psd_overlap: 0.5
      spectrogram_frame_size: 512
      spectrogram_overlap: 0.9
    window: hanning
    peak_threshold_percent: 10.0
    max_samples: 1000000
    max_correlation_samples: 16384
"""

import json
import math
import numbers
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

import yaml

from .windows import WindowType

DEFAULT_MAX_SAMPLES = 1_000_000
DEFAULT_MAX_CORRELATION_SAMPLES = 16384
DB_FLOOR = -100.0
MAGNITUDE_EPSILON = 1e-10


def _require_real(owner, name: str) -> float:
    value = getattr(owner, name)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return value


def _require_int(owner, name: str, minimum: int) -> int:
    # Whole floats such as 1e6 from YAML are stored as int
    value = _require_real(owner, name)
    if not math.isfinite(value) or int(value) != value or value < minimum:
        raise ValueError(f"{name} must be an integer >= {minimum}, got {value!r}")
    object.__setattr__(owner, name, int(value))
    return int(value)


@dataclass(frozen=True)
class AnalyzerConfig:
    """Framing and numeric settings for SpectralAnalyzer."""

    psd_frame_size: int = 2048
    psd_overlap: float = 0.5
    spectrogram_frame_size: int = 512
    spectrogram_overlap: float = 0.9
    db_floor: float = DB_FLOOR
    magnitude_epsilon: float = MAGNITUDE_EPSILON
    unwrap_phase: bool = False
    max_workers: int = 1

    def __post_init__(self):
        for name in ("psd_frame_size", "spectrogram_frame_size", "max_workers"):
            _require_int(self, name, 1)
        for name in ("psd_overlap", "spectrogram_overlap"):
            value = _require_real(self, name)
            if not 0.0 <= value < 1.0:
                raise ValueError(f"{name} must be in [0, 1), got {value}")
        _require_real(self, "db_floor")
        if _require_real(self, "magnitude_epsilon") <= 0:
            raise ValueError("magnitude_epsilon must be > 0")
        if not isinstance(self.unwrap_phase, bool):
            raise ValueError(f"unwrap_phase must be true or false, got {self.unwrap_phase!r}")

    def with_overrides(self, **overrides: Any) -> "AnalyzerConfig":
        """Return a copy with some fields replaced"""
        return replace(self, **overrides)


@dataclass(frozen=True)
class PipelineConfig:
    """Top-level settings consumed by the command-line tool."""

    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    window: WindowType = WindowType.NONE
    peak_threshold_percent: float = 10.0
    max_samples: int = DEFAULT_MAX_SAMPLES
    max_correlation_samples: int = DEFAULT_MAX_CORRELATION_SAMPLES

    def __post_init__(self):
        # Accept selector strings from config files
        object.__setattr__(self, "window", WindowType.from_name(self.window))
        if not isinstance(self.analyzer, AnalyzerConfig):
            raise ValueError("analyzer must be an AnalyzerConfig")
        if not 0.0 <= _require_real(self, "peak_threshold_percent") <= 100.0:
            raise ValueError(
                f"peak_threshold_percent must be in [0, 100], got {self.peak_threshold_percent}"
            )
        _require_int(self, "max_samples", 1)
        _require_int(self, "max_correlation_samples", 1)


def _check_keys(section: str, data: Dict[str, Any], cls) -> None:
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {section} configuration keys: {sorted(unknown)}")


def config_from_dict(data: Optional[Dict[str, Any]]) -> PipelineConfig:
    """
    Build a PipelineConfig from a plain dictionary.

    Args:
        data: Parsed configuration mapping (may be None or empty)

    Returns:
        PipelineConfig with defaults for any missing values
    """
    data = dict(data or {})
    _check_keys("pipeline", data, PipelineConfig)

    analyzer_data = data.pop("analyzer", None) or {}
    if not isinstance(analyzer_data, dict):
        raise ValueError("'analyzer' configuration must be a mapping")
    _check_keys("analyzer", analyzer_data, AnalyzerConfig)

    return PipelineConfig(analyzer=AnalyzerConfig(**analyzer_data), **data)


def load_config(config_file: str) -> PipelineConfig:
    """
    Load pipeline configuration from a YAML or JSON file.

    Args:
        config_file: Path to a .yaml, .yml or .json file

    Returns:
        Parsed PipelineConfig
    """
    if not os.path.exists(config_file):
        raise ValueError(f"Configuration file not found: {config_file}")

    with open(config_file, 'r') as f:
        if config_file.endswith('.json'):
            data = json.load(f)
        elif config_file.endswith(('.yaml', '.yml')):
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Error loading configuration from {config_file}: {e}") from e
        else:
            raise ValueError(f"Unsupported config file format: {config_file}")

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Configuration file {config_file} must contain a mapping")

    return config_from_dict(data)
