# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Signal loading from CSV, TXT and JSON files.

Parsed data is validated and capped at ``max_samples`` samples; longer input
is truncated with a logged warning rather than rejected.
"""

import json
import math
import os
import re
from numbers import Number
from typing import Any, List, Sequence

import numpy as np

from .config import DEFAULT_MAX_SAMPLES
from .log import get_logger

logger = get_logger("SignalLoader")

SUPPORTED_EXTENSIONS = ("csv", "txt", "json")


def _to_float(token: str) -> float:
    # float() accepts "inf" and overflows "1e999" to inf; treat both as non-numeric
    try:
        value = float(token)
    except ValueError:
        return math.nan
    return value if math.isfinite(value) else math.nan


def parse_csv(content: str) -> List[float]:
    """
    Parse CSV text. The last column of each row is taken as the sample
    value; rows that do not parse as a number (headers, blanks) are skipped.
    """
    values = []
    for line in content.strip().splitlines():
        value = _to_float(line.strip().split(',')[-1])
        if not math.isnan(value):
            values.append(value)
    return values


def parse_txt(content: str) -> List[float]:
    """Parse whitespace-separated numbers, skipping non-numeric tokens."""
    values = []
    for token in re.split(r"\s+", content.strip()):
        value = _to_float(token)
        if not math.isnan(value):
            values.append(value)
    return values


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    if not _is_number(value):
        return False
    try:
        return math.isfinite(float(value))
    except (OverflowError, TypeError):
        return False


def parse_json(content: str) -> List[float]:
    """
    Parse JSON text holding a numeric array.

    Accepted layouts, in order of preference:
        - a list of numbers
        - a list of objects; the first numeric key of the first object is used
        - an object with a ``signal`` or ``data`` array
        - an object with any all-numeric array property
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Error parsing JSON: {e}") from e

    if isinstance(data, list) and data:
        if all(_is_number(item) for item in data):
            return list(data)
        if all(isinstance(item, dict) for item in data):
            numeric_key = next(
                (key for key, value in data[0].items() if _is_number(value)), None
            )
            if numeric_key is not None:
                return [item.get(numeric_key) for item in data]
    elif isinstance(data, dict):
        for key in ("signal", "data"):
            if isinstance(data.get(key), list):
                logger.info(f"Found {key} array in JSON: {len(data[key])} points")
                return data[key]
        for key, value in data.items():
            if isinstance(value, list) and value and all(_is_number(v) for v in value):
                logger.info(f'Found numeric array in property "{key}": {len(value)} points')
                return value

    raise ValueError("Error parsing JSON: no valid numeric array found")


def truncate_signal(signal: np.ndarray, max_samples: int = DEFAULT_MAX_SAMPLES) -> np.ndarray:
    """Cap a signal at max_samples samples, logging a warning when it is cut."""
    if len(signal) > max_samples:
        logger.warning(
            f"Data length ({len(signal)}) exceeds maximum ({max_samples}). Truncating."
        )
        return signal[:max_samples]
    return signal


def validate_data(data: Sequence[Any], max_samples: int = DEFAULT_MAX_SAMPLES) -> np.ndarray:
    """
    Validate parsed samples and convert them to a float64 array.

    Non-numeric, NaN and infinite entries are dropped with a warning. Empty input
    raises ValueError; input longer than max_samples is truncated.

    Args:
        data: Sequence of parsed values
        max_samples: Maximum number of samples kept

    Returns:
        1-D float64 array
    """
    if isinstance(data, (str, bytes)) or not isinstance(data, (list, tuple, np.ndarray)):
        raise ValueError("Invalid data format: expected array")
    if len(data) == 0:
        raise ValueError("Data array is empty")

    valid = [float(v) for v in data if _is_finite_number(v)]
    if len(valid) < len(data):
        logger.warning("Some invalid or non-finite numeric values were filtered out")
    if not valid:
        raise ValueError("No valid numeric data found")

    return truncate_signal(np.asarray(valid, dtype=np.float64), max_samples)


def load_signal(path: str, max_samples: int = DEFAULT_MAX_SAMPLES) -> np.ndarray:
    """
    Load a signal from a .csv, .txt or .json file.

    Args:
        path: File path
        max_samples: Maximum number of samples kept

    Returns:
        1-D float64 array of samples
    """
    if not os.path.exists(path):
        raise ValueError(f"Input file {path} not found")

    file_type = os.path.splitext(path)[1].lstrip('.').lower()
    if file_type not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported file type: {file_type}")

    with open(path, 'r') as f:
        content = f.read()

    if file_type == "csv":
        data = parse_csv(content)
    elif file_type == "txt":
        data = parse_txt(content)
    else:
        data = parse_json(content)

    if not data:
        raise ValueError(f"No valid numeric data found in {path}")

    signal = validate_data(data, max_samples)
    logger.info(f"Loaded {signal.size} samples from {path}")
    return signal
