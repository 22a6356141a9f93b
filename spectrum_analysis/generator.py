# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Test signal generation: sine, square, triangle, sawtooth and multi-sine.
"""

import numpy as np
from enum import Enum
from typing import Iterable, Mapping, Tuple, Union


class WaveType(Enum):
    """Periodic waveform shapes"""
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"


def _check_timing(duration: float, sample_rate: float) -> None:
    if duration <= 0:
        raise ValueError(f"duration must be > 0, got {duration}")
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be > 0, got {sample_rate}")


def generate_time_points(duration: float, sample_rate: float) -> np.ndarray:
    """
    Generate sample times for a signal.

    Args:
        duration: Duration in seconds
        sample_rate: Sample rate in Hz

    Returns:
        numpy.ndarray: floor(duration * sample_rate) evenly spaced times
    """
    _check_timing(duration, sample_rate)
    num_points = int(np.floor(duration * sample_rate))
    if num_points == 0:
        raise ValueError("duration * sample_rate must be at least one sample")
    return np.arange(num_points) * (duration / num_points)


def generate_signal(
    wave_type: Union[WaveType, str],
    frequency: float,
    amplitude: float = 1.0,
    duration: float = 1.0,
    sample_rate: float = 1000.0,
    phase: float = 0.0
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate a periodic waveform.

    Args:
        wave_type: Waveform shape
        frequency: Frequency in Hz
        amplitude: Peak amplitude
        duration: Duration in seconds
        sample_rate: Sample rate in Hz
        phase: Phase offset in degrees (sine only)

    Returns:
        Tuple of (time points, signal)
    """
    if not isinstance(wave_type, WaveType):
        try:
            wave_type = WaveType(str(wave_type).lower())
        except ValueError:
            raise ValueError(f"Unsupported wave type: {wave_type}") from None
    if frequency <= 0:
        raise ValueError(f"frequency must be > 0, got {frequency}")

    t = generate_time_points(duration, sample_rate)
    period = 1.0 / frequency
    # Position within the current period, in [0, 1)
    cycle = np.mod(t, period) / period

    if wave_type == WaveType.SINE:
        signal = amplitude * np.sin(2 * np.pi * frequency * t + np.radians(phase))
    elif wave_type == WaveType.SQUARE:
        signal = amplitude * np.where(cycle < 0.5, 1.0, -1.0)
    elif wave_type == WaveType.TRIANGLE:
        signal = amplitude * np.select(
            [cycle < 0.25, cycle < 0.75],
            [4 * cycle, 2 - 4 * cycle],
            -4 + 4 * cycle
        )
    else:
        signal = amplitude * (2 * cycle - 1)

    return t, signal


def generate_multi_sine(
    components: Iterable[Mapping[str, float]],
    duration: float = 1.0,
    sample_rate: float = 1000.0
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate a sum of sinusoids.

    Args:
        components: Mappings with ``frequency``, ``amplitude`` and optional
            ``phase`` (degrees)
        duration: Duration in seconds
        sample_rate: Sample rate in Hz

    Returns:
        Tuple of (time points, signal)
    """
    components = list(components)
    if not components:
        raise ValueError("At least one frequency component is required")

    t = generate_time_points(duration, sample_rate)
    signal = np.zeros_like(t)
    for component in components:
        frequency = component["frequency"]
        if frequency <= 0:
            raise ValueError(f"frequency must be > 0, got {frequency}")
        amplitude = component.get("amplitude", 1.0)
        phase = np.radians(component.get("phase", 0.0))
        signal += amplitude * np.sin(2 * np.pi * frequency * t + phase)

    return t, signal
