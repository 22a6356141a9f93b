# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Global pytest configuration.
"""

import os
import sys
import pytest
import numpy as np

# Add the project root to the Python path so tests can import modules properly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


def make_sine(frequency, sample_rate, num_samples, amplitude=1.0, phase_deg=0.0):
    """Sampled sine wave with a phase offset in degrees."""
    t = np.arange(num_samples) / sample_rate
    return amplitude * np.sin(2 * np.pi * frequency * t + np.radians(phase_deg))


@pytest.fixture
def rng():
    """Seeded random generator for reproducible inputs."""
    return np.random.RandomState(42)


@pytest.fixture
def sine_50hz():
    """1000 samples of a 50 Hz unit sine sampled at 1000 Hz."""
    return make_sine(50.0, 1000.0, 1000), 1000.0


@pytest.fixture
def two_tone_signal():
    """Two seconds of 1000 Hz + 0.5 * 2000 Hz sampled at 8192 Hz."""
    sample_rate = 8192.0
    t = np.arange(int(2 * sample_rate)) / sample_rate
    signal = np.sin(2 * np.pi * 1000 * t) + 0.5 * np.sin(2 * np.pi * 2000 * t)
    return signal, sample_rate


@pytest.fixture
def temp_output_dir(tmp_path):
    """Fixture to provide a temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir
