# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Tests for test-signal generation.
"""

import numpy as np
import pytest

from spectrum_analysis.generator import (
    WaveType,
    generate_multi_sine,
    generate_signal,
    generate_time_points
)


class TestTimePoints:
    def test_count_and_spacing(self):
        t = generate_time_points(2.0, 100.0)
        assert t.size == 200
        assert t[0] == 0.0
        assert np.allclose(np.diff(t), 0.01)

    @pytest.mark.parametrize("duration,sample_rate", [(0.0, 100.0), (1.0, 0.0), (-1.0, 10.0), (0.001, 10.0)])
    def test_invalid(self, duration, sample_rate):
        with pytest.raises(ValueError):
            generate_time_points(duration, sample_rate)


class TestGenerateSignal:
    def test_sine(self):
        t, signal = generate_signal(WaveType.SINE, 5.0, amplitude=2.0, duration=1.0, sample_rate=1000.0)
        assert np.allclose(signal, 2.0 * np.sin(2 * np.pi * 5.0 * t))

    def test_sine_phase_in_degrees(self):
        _, signal = generate_signal("sine", 5.0, phase=90.0, duration=1.0, sample_rate=100.0)
        assert signal[0] == pytest.approx(1.0)

    def test_square_levels(self):
        _, signal = generate_signal("square", 10.0, amplitude=3.0, duration=1.0, sample_rate=1000.0)
        assert set(np.unique(signal)) == {-3.0, 3.0}
        assert signal[0] == 3.0

    def test_triangle_range(self):
        t, signal = generate_signal("triangle", 4.0, duration=1.0, sample_rate=400.0)
        assert signal.max() == pytest.approx(1.0)
        assert signal.min() == pytest.approx(-1.0)
        assert signal[0] == pytest.approx(0.0)

    def test_sawtooth_range(self):
        _, signal = generate_signal(WaveType.SAWTOOTH, 2.0, duration=1.0, sample_rate=100.0)
        assert signal[0] == pytest.approx(-1.0)
        assert np.all(signal >= -1.0)
        assert np.all(signal <= 1.0)

    def test_unknown_wave(self):
        with pytest.raises(ValueError, match="Unsupported wave type"):
            generate_signal("noise", 5.0)

    def test_invalid_frequency(self):
        with pytest.raises(ValueError):
            generate_signal("sine", 0.0)


class TestMultiSine:
    def test_sum_of_components(self):
        components = [
            {"frequency": 5.0, "amplitude": 1.0},
            {"frequency": 12.0, "amplitude": 0.5, "phase": 45.0},
        ]
        t, signal = generate_multi_sine(components, duration=1.0, sample_rate=200.0)
        expected = np.sin(2 * np.pi * 5 * t) + 0.5 * np.sin(2 * np.pi * 12 * t + np.pi / 4)
        assert np.allclose(signal, expected)

    def test_requires_components(self):
        with pytest.raises(ValueError):
            generate_multi_sine([], duration=1.0, sample_rate=100.0)
