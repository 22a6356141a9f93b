# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Tests for spectrum construction and peak detection.
"""

import numpy as np
import pytest

from conftest import make_sine
from spectrum_analysis.peaks import PeakDetector
from spectrum_analysis.spectrum import Peak, Spectrum, SpectrumBuilder
from spectrum_analysis.windows import WindowType


def spectrum_from_magnitudes(magnitudes):
    """Spectrum with the given magnitudes on a 1 Hz grid."""
    magnitudes = np.asarray(magnitudes, dtype=float)
    n = magnitudes.size
    return Spectrum(
        frequencies=np.arange(n, dtype=float),
        magnitudes=magnitudes,
        phases=np.zeros(n),
        sample_rate=2.0 * n,
        transform_length=2 * n
    )


class TestSpectrumBuilder:
    @pytest.mark.parametrize("num_samples", [1, 2, 3, 100, 512, 1000, 1025])
    def test_output_length_is_half_padded_length(self, num_samples, rng):
        spectrum = SpectrumBuilder().build(rng.randn(num_samples), WindowType.HAMMING, 100.0)
        padded = 1 << max(0, (num_samples - 1).bit_length())
        assert spectrum.transform_length == padded
        assert len(spectrum.frequencies) == len(spectrum.magnitudes) == len(spectrum.phases)
        assert len(spectrum) == padded // 2

    def test_frequency_axis(self, rng):
        spectrum = SpectrumBuilder().build(rng.randn(300), WindowType.NONE, 1000.0)
        spacing = 1000.0 / 512
        assert spectrum.frequencies[0] == 0.0
        assert np.allclose(np.diff(spectrum.frequencies), spacing)
        assert spectrum.bin_spacing == pytest.approx(spacing)

    def test_exact_bin_sine_magnitude_and_phase(self):
        sample_rate = 1024.0
        signal = make_sine(64.0, sample_rate, 1024, amplitude=3.0, phase_deg=30.0)
        spectrum = SpectrumBuilder().build(signal, WindowType.NONE, sample_rate)

        peak_bin = int(np.argmax(spectrum.magnitudes))
        assert spectrum.frequencies[peak_bin] == pytest.approx(64.0)
        assert spectrum.magnitudes[peak_bin] == pytest.approx(1.5, rel=1e-9)
        # sin(x + phi) = cos(x + phi - 90 deg)
        assert spectrum.phases[peak_bin] == pytest.approx(30.0 - 90.0, abs=1e-6)

    def test_phase_range(self, rng):
        spectrum = SpectrumBuilder().build(rng.randn(256), WindowType.NONE, 1.0)
        assert np.all(spectrum.phases > -180.0)
        assert np.all(spectrum.phases <= 180.0)
        assert np.all(spectrum.magnitudes >= 0.0)

    def test_deterministic(self, rng):
        signal = rng.randn(700)
        first = SpectrumBuilder().build(signal, WindowType.BLACKMAN, 10.0)
        second = SpectrumBuilder().build(signal, WindowType.BLACKMAN, 10.0)
        assert np.array_equal(first.magnitudes, second.magnitudes)
        assert np.array_equal(first.phases, second.phases)

    def test_invalid_input(self):
        builder = SpectrumBuilder()
        with pytest.raises(ValueError):
            builder.build([], WindowType.NONE, 1.0)
        with pytest.raises(ValueError):
            builder.build([1.0, 2.0], WindowType.NONE, 0.0)
        with pytest.raises(ValueError):
            builder.build([1.0, 2.0], WindowType.NONE, -10.0)
        with pytest.raises(ValueError):
            builder.build(np.ones((4, 4)), WindowType.NONE, 1.0)


class TestPeakDetector:
    def test_local_maxima_above_threshold(self):
        spectrum = spectrum_from_magnitudes([0, 5, 1, 2, 1, 10, 3, 0.5, 0.6, 0])
        peaks = PeakDetector().detect(spectrum, 10.0)
        assert [p.bin_index for p in peaks] == [5, 1, 3]
        assert all(isinstance(p, Peak) for p in peaks)
        assert peaks[0].frequency == 5.0
        assert peaks[0].magnitude == 10.0

    def test_threshold_filters_small_peaks(self):
        spectrum = spectrum_from_magnitudes([0, 5, 1, 2, 1, 10, 3, 0.5, 0.6, 0])
        peaks = PeakDetector().detect(spectrum, 40.0)
        assert [p.bin_index for p in peaks] == [5, 1]

    def test_boundary_bins_never_peaks(self):
        spectrum = spectrum_from_magnitudes([10, 1, 2, 1, 10])
        peaks = PeakDetector().detect(spectrum, 0.0)
        assert [p.bin_index for p in peaks] == [2]

    def test_plateau_yields_no_peak(self):
        spectrum = spectrum_from_magnitudes([0, 1, 3, 3, 1, 0])
        assert PeakDetector().detect(spectrum, 0.0) == []

    def test_equal_peaks_keep_bin_order(self):
        spectrum = spectrum_from_magnitudes([0, 4, 0, 7, 0, 4, 0, 4, 0])
        peaks = PeakDetector().detect(spectrum, 0.0)
        assert [p.bin_index for p in peaks] == [3, 1, 5, 7]

    def test_all_zero_spectrum_has_no_peaks(self):
        assert PeakDetector().detect(spectrum_from_magnitudes(np.zeros(32)), 10.0) == []

    def test_tiny_spectrum(self):
        assert PeakDetector().detect(spectrum_from_magnitudes([1.0, 2.0]), 0.0) == []

    def test_random_spectra_properties(self, rng):
        detector = PeakDetector()
        for _ in range(20):
            magnitudes = np.abs(rng.randn(64))
            peaks = detector.detect(spectrum_from_magnitudes(magnitudes), 20.0)
            indices = [p.bin_index for p in peaks]
            assert 0 not in indices
            assert 63 not in indices
            values = [p.magnitude for p in peaks]
            assert all(a >= b for a, b in zip(values, values[1:]))

    def test_sine_has_single_peak(self, sine_50hz):
        signal, sample_rate = sine_50hz
        spectrum = SpectrumBuilder().build(signal, WindowType.NONE, sample_rate)
        peaks = PeakDetector().detect(spectrum, 10.0)
        assert len(peaks) == 1
        assert abs(peaks[0].frequency - 50.0) < 1.0
