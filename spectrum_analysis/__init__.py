# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Spectrum Analysis Module

This package provides a signal-processing pipeline for finite, in-memory,
real-valued signals.

Key components:
- Window functions (rectangular, Hamming, Hanning, Blackman, Kaiser approximation)
- Radix-2 FFT (iterative and recursive)
- Spectrum construction and peak detection
- Signal framing
- Spectral analysis (Welch PSD, spectrogram, cross-correlation, group delay)
- Signal generation and file loading
"""

from .windows import (
    WindowType,
    apply_window,
    window_coefficients
)

from .fft import (
    FFT,
    FFTAlgorithm,
    next_power_of_two,
    is_power_of_two
)

from .spectrum import (
    Spectrum,
    Peak,
    SpectrumBuilder
)

from .peaks import PeakDetector

from .framing import Framer

from .config import (
    AnalyzerConfig,
    PipelineConfig,
    load_config
)

from .analyzer import (
    SpectralAnalyzer,
    SpectrumResult,
    PSDResult,
    SpectrogramResult,
    GroupDelayResult,
    magnitude_to_db,
    compute_spectrum,
    compute_psd,
    compute_spectrogram,
    compute_cross_correlation,
    compute_group_delay
)

from .generator import (
    WaveType,
    generate_signal,
    generate_multi_sine,
    generate_time_points
)

from .loader import (
    load_signal,
    validate_data,
    truncate_signal
)

# Version information
__version__ = '0.1.0'
