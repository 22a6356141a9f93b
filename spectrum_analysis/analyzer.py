# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Spectral Analysis Module

This module provides the spectral analysis routines built on the radix-2
FFT: single-shot spectrum with peak extraction, Welch power spectral
density, short-time spectrogram, brute-force cross-correlation and group
delay.
"""

import numpy as np
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from .config import AnalyzerConfig, DEFAULT_MAX_SAMPLES
from .fft import FFT, next_power_of_two
from .framing import Framer
from .loader import truncate_signal
from .log import get_logger
from .peaks import PeakDetector
from .spectrum import Peak, SpectrumBuilder, validate_sample_rate, validate_signal
from .windows import WindowType, apply_window


@dataclass(frozen=True, eq=False)
class SpectrumResult:
    """Spectrum arrays plus detected peaks"""
    frequencies: np.ndarray
    magnitudes: np.ndarray
    phases: np.ndarray
    peaks: List[Peak]


@dataclass(frozen=True, eq=False)
class PSDResult:
    """Welch power spectral density estimate"""
    frequencies: np.ndarray
    psd: np.ndarray
    frame_count: int


@dataclass(frozen=True, eq=False)
class SpectrogramResult:
    """Time x frequency magnitude grid in dB"""
    matrix: np.ndarray
    frequencies: np.ndarray
    frame_count: int
    time_resolution: float


@dataclass(frozen=True, eq=False)
class GroupDelayResult:
    """Finite-difference group delay in seconds"""
    frequencies: np.ndarray
    group_delay: np.ndarray


def magnitude_to_db(
    magnitudes: np.ndarray,
    floor_db: float = -100.0,
    epsilon: float = 1e-10
) -> np.ndarray:
    """Convert magnitudes to dB, clamping to floor_db

    Magnitudes at or below ``epsilon`` map to ``floor_db`` and no value is
    returned below ``floor_db``.
    """
    magnitudes = np.asarray(magnitudes, dtype=np.float64)
    db = 20.0 * np.log10(np.maximum(magnitudes, epsilon))
    db = np.where(magnitudes <= epsilon, floor_db, db)
    return np.maximum(db, floor_db)


class SpectralAnalyzer:
    """Spectral analysis for signal processing

    This class provides functions for spectral analysis, including:
    - Spectrum with peak detection
    - Power Spectral Density (PSD) estimation
    - Spectrogram computation
    - Cross-correlation
    - Group delay

    The analyzer keeps no per-call state. Each method takes an optional
    ``config`` that overrides the one given at construction, so a single
    instance can be shared between threads.

    Parameters
    ----------
    config : AnalyzerConfig, optional
        Default settings, by default AnalyzerConfig()
    fft : FFT, optional
        Transform engine, by default an iterative radix-2 FFT
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        fft: Optional[FFT] = None,
        logger=None
    ):
        self.config = config or AnalyzerConfig()
        self.fft = fft or FFT()
        self.framer = Framer()
        self.builder = SpectrumBuilder(self.fft)
        self.peak_detector = PeakDetector()
        self.logger = logger or get_logger("SpectralAnalyzer")

    def _frame_spectra(
        self,
        frames: np.ndarray,
        transform_length: int,
        config: AnalyzerConfig
    ) -> np.ndarray:
        """Hanning-window and FFT every frame, keeping bins [0, P/2)"""
        half = transform_length // 2

        def transform(frame: np.ndarray) -> np.ndarray:
            buffer = np.zeros(transform_length, dtype=np.complex128)
            buffer[:frame.size] = apply_window(frame, WindowType.HANNING)
            return self.fft.forward(buffer)[:half]

        if config.max_workers > 1 and len(frames) > 1:
            # map() yields in submission order, so rows stay in frame order
            with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
                rows = list(executor.map(transform, frames))
        else:
            rows = [transform(frame) for frame in frames]

        if not rows:
            return np.zeros((0, half), dtype=np.complex128)
        return np.vstack(rows)

    def compute_spectrum(
        self,
        signal: np.ndarray,
        window_type: Optional[WindowType] = WindowType.NONE,
        sample_rate: float = 1.0,
        peak_threshold_percent: float = 10.0
    ) -> SpectrumResult:
        """Compute the spectrum of a signal and its peaks

        Parameters
        ----------
        signal : np.ndarray
            Input signal
        window_type : WindowType, optional
            Window function type, by default WindowType.NONE
        sample_rate : float, optional
            Sample rate in Hz, by default 1.0
        peak_threshold_percent : float, optional
            Peak threshold relative to the largest magnitude, by default 10.0

        Returns
        -------
        SpectrumResult
            Frequencies, magnitudes, phases (degrees) and peaks
        """
        spectrum = self.builder.build(signal, window_type, sample_rate)
        peaks = self.peak_detector.detect(spectrum, peak_threshold_percent)
        return SpectrumResult(
            frequencies=spectrum.frequencies,
            magnitudes=spectrum.magnitudes,
            phases=spectrum.phases,
            peaks=peaks
        )

    def compute_psd(
        self,
        signal: np.ndarray,
        sample_rate: float = 1.0,
        config: Optional[AnalyzerConfig] = None
    ) -> PSDResult:
        """Compute power spectral density using Welch's method

        Each Hanning-windowed frame contributes ``(|X| / P) ** 2`` per bin,
        and the periodograms are averaged bin-wise.

        Parameters
        ----------
        signal : np.ndarray
            Input signal
        sample_rate : float, optional
            Sample rate in Hz, by default 1.0
        config : AnalyzerConfig, optional
            Overrides the analyzer's configuration for this call

        Returns
        -------
        PSDResult
            Frequencies, averaged PSD and number of frames averaged
        """
        config = config or self.config
        signal = validate_signal(signal)
        sample_rate = validate_sample_rate(sample_rate)

        frames = self.framer.segment(signal, config.psd_frame_size, config.psd_overlap)
        transform_length = next_power_of_two(config.psd_frame_size)
        spectra = self._frame_spectra(frames, transform_length, config)

        power = (np.abs(spectra) / transform_length) ** 2
        psd = power.mean(axis=0)
        frequencies = np.arange(transform_length // 2) * sample_rate / transform_length

        self.logger.debug(f"PSD averaged over {len(frames)} frames of {transform_length} bins")
        return PSDResult(frequencies=frequencies, psd=psd, frame_count=len(frames))

    def compute_spectrogram(
        self,
        signal: np.ndarray,
        sample_rate: float = 1.0,
        config: Optional[AnalyzerConfig] = None
    ) -> SpectrogramResult:
        """Compute spectrogram of a signal

        Parameters
        ----------
        signal : np.ndarray
            Input signal
        sample_rate : float, optional
            Sample rate in Hz, by default 1.0
        config : AnalyzerConfig, optional
            Overrides the analyzer's configuration for this call

        Returns
        -------
        SpectrogramResult
            dB matrix of shape (frame_count, P/2), frequencies, frame count
            and seconds between rows
        """
        config = config or self.config
        signal = validate_signal(signal)
        sample_rate = validate_sample_rate(sample_rate)

        frame_size = config.spectrogram_frame_size
        frames = self.framer.segment(signal, frame_size, config.spectrogram_overlap)
        transform_length = next_power_of_two(frame_size)
        spectra = self._frame_spectra(frames, transform_length, config)

        matrix = magnitude_to_db(
            np.abs(spectra) / transform_length,
            floor_db=config.db_floor,
            epsilon=config.magnitude_epsilon
        )
        frequencies = np.arange(transform_length // 2) * sample_rate / transform_length
        time_resolution = frame_size * (1.0 - config.spectrogram_overlap) / sample_rate

        return SpectrogramResult(
            matrix=matrix,
            frequencies=frequencies,
            frame_count=len(frames),
            time_resolution=time_resolution
        )

    def compute_cross_correlation(
        self,
        signal_a: np.ndarray,
        signal_b: np.ndarray
    ) -> np.ndarray:
        """Compute the cross-correlation of two equal-length signals

        Direct summation over every lag; no FFT acceleration.
        ``result[lag + n - 1] = sum_i a[i] * b[i - lag]`` for lag in
        [-(n - 1), n - 1].

        Parameters
        ----------
        signal_a : np.ndarray
            First input signal
        signal_b : np.ndarray
            Second input signal

        Returns
        -------
        np.ndarray
            Correlation values of length 2n - 1, ordered by lag
        """
        a = validate_signal(signal_a, "signal_a")
        b = validate_signal(signal_b, "signal_b")
        if a.size != b.size:
            raise ValueError(
                f"Input signals must have the same length, got {a.size} and {b.size}"
            )

        n = a.size
        result = np.zeros(2 * n - 1, dtype=np.float64)
        for lag in range(-n + 1, n):
            if lag >= 0:
                result[lag + n - 1] = np.dot(a[lag:], b[:n - lag])
            else:
                result[lag + n - 1] = np.dot(a[:n + lag], b[-lag:])
        return result

    def compute_group_delay(
        self,
        signal: np.ndarray,
        sample_rate: float = 1.0,
        config: Optional[AnalyzerConfig] = None
    ) -> GroupDelayResult:
        """Compute group delay from the phase of one FFT of the signal

        ``gd[i] = -(phase[i + 1] - phase[i]) / (2 * pi * sample_rate / P)``
        where P is the padded transform length. Without unwrapping, values
        next to a +/-pi phase jump are not meaningful.

        Parameters
        ----------
        signal : np.ndarray
            Input signal
        sample_rate : float, optional
            Sample rate in Hz, by default 1.0
        config : AnalyzerConfig, optional
            Overrides the analyzer's configuration for this call

        Returns
        -------
        GroupDelayResult
            Frequencies and group delay (seconds), both of length P/2 - 1
        """
        config = config or self.config
        signal = validate_signal(signal)
        sample_rate = validate_sample_rate(sample_rate)

        result = self.fft.forward_real(signal)
        transform_length = result.size
        half = result[:transform_length // 2]

        phase = np.arctan2(half.imag, half.real)
        if config.unwrap_phase:
            phase = np.unwrap(phase)

        group_delay = -np.diff(phase) / (2 * np.pi * sample_rate / transform_length)
        frequencies = np.arange(group_delay.size) * sample_rate / transform_length

        return GroupDelayResult(frequencies=frequencies, group_delay=group_delay)


# Convenience functions

def compute_spectrum(
    signal: np.ndarray,
    window_type: Optional[WindowType] = WindowType.NONE,
    sample_rate: float = 1.0,
    peak_threshold_percent: float = 10.0,
    max_samples: int = DEFAULT_MAX_SAMPLES
) -> SpectrumResult:
    """Compute spectrum and peaks of a signal

    Parameters
    ----------
    signal : np.ndarray
        Input signal; samples beyond ``max_samples`` are dropped
    window_type : WindowType or str, optional
        Window function type, by default WindowType.NONE
    sample_rate : float, optional
        Sample rate in Hz, by default 1.0
    peak_threshold_percent : float, optional
        Peak threshold relative to the largest magnitude, by default 10.0
    max_samples : int, optional
        Input size cap, by default 1,000,000

    Returns
    -------
    SpectrumResult
        Frequencies, magnitudes, phases and peaks
    """
    signal = truncate_signal(validate_signal(signal), max_samples)
    return SpectralAnalyzer().compute_spectrum(
        signal,
        WindowType.from_name(window_type),
        sample_rate,
        peak_threshold_percent
    )


def compute_psd(
    signal: np.ndarray,
    sample_rate: float = 1.0,
    config: Optional[AnalyzerConfig] = None,
    max_samples: int = DEFAULT_MAX_SAMPLES
) -> PSDResult:
    """Compute power spectral density using Welch's method"""
    signal = truncate_signal(validate_signal(signal), max_samples)
    return SpectralAnalyzer(config).compute_psd(signal, sample_rate)


def compute_spectrogram(
    signal: np.ndarray,
    sample_rate: float = 1.0,
    config: Optional[AnalyzerConfig] = None,
    max_samples: int = DEFAULT_MAX_SAMPLES
) -> SpectrogramResult:
    """Compute spectrogram of a signal"""
    signal = truncate_signal(validate_signal(signal), max_samples)
    return SpectralAnalyzer(config).compute_spectrogram(signal, sample_rate)


def compute_cross_correlation(
    signal_a: np.ndarray,
    signal_b: np.ndarray,
    max_samples: int = DEFAULT_MAX_SAMPLES
) -> np.ndarray:
    """Compute brute-force cross-correlation of two equal-length signals"""
    signal_a = truncate_signal(validate_signal(signal_a, "signal_a"), max_samples)
    signal_b = truncate_signal(validate_signal(signal_b, "signal_b"), max_samples)
    return SpectralAnalyzer().compute_cross_correlation(signal_a, signal_b)


def compute_group_delay(
    signal: np.ndarray,
    sample_rate: float = 1.0,
    config: Optional[AnalyzerConfig] = None,
    max_samples: int = DEFAULT_MAX_SAMPLES
) -> GroupDelayResult:
    """Compute group delay of a signal"""
    signal = truncate_signal(validate_signal(signal), max_samples)
    return SpectralAnalyzer(config).compute_group_delay(signal, sample_rate)
