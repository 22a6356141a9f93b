# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Spectrum construction.

Turns a real signal into the one-sided magnitude/phase/frequency view used by
peak detection and plotting: window, zero-pad to a power of two, FFT, then
keep bins [0, P/2).
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .fft import FFT, next_power_of_two
from .log import get_logger
from .windows import WindowType, apply_window


@dataclass(frozen=True, eq=False)
class Spectrum:
    """One-sided spectrum of a real signal.

    All three arrays have length ``transform_length // 2``. Phases are in
    degrees.
    """

    frequencies: np.ndarray
    magnitudes: np.ndarray
    phases: np.ndarray
    sample_rate: float
    transform_length: int

    def __len__(self) -> int:
        return len(self.magnitudes)

    @property
    def bin_spacing(self) -> float:
        """Frequency distance between adjacent bins in Hz"""
        return self.sample_rate / self.transform_length


@dataclass(frozen=True)
class Peak:
    """A local maximum of a Spectrum."""

    frequency: float
    magnitude: float
    phase: float
    bin_index: int


def validate_signal(signal, name: str = "signal") -> np.ndarray:
    """Convert input to a 1-D float64 array, rejecting empty or N-D input"""
    arr = np.asarray(signal, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must contain at least one sample")
    return arr


def validate_sample_rate(sample_rate: float) -> float:
    """Reject zero, negative and non-finite sample rates"""
    sample_rate = float(sample_rate)
    if not np.isfinite(sample_rate) or sample_rate <= 0:
        raise ValueError(f"sample_rate must be > 0, got {sample_rate}")
    return sample_rate


class SpectrumBuilder:
    """Builds a Spectrum from a real signal

    Parameters
    ----------
    fft : FFT, optional
        Transform engine, by default a new iterative FFT
    """

    def __init__(self, fft: Optional[FFT] = None, logger=None):
        self.fft = fft or FFT()
        self.logger = logger or get_logger("SpectrumBuilder")

    def build(
        self,
        signal: np.ndarray,
        window_type: Optional[WindowType] = WindowType.NONE,
        sample_rate: float = 1.0
    ) -> Spectrum:
        """Compute the one-sided spectrum of a signal

        Parameters
        ----------
        signal : np.ndarray
            Real-valued input signal
        window_type : WindowType, optional
            Window applied before the transform, by default WindowType.NONE
        sample_rate : float, optional
            Sample rate in Hz, by default 1.0

        Returns
        -------
        Spectrum
            Frequencies, magnitudes (|X|/P) and phases (degrees) for
            bins [0, P/2) where P is the padded transform length
        """
        signal = validate_signal(signal)
        sample_rate = validate_sample_rate(sample_rate)

        windowed = apply_window(signal, window_type)
        transform_length = next_power_of_two(windowed.size)
        self.logger.debug(
            f"Building spectrum: {signal.size} samples padded to {transform_length}"
        )

        result = self.fft.forward_real(windowed)
        half = result[:transform_length // 2]

        magnitudes = np.abs(half) / transform_length
        phases = np.degrees(np.arctan2(half.imag, half.real))
        # atan2 gives -180 for a negative real part with imag == -0.0
        phases[phases <= -180.0] = 180.0
        frequencies = np.arange(half.size) * sample_rate / transform_length

        return Spectrum(
            frequencies=frequencies,
            magnitudes=magnitudes,
            phases=phases,
            sample_rate=sample_rate,
            transform_length=transform_length
        )
