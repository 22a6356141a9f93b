# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Window functions for spectral analysis.

This module provides the tapering windows applied to a segment before it is
transformed: rectangular, Hamming, Hanning, Blackman and a Kaiser-style
approximation. The window kind is a closed enumeration so the coefficient
formula is selected once per call rather than per sample.
"""

import numpy as np
from enum import Enum
from typing import Optional, Union


class WindowType(Enum):
    """Window types for spectral analysis"""
    NONE = "none"
    RECTANGULAR = "rectangular"
    HAMMING = "hamming"
    HANNING = "hanning"
    BLACKMAN = "blackman"
    KAISER = "kaiser"

    @classmethod
    def from_name(cls, name: Union[str, "WindowType", None]) -> "WindowType":
        """Resolve a window selector such as ``"hamming"`` to a WindowType

        Parameters
        ----------
        name : str, WindowType or None
            Selector value. ``None`` maps to ``WindowType.NONE``.

        Returns
        -------
        WindowType
            Matching window type

        Raises
        ------
        ValueError
            If the name does not match any known window
        """
        if name is None:
            return cls.NONE
        if isinstance(name, cls):
            return name

        key = str(name).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(
            f"Unknown window type {name!r}. Valid: {[w.value for w in cls]}"
        )


_ALIASES = {w.value: w for w in WindowType}
_ALIASES["hann"] = WindowType.HANNING
_ALIASES["rect"] = WindowType.RECTANGULAR
_ALIASES["boxcar"] = WindowType.RECTANGULAR


def _hamming(x: np.ndarray) -> np.ndarray:
    return 0.54 - 0.46 * np.cos(2 * np.pi * x)


def _hanning(x: np.ndarray) -> np.ndarray:
    return 0.5 * (1 - np.cos(2 * np.pi * x))


def _blackman(x: np.ndarray) -> np.ndarray:
    return 0.42 - 0.5 * np.cos(2 * np.pi * x) + 0.08 * np.cos(4 * np.pi * x)


def _kaiser_approx(x: np.ndarray) -> np.ndarray:
    # Parabolic stand-in, not a Bessel window. Kept for output compatibility.
    r = 2 * x - 1
    return np.sqrt(np.clip(1 - r * r, 0.0, None))


# x is the normalised position i / (N - 1)
_WINDOW_FORMULAS = {
    WindowType.HAMMING: _hamming,
    WindowType.HANNING: _hanning,
    WindowType.BLACKMAN: _blackman,
    WindowType.KAISER: _kaiser_approx,
}


def window_coefficients(
    window_type: Optional[WindowType],
    length: int
) -> np.ndarray:
    """Generate the coefficients of a window

    Parameters
    ----------
    window_type : WindowType or None
        Window function type. ``None``, ``NONE`` and ``RECTANGULAR`` all
        yield a vector of ones.
    length : int
        Number of coefficients

    Returns
    -------
    np.ndarray
        Window coefficients (float64)
    """
    if length < 0:
        raise ValueError(f"Window length must be >= 0, got {length}")

    window_type = WindowType.from_name(window_type)
    formula = _WINDOW_FORMULAS.get(window_type)

    # N <= 1 would divide by zero below; treated as no window
    if formula is None or length <= 1:
        return np.ones(length, dtype=np.float64)

    x = np.arange(length, dtype=np.float64) / (length - 1)
    return formula(x)


def apply_window(
    segment: np.ndarray,
    window_type: Optional[WindowType] = WindowType.NONE
) -> np.ndarray:
    """Apply a window to a segment

    The input is never modified; a new array is returned in every case.

    Parameters
    ----------
    segment : np.ndarray
        Real-valued 1-D segment
    window_type : WindowType or None, optional
        Window function type, by default WindowType.NONE

    Returns
    -------
    np.ndarray
        Windowed copy of the segment
    """
    segment = np.asarray(segment, dtype=np.float64)
    window_type = WindowType.from_name(window_type)

    if window_type in (WindowType.NONE, WindowType.RECTANGULAR) or segment.size <= 1:
        return segment.copy()

    return segment * window_coefficients(window_type, segment.size)
