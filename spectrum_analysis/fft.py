# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
FFT Module

Radix-2 decimation-in-time Fast Fourier Transform. Two interchangeable
formulations are provided: an iterative bit-reversal version operating on a
flat array (the default) and the textbook recursive version. Both produce the
same bin ordering and values to floating-point tolerance.

Only the forward transform is implemented.
"""

import numpy as np
from enum import Enum


class FFTAlgorithm(Enum):
    """Radix-2 FFT formulations"""
    ITERATIVE = 0
    RECURSIVE = 1


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is >= n

    ``next_power_of_two(0)`` and ``next_power_of_two(1)`` both return 1.
    """
    n = int(n)
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def is_power_of_two(n: int) -> bool:
    """True when n is a positive power of two"""
    n = int(n)
    return n > 0 and (n & (n - 1)) == 0


def _bit_reverse_indices(n: int) -> np.ndarray:
    bits = n.bit_length() - 1
    indices = np.arange(n)
    reversed_indices = np.zeros(n, dtype=np.int64)
    for _ in range(bits):
        reversed_indices = (reversed_indices << 1) | (indices & 1)
        indices >>= 1
    return reversed_indices


def fft_iterative(buffer: np.ndarray) -> np.ndarray:
    """Iterative radix-2 FFT

    The input length must be a power of two. This is a caller contract and
    is not checked here.

    Parameters
    ----------
    buffer : np.ndarray
        Complex input

    Returns
    -------
    np.ndarray
        Complex spectrum (complex128), same length as the input
    """
    x = np.asarray(buffer, dtype=np.complex128)
    n = x.size
    if n <= 1:
        return x.copy()

    # Reorder once, then combine in place stage by stage
    result = x[_bit_reverse_indices(n)]

    size = 2
    while size <= n:
        half = size // 2
        twiddle = np.exp(-2j * np.pi * np.arange(half) / size)
        blocks = result.reshape(-1, size)
        even = blocks[:, :half].copy()
        odd = blocks[:, half:] * twiddle
        blocks[:, :half] = even + odd
        blocks[:, half:] = even - odd
        size *= 2

    return result


def fft_recursive(buffer: np.ndarray) -> np.ndarray:
    """Recursive radix-2 FFT (Cooley-Tukey)

    The input length must be a power of two. This is a caller contract and
    is not checked here.
    """
    x = np.asarray(buffer, dtype=np.complex128)
    n = x.size
    if n <= 1:
        return x.copy()

    even = fft_recursive(x[0::2])
    odd = fft_recursive(x[1::2])

    twiddle = np.exp(-2j * np.pi * np.arange(n // 2) / n) * odd
    return np.concatenate([even + twiddle, even - twiddle])


class FFT:
    """Forward radix-2 Fast Fourier Transform

    Parameters
    ----------
    algorithm : FFTAlgorithm, optional
        Which radix-2 formulation to use, by default FFTAlgorithm.ITERATIVE
    """

    def __init__(self, algorithm: FFTAlgorithm = FFTAlgorithm.ITERATIVE):
        self.algorithm = algorithm
        if algorithm == FFTAlgorithm.RECURSIVE:
            self._transform = fft_recursive
        else:
            self._transform = fft_iterative

    def forward(self, buffer: np.ndarray) -> np.ndarray:
        """Compute the forward FFT of a complex buffer

        Parameters
        ----------
        buffer : np.ndarray
            Complex input whose length is a power of two

        Returns
        -------
        np.ndarray
            Complex FFT result
        """
        return self._transform(buffer)

    def forward_real(self, signal: np.ndarray) -> np.ndarray:
        """Compute the forward FFT of a real signal

        The signal is lifted to complex with a zero imaginary part and
        zero-padded on the right to the next power of two.

        Parameters
        ----------
        signal : np.ndarray
            Real-valued input signal

        Returns
        -------
        np.ndarray
            Complex FFT result of length ``next_power_of_two(len(signal))``
        """
        signal = np.asarray(signal, dtype=np.float64)
        padded_length = next_power_of_two(signal.size)
        buffer = np.zeros(padded_length, dtype=np.complex128)
        buffer[:signal.size] = signal
        return self._transform(buffer)
