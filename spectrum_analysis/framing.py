# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Signal framing for short-time analysis.
"""

import numpy as np

from .log import get_logger
from .spectrum import validate_signal


def hop_size(frame_size: int, overlap: float) -> int:
    """Number of samples between the starts of consecutive frames"""
    return max(1, int(np.floor(frame_size * (1.0 - overlap))))


class Framer:
    """Slices a signal into overlapping fixed-length frames

    When the signal is at least one frame long, frames start every
    ``hop_size`` samples and only full frames are produced. A signal shorter
    than one frame is handled in a degraded mode: frames still start every
    ``hop_size`` samples but each holds the remaining samples zero-padded to
    ``frame_size``.
    """

    def __init__(self, logger=None):
        self.logger = logger or get_logger("Framer")

    def segment(
        self,
        signal: np.ndarray,
        frame_size: int,
        overlap: float = 0.5
    ) -> np.ndarray:
        """Split a signal into frames

        Parameters
        ----------
        signal : np.ndarray
            Real-valued input signal
        frame_size : int
            Samples per frame
        overlap : float, optional
            Fraction of a frame shared with the next one, in [0, 1),
            by default 0.5

        Returns
        -------
        np.ndarray
            Array of shape (frame_count, frame_size)
        """
        signal = validate_signal(signal)
        if int(frame_size) != frame_size or frame_size < 1:
            raise ValueError(f"frame_size must be a positive integer, got {frame_size}")
        if not 0.0 <= overlap < 1.0:
            raise ValueError(f"overlap must be in [0, 1), got {overlap}")

        frame_size = int(frame_size)
        hop = hop_size(frame_size, overlap)
        length = signal.size

        if length >= frame_size:
            starts = np.arange(0, length - frame_size + 1, hop)
            frames = np.lib.stride_tricks.sliding_window_view(signal, frame_size)[starts].copy()
        else:
            self.logger.warning(
                f"Signal length {length} is shorter than frame size {frame_size}; "
                f"using zero-padded frames"
            )
            starts = np.arange(0, length, hop)
            frames = np.zeros((starts.size, frame_size), dtype=np.float64)
            for row, start in enumerate(starts):
                chunk = signal[start:]
                frames[row, :chunk.size] = chunk

        self.logger.debug(
            f"Framed {length} samples into {frames.shape[0]} frames "
            f"(size={frame_size}, hop={hop})"
        )
        return frames
