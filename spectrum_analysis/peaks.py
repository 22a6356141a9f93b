# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Peak detection on one-sided spectra.
"""

import numpy as np
from typing import List

from .log import get_logger
from .spectrum import Peak, Spectrum


class PeakDetector:
    """Finds strict local maxima above a relative threshold

    A bin is a peak when its magnitude exceeds ``max(magnitude) *
    threshold_percent / 100`` and is strictly greater than both neighbours.
    The first and last bins are never peaks, and flat plateaus produce no
    peak.
    """

    def __init__(self, logger=None):
        self.logger = logger or get_logger("PeakDetector")

    def detect(self, spectrum: Spectrum, threshold_percent: float = 10.0) -> List[Peak]:
        """Detect peaks in a spectrum

        Parameters
        ----------
        spectrum : Spectrum
            Spectrum to scan
        threshold_percent : float, optional
            Threshold relative to the largest magnitude, in percent,
            by default 10.0

        Returns
        -------
        List[Peak]
            Peaks sorted by descending magnitude; equal magnitudes keep
            ascending bin order
        """
        magnitudes = np.asarray(spectrum.magnitudes, dtype=np.float64)
        if not (len(spectrum.frequencies) == len(magnitudes) == len(spectrum.phases)):
            raise ValueError("Spectrum arrays must have the same length")
        if magnitudes.size < 3:
            return []

        threshold_value = np.max(magnitudes) * threshold_percent / 100.0

        center = magnitudes[1:-1]
        is_peak = (
            (center > threshold_value)
            & (center > magnitudes[:-2])
            & (center > magnitudes[2:])
        )
        indices = np.nonzero(is_peak)[0] + 1

        # Stable sort keeps bin order among equal magnitudes
        order = np.argsort(-magnitudes[indices], kind="stable")
        peaks = [
            Peak(
                frequency=float(spectrum.frequencies[i]),
                magnitude=float(magnitudes[i]),
                phase=float(spectrum.phases[i]),
                bin_index=int(i)
            )
            for i in indices[order]
        ]

        self.logger.debug(f"Detected {len(peaks)} peaks above {threshold_value:.6g}")
        return peaks
