#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Spectrum Analysis Example Script

This script demonstrates the spectral analysis capabilities
of the spectrum_analysis package.

It shows:
1. Windowed spectrum with peak detection
2. Welch power spectral density
3. Spectrogram of a stepped-frequency signal
4. Autocorrelation
5. Group delay of a delayed impulse
"""

import os
import sys
import argparse
import numpy as np
import matplotlib.pyplot as plt

# Add parent directory to path to import spectrum_analysis module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from spectrum_analysis import (
    AnalyzerConfig, SpectralAnalyzer, WindowType,
    generate_multi_sine, generate_signal
)
from spectrum_analysis.log import configure_logging


def plot_spectrum(analyzer, sample_rate, output_dir):
    """Plot the spectrum of a three-tone signal with each window."""
    components = [
        {"frequency": 50.0, "amplitude": 1.0},
        {"frequency": 120.0, "amplitude": 0.5, "phase": 30.0},
        {"frequency": 300.0, "amplitude": 0.2},
    ]
    _, signal = generate_multi_sine(components, duration=1.0, sample_rate=sample_rate)

    plt.figure(figsize=(12, 8))
    for i, window_type in enumerate([WindowType.NONE, WindowType.HAMMING,
                                     WindowType.HANNING, WindowType.BLACKMAN]):
        result = analyzer.compute_spectrum(signal, window_type, sample_rate, 5.0)
        plt.subplot(2, 2, i + 1)
        plt.plot(result.frequencies, result.magnitudes)
        plt.plot([p.frequency for p in result.peaks],
                 [p.magnitude for p in result.peaks], 'rx')
        plt.title(f'Spectrum - {window_type.value} window ({len(result.peaks)} peaks)')
        plt.xlabel('Frequency (Hz)')
        plt.ylabel('Magnitude')
        plt.grid(True)

        print(f"{window_type.value:>12}: " + ", ".join(
            f"{p.frequency:.1f} Hz ({p.magnitude:.3f})" for p in result.peaks[:3]))

    plt.tight_layout()
    plt.savefig(os.path.join(output_dir, 'spectrum.png'))
    plt.close()


def plot_psd_and_spectrogram(analyzer, sample_rate, output_dir):
    """Plot PSD and spectrogram of a signal that steps through three tones."""
    pieces = [generate_signal("sine", f, duration=1.0, sample_rate=sample_rate)[1]
              for f in (100.0, 250.0, 400.0)]
    signal = np.concatenate(pieces) + 0.05 * np.random.randn(3 * len(pieces[0]))

    psd = analyzer.compute_psd(signal, sample_rate)
    spectrogram = analyzer.compute_spectrogram(signal, sample_rate)

    plt.figure(figsize=(12, 8))
    plt.subplot(2, 1, 1)
    plt.semilogy(psd.frequencies, psd.psd)
    plt.title(f'Welch PSD ({psd.frame_count} frames)')
    plt.xlabel('Frequency (Hz)')
    plt.grid(True)

    plt.subplot(2, 1, 2)
    extent = [0, spectrogram.frame_count * spectrogram.time_resolution,
              spectrogram.frequencies[0], spectrogram.frequencies[-1]]
    plt.imshow(spectrogram.matrix.T, aspect='auto', origin='lower', extent=extent)
    plt.colorbar(label='dB')
    plt.title('Spectrogram')
    plt.xlabel('Time (s)')
    plt.ylabel('Frequency (Hz)')

    plt.tight_layout()
    plt.savefig(os.path.join(output_dir, 'psd_spectrogram.png'))
    plt.close()


def plot_correlation_and_group_delay(analyzer, sample_rate, output_dir):
    """Plot autocorrelation of a square wave and group delay of a delayed impulse."""
    _, square = generate_signal("square", 20.0, duration=0.5, sample_rate=sample_rate)
    correlation = analyzer.compute_cross_correlation(square, square)
    lags = np.arange(-len(square) + 1, len(square)) / sample_rate

    impulse = np.zeros(256)
    impulse[10] = 1.0
    unwrapped = AnalyzerConfig(unwrap_phase=True)
    delay = analyzer.compute_group_delay(impulse, sample_rate, unwrapped)

    plt.figure(figsize=(12, 8))
    plt.subplot(2, 1, 1)
    plt.plot(lags, correlation)
    plt.title('Square Wave Autocorrelation')
    plt.xlabel('Lag (s)')
    plt.grid(True)

    plt.subplot(2, 1, 2)
    plt.plot(delay.frequencies, delay.group_delay * 1000)
    plt.title('Group Delay of Impulse Delayed by 10 Samples')
    plt.xlabel('Frequency (Hz)')
    plt.ylabel('Delay (ms)')
    plt.grid(True)

    plt.tight_layout()
    plt.savefig(os.path.join(output_dir, 'correlation_group_delay.png'))
    plt.close()


def main():
    parser = argparse.ArgumentParser(description="Spectrum Analysis Example")
    parser.add_argument("--sample-rate", type=float, default=1000.0,
                        help="Sample rate in Hz")
    parser.add_argument("--output-dir", type=str, default="./output",
                        help="Directory for generated figures")
    parser.add_argument("--workers", type=int, default=1,
                        help="Threads used for per-frame FFTs")
    args = parser.parse_args()

    configure_logging("INFO")
    os.makedirs(args.output_dir, exist_ok=True)

    analyzer = SpectralAnalyzer(AnalyzerConfig(
        psd_frame_size=512,
        spectrogram_frame_size=256,
        max_workers=args.workers
    ))

    plot_spectrum(analyzer, args.sample_rate, args.output_dir)
    plot_psd_and_spectrogram(analyzer, args.sample_rate, args.output_dir)
    plot_correlation_and_group_delay(analyzer, args.sample_rate, args.output_dir)

    print(f"Figures saved to {args.output_dir}")


if __name__ == "__main__":
    main()
