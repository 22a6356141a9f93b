# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Command-line interface for the spectrum analysis pipeline.
"""

import argparse
import json
import os
import sys
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional

import numpy as np

from .analyzer import SpectralAnalyzer
from .config import PipelineConfig, load_config
from .generator import WaveType, generate_signal
from .loader import load_signal, truncate_signal
from .log import configure_logging, get_logger
from .windows import WindowType

logger = get_logger("cli")


def create_signal(args: argparse.Namespace, config: PipelineConfig) -> np.ndarray:
    """
    Create the input signal from command-line arguments.

    Args:
        args: Parsed command-line arguments
        config: Pipeline configuration

    Returns:
        The signal samples
    """
    if args.input_file:
        return load_signal(args.input_file, max_samples=config.max_samples)

    _, signal = generate_signal(
        args.wave,
        frequency=args.frequency,
        amplitude=args.amplitude,
        duration=args.duration,
        sample_rate=args.sample_rate,
        phase=args.phase
    )
    return truncate_signal(signal, config.max_samples)


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Merge the optional config file with command-line overrides."""
    config = load_config(args.config) if args.config else PipelineConfig()

    overrides: Dict[str, Any] = {}
    if args.window is not None:
        overrides["window"] = WindowType.from_name(args.window)
    if args.peak_threshold is not None:
        overrides["peak_threshold_percent"] = args.peak_threshold
    if args.max_correlation_samples is not None:
        overrides["max_correlation_samples"] = args.max_correlation_samples

    return replace(config, **overrides)


def run_pipeline(
    signal: np.ndarray,
    sample_rate: float,
    config: PipelineConfig
) -> Dict[str, Any]:
    """
    Run every analysis on one signal.

    Args:
        signal: Input samples
        sample_rate: Sample rate in Hz
        config: Pipeline configuration

    Returns:
        Dictionary of result objects keyed by analysis name
    """
    analyzer = SpectralAnalyzer(config.analyzer)

    # Autocorrelation is O(n^2); long signals are correlated on a prefix
    correlated = signal
    if signal.size > config.max_correlation_samples:
        logger.warning(
            f"Signal length ({signal.size}) exceeds autocorrelation limit "
            f"({config.max_correlation_samples}). Using the first "
            f"{config.max_correlation_samples} samples for autocorrelation."
        )
        correlated = signal[:config.max_correlation_samples]

    return {
        "spectrum": analyzer.compute_spectrum(
            signal, config.window, sample_rate, config.peak_threshold_percent
        ),
        "psd": analyzer.compute_psd(signal, sample_rate),
        "spectrogram": analyzer.compute_spectrogram(signal, sample_rate),
        "autocorrelation": analyzer.compute_cross_correlation(correlated, correlated),
        "group_delay": analyzer.compute_group_delay(signal, sample_rate),
    }


def summarize(results: Dict[str, Any], sample_rate: float, num_samples: int) -> Dict[str, Any]:
    """Build the JSON summary written next to the arrays."""
    spectrum = results["spectrum"]
    spectrogram = results["spectrogram"]
    peaks: List[Dict[str, float]] = [
        {"frequency": p.frequency, "magnitude": p.magnitude, "phase": p.phase}
        for p in spectrum.peaks
    ]
    return {
        "num_samples": num_samples,
        "sample_rate": sample_rate,
        "spectrum_bins": len(spectrum.frequencies),
        "autocorrelation_samples": (len(results["autocorrelation"]) + 1) // 2,
        "peaks": peaks,
        "psd_frames": results["psd"].frame_count,
        "spectrogram_frames": spectrogram.frame_count,
        "spectrogram_time_resolution": spectrogram.time_resolution,
    }


def save_results(
    results: Dict[str, Any],
    summary: Dict[str, Any],
    output_dir: str
) -> None:
    """
    Save analysis arrays and summary to files.

    Args:
        results: Output of run_pipeline
        summary: Output of summarize
        output_dir: Directory for output files
    """
    os.makedirs(output_dir, exist_ok=True)

    spectrum = results["spectrum"]
    psd = results["psd"]
    spectrogram = results["spectrogram"]
    group_delay = results["group_delay"]

    arrays_file = os.path.join(output_dir, "spectra.npz")
    np.savez(
        arrays_file,
        frequencies=spectrum.frequencies,
        magnitudes=spectrum.magnitudes,
        phases=spectrum.phases,
        psd_frequencies=psd.frequencies,
        psd=psd.psd,
        spectrogram=spectrogram.matrix,
        spectrogram_frequencies=spectrogram.frequencies,
        autocorrelation=results["autocorrelation"],
        group_delay_frequencies=group_delay.frequencies,
        group_delay=group_delay.group_delay
    )
    print(f"Arrays saved to {arrays_file}")

    summary_file = os.path.join(output_dir, "summary.json")
    with open(summary_file, "w") as f:
        json.dump(summary, f, indent=2)
    print(f"Summary saved to {summary_file}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spectral analysis of a generated or loaded signal")

    # Signal source
    parser.add_argument("--input-file", type=str, default=None,
                        help="Load samples from a .csv, .txt or .json file instead of generating")
    parser.add_argument("--wave", choices=[w.value for w in WaveType], default="sine",
                        help="Waveform to generate")
    parser.add_argument("--frequency", type=float, default=50.0,
                        help="Waveform frequency in Hz")
    parser.add_argument("--amplitude", type=float, default=1.0,
                        help="Waveform amplitude")
    parser.add_argument("--phase", type=float, default=0.0,
                        help="Sine phase offset in degrees")
    parser.add_argument("--duration", type=float, default=1.0,
                        help="Signal duration in seconds")
    parser.add_argument("--sample-rate", type=float, default=1000.0,
                        help="Sample rate in Hz")

    # Analysis parameters
    parser.add_argument("--config", type=str, default=None,
                        help="YAML or JSON configuration file")
    parser.add_argument("--window", choices=[w.value for w in WindowType], default=None,
                        help="Window applied before the spectrum FFT")
    parser.add_argument("--peak-threshold", type=float, default=None,
                        help="Peak threshold as a percentage of the largest magnitude")
    parser.add_argument("--max-correlation-samples", type=int, default=None,
                        help="Longest prefix of the signal used for the O(n^2) autocorrelation")

    # Output
    parser.add_argument("--output-dir", type=str, default="./output",
                        help="Directory for output files")
    parser.add_argument("--log-level", type=str, default="INFO",
                        help="Logging level")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the spectrum analysis tool.
    """
    args = parse_args(argv)

    if args.sample_rate <= 0:
        print("Error: Sample rate must be greater than 0", file=sys.stderr)
        sys.exit(1)

    try:
        configure_logging(args.log_level)
        config = build_config(args)
        signal = create_signal(args, config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("Spectrum Analysis Configuration:")
    print(f"  Source: {args.input_file or args.wave}")
    print(f"  Samples: {signal.size}")
    print(f"  Sample Rate: {args.sample_rate}")
    print(f"  Window: {config.window.value}")
    print(f"  Peak Threshold: {config.peak_threshold_percent}%")
    print()

    start_time = time.time()
    results = run_pipeline(signal, args.sample_rate, config)
    elapsed = time.time() - start_time
    logger.info(f"Analysis completed in {elapsed:.3f} seconds")

    summary = summarize(results, args.sample_rate, signal.size)
    save_results(results, summary, args.output_dir)

    print("\nDetected Peaks:")
    for peak in results["spectrum"].peaks[:10]:
        print(f"  {peak.frequency:10.2f} Hz  magnitude {peak.magnitude:.4f}  phase {peak.phase:7.2f} deg")


if __name__ == "__main__":
    main()
