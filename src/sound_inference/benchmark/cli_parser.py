#!/usr/bin/env python3
"""
Command-line interface parser for the benchmark suite.

Defines and parses all command-line arguments for benchmark configuration.
"""

import argparse
from pathlib import Path

from ..constants import BENCHMARK_ITERATIONS, WARMUP_ITERATIONS, WINDOW_SAMPLES
from ..frameworks.factory import get_available_frameworks
from ..platform import HostPlatform


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sound-inference-bench",
        description="Sound classifier inference runtime benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Benchmark every runtime available on this machine
  sound-inference-bench --model-dir ./assets

  # Dry run with simulated runtimes, pretending to be an Android device
  sound-inference-bench --simulate --platform android

  # Compare two runtimes and keep the results
  sound-inference-bench --model-dir ./assets --framework onnx_runtime tflite_cpu \\
    --iterations 100 --json results.json --report report.md

Available frameworks:
  - tflite_cpu      : TensorFlow Lite, CPU kernels
  - tflite_gpu      : TensorFlow Lite with GPU delegate (Android)
  - tflite_nnapi    : TensorFlow Lite with NNAPI delegate (Android)
  - tflite_metal    : TensorFlow Lite with Metal delegate (iOS)
  - onnx_runtime    : ONNX Runtime
  - coreml          : Core ML (iOS, macOS)
  - pytorch_mobile  : PyTorch TorchScript / lite interpreter
""",
    )

    # Host
    parser.add_argument(
        "--platform",
        choices=[host.value for host in HostPlatform],
        help="Host platform to assume (default: detected)",
    )

    # Framework selection
    parser.add_argument(
        "--framework",
        nargs="+",
        choices=get_available_frameworks(),
        help="Framework(s) to benchmark (default: all)",
    )

    # Model assets
    parser.add_argument("--model-dir", type=Path, help="Directory with model files (default: assets)")
    parser.add_argument("--model-name", help="Model file stem (default: yamnet)")
    parser.add_argument("--labels", type=Path, help="Class map CSV used to label results")

    # Benchmark parameters
    parser.add_argument(
        "--iterations", type=positive_int, help=f"Timed inferences per framework (default: {BENCHMARK_ITERATIONS})"
    )
    parser.add_argument(
        "--warmup-iterations",
        type=non_negative_int,
        help=f"Discarded warm-up inferences (default: {WARMUP_ITERATIONS})",
    )
    parser.add_argument(
        "--window-samples",
        type=positive_int,
        help=f"Samples in the synthetic audio window (default: {WINDOW_SAMPLES})",
    )
    parser.add_argument("--simulate", action="store_true", help="Use simulated runtimes instead of real ones")

    # Output
    parser.add_argument("--json", type=Path, help="Write results as JSON to this path")
    parser.add_argument("--report", type=Path, help="Write the markdown report to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser
