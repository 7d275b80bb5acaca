#!/usr/bin/env python3
"""
Benchmark runner and orchestration logic.

Handles benchmark execution from parsed arguments and result reporting.
"""

import asyncio
import json
import logging

import numpy as np

from ..config import InferenceConfig
from ..framework import Framework
from ..frameworks.factory import frameworks_available_on
from ..manager import InferenceManager
from ..platform import PlatformInfo
from .benchmark_results import BenchmarkReport


def make_sample_window(window_samples: int, sample_rate: int = 16000, seed: int = 0) -> np.ndarray:
    """Synthetic test window: a 440Hz tone with a little noise, in [-1, 1]."""
    t = np.arange(window_samples, dtype=np.float32) / sample_rate
    rng = np.random.default_rng(seed)
    tone = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    noise = 0.05 * rng.standard_normal(window_samples)
    return np.clip(tone + noise, -1.0, 1.0).astype(np.float32)


def config_from_args(args) -> InferenceConfig:
    """Build the runtime configuration from parsed command-line arguments."""
    overrides = {
        "model_dir": args.model_dir,
        "model_name": args.model_name,
        "labels_path": args.labels,
        "window_samples": args.window_samples,
        "warmup_iterations": args.warmup_iterations,
        "benchmark_iterations": args.iterations,
    }
    if args.simulate:
        overrides["simulate"] = True
    # Unset arguments fall back to SOUND_INFERENCE_* variables, then defaults
    return InferenceConfig.from_env(**{key: value for key, value in overrides.items() if value is not None})


def run_benchmarks(args) -> int:
    """
    Execute benchmarks based on parsed command-line arguments.

    Args:
        args: Parsed command-line arguments from argparse

    Returns:
        Process exit code: 0 when at least one framework was measured.
    """
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = config_from_args(args)
    platform = PlatformInfo.for_host(args.platform) if args.platform else PlatformInfo.detect()
    frameworks = [Framework.parse(name) for name in args.framework] if args.framework else list(Framework)

    print(f"📋 Platform: {platform.host.value}")
    print(f"📋 Supported here: {', '.join(f.value for f in frameworks_available_on(platform)) or 'none'}")
    print(f"📋 Frameworks: {', '.join(f.value for f in frameworks)}")
    if config.simulate:
        print("🧪 Using simulated runtimes")
    print(f"\n🚀 Starting benchmark ({config.warmup_iterations} warm-up, {config.benchmark_iterations} timed)...")

    sample = make_sample_window(config.window_samples, config.sample_rate)
    manager = InferenceManager(platform=platform, config=config)

    try:
        report = asyncio.run(manager.benchmark(sample, frameworks=frameworks))
    except KeyboardInterrupt:
        print("\n⚠️  Benchmark interrupted by user")
        return 1

    print_comparison(report)

    if args.json:
        args.json.write_text(json.dumps(report.to_dict(), indent=2))
        print(f"💾 Results written to {args.json}")
    if args.report:
        args.report.write_text(report.to_markdown())
        print(f"💾 Report written to {args.report}")

    if not report.results:
        print("\n❌ No framework could be benchmarked")
        return 1

    print(f"\n✅ Completed {len(report.results)} successful benchmarks")
    return 0


def print_comparison(report: BenchmarkReport) -> None:
    """Print a comparison table of all benchmark results."""
    print("\n📊 BENCHMARK COMPARISON")
    print("=" * 78)
    print(f"{'Framework':<18} {'Avg (ms)':>10} {'Min (ms)':>10} {'Max (ms)':>10} {'Init (ms)':>10} {'Runs':>6}")
    print("-" * 78)

    for result in report.ranked():
        print(
            f"{result.framework.value:<18} "
            f"{result.avg_inference_time_ms:>10.2f} "
            f"{result.min_inference_time_ms:>10.2f} "
            f"{result.max_inference_time_ms:>10.2f} "
            f"{result.initialization_time_ms:>10.2f} "
            f"{result.iterations:>6d}"
        )

    for skip in report.skipped.values():
        symbol = "⏭️ " if skip.reason.value == "unavailable" else "❌"
        detail = f" - {skip.error}" if skip.error else ""
        print(f"{symbol} {skip.framework.value}: {skip.reason.value}{detail}")

    fastest = report.fastest()
    if fastest is not None:
        print(f"\n🏆 Fastest: {fastest.framework.value} ({fastest.avg_inference_time_ms:.2f}ms avg)")
