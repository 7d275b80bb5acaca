#!/usr/bin/env python3
"""
Benchmark suite orchestration and execution.

Benchmarks every requested framework with its own short-lived engine, one
engine at a time so timings never overlap.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

import numpy as np

from ..constants import BENCHMARK_ITERATIONS, WARMUP_ITERATIONS
from ..errors import UnavailableOnPlatformError
from ..framework import Framework
from ..frameworks.base import InferenceEngine
from ..frameworks.factory import EngineFactory
from .benchmark_results import BenchmarkReport, BenchmarkResult, BenchmarkSkip, SkipReason
from .time_tracking import TimeLog

logger = logging.getLogger(__name__)


class BenchmarkSuite:
    """
    Runs warm-up and timed inference on each framework and aggregates timings.

    Engines come from the injected factory and are always disposed before the
    next framework starts.
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        frameworks: Optional[Iterable[Framework]] = None,
        warmup_iterations: int = WARMUP_ITERATIONS,
        iterations: int = BENCHMARK_ITERATIONS,
    ):
        if iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {iterations}")
        if warmup_iterations < 0:
            raise ValueError(f"warmup_iterations must not be negative, got {warmup_iterations}")

        self.engine_factory = engine_factory
        self.frameworks: list[Framework] = list(frameworks) if frameworks is not None else list(Framework)
        self.warmup_iterations = warmup_iterations
        self.iterations = iterations

    async def run(self, sample_data: Sequence[float]) -> BenchmarkReport:
        """Benchmark every framework; failures are recorded, never raised."""
        audio = np.ascontiguousarray(sample_data, dtype=np.float32).reshape(-1)
        report = BenchmarkReport()

        for framework in self.frameworks:
            engine = self.engine_factory(framework)
            time_log = TimeLog()

            try:
                if not engine.is_available:
                    logger.info("Skipping %s: not available on this platform", framework.value)
                    report.skipped[framework] = BenchmarkSkip(framework, SkipReason.UNAVAILABLE)
                    continue

                logger.info("Benchmarking %s...", framework.value)
                await self.execute_benchmark(engine, audio, time_log)
            except Exception as e:
                logger.warning("Benchmark failed for %s: %s", framework.value, e)
                reason = SkipReason.UNAVAILABLE if isinstance(e, UnavailableOnPlatformError) else SkipReason.FAILED
                report.skipped[framework] = BenchmarkSkip(framework, reason, str(e))
                continue
            finally:
                start_time = time_log.start_timer()
                await engine.dispose()
                time_log.engine_cleanup = time_log.end_timer(start_time)

            result = BenchmarkResult.from_time_log(framework, time_log)
            report.results[framework] = result
            logger.info("%s benchmark completed: avg %.2fms", framework.value, result.avg_inference_time_ms)

        return report

    async def execute_benchmark(self, engine: InferenceEngine, audio: np.ndarray, time_log: TimeLog) -> TimeLog:
        """Initialize one engine, warm it up and time it. The caller disposes it."""
        start_time = time_log.start_timer()
        await engine.initialize()
        time_log.engine_initialization = time_log.end_timer(start_time)

        for _ in range(self.warmup_iterations):
            start_time = time_log.start_timer()
            await engine.infer(audio)
            time_log.add_iteration_time(time_log.end_timer(start_time), is_warmup=True)

        for _ in range(self.iterations):
            start_time = time_log.start_timer()
            await engine.infer(audio)
            time_log.add_iteration_time(time_log.end_timer(start_time))

        return time_log
