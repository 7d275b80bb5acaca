#!/usr/bin/env python3
"""
Inference manager.

The single entry point the application talks to: owns at most one live
engine, picks a framework for the host, falls back to alternatives when
the preferred one fails and runs benchmarks on separate engines.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Optional

from .benchmark.benchmark_results import BenchmarkReport, BenchmarkResult
from .benchmark.benchmark_suite import BenchmarkSuite
from .config import InferenceConfig
from .errors import AllFrameworksExhaustedError, NotInitializedError
from .framework import Framework
from .frameworks.base import InferenceEngine
from .frameworks.factory import EngineFactory
from .frameworks.factory import engine_factory as build_engine_factory
from .platform import PlatformInfo
from .selection import fallback_sequence, select_framework

logger = logging.getLogger(__name__)


class InferenceManager:
    """
    Owns the active inference engine.

    Operations are serialized through an internal lock, so overlapping
    calls (an ``infer`` during ``switch_framework``) wait for each other.

    Example:
        async with InferenceManager() as manager:
            await manager.initialize()
            result = await manager.infer(samples)
    """

    def __init__(
        self,
        platform: Optional[PlatformInfo] = None,
        config: Optional[InferenceConfig] = None,
        engine_factory: Optional[EngineFactory] = None,
    ):
        self.platform = platform or PlatformInfo.detect()
        self.config = config or InferenceConfig()
        self._engine_factory = engine_factory or build_engine_factory(self.platform, self.config)
        self._engine: Optional[InferenceEngine] = None
        self._framework: Optional[Framework] = None
        self._lock = asyncio.Lock()

    @property
    def current_framework(self) -> Optional[Framework]:
        return self._framework

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def initialize(
        self,
        preferred_framework: Optional[Framework] = None,
        *,
        allow_fallback: bool = True,
    ) -> Framework:
        """
        Start an engine, falling back to alternatives if the preferred one fails.

        Args:
            preferred_framework: Framework to try first; the host's policy
                choice when omitted.
            allow_fallback: When False, the preferred framework's error is
                raised as-is instead of trying alternatives.

        Returns:
            The framework that ended up active.

        Raises:
            AllFrameworksExhaustedError: No candidate could initialize.
        """
        async with self._lock:
            return await self._initialize(preferred_framework, allow_fallback)

    async def infer(self, samples: Sequence[float]) -> dict[str, Any]:
        """Classify one audio window with the active engine."""
        async with self._lock:
            if self._engine is None:
                raise NotInitializedError()
            return await self._engine.infer(samples)

    async def switch_framework(self, framework: Framework, *, allow_fallback: bool = True) -> Framework:
        """Replace the active engine; a no-op when ``framework`` is already active."""
        framework = Framework.parse(framework)
        async with self._lock:
            if self._engine is not None and self._framework == framework:
                return framework
            await self._dispose()
            return await self._initialize(framework, allow_fallback)

    async def dispose(self) -> None:
        """Release the active engine, if any."""
        async with self._lock:
            await self._dispose()

    async def benchmark(
        self,
        sample_data: Sequence[float],
        frameworks: Optional[Sequence[Framework]] = None,
        warmup_iterations: Optional[int] = None,
        iterations: Optional[int] = None,
    ) -> BenchmarkReport:
        """Benchmark frameworks on fresh engines, recording the ones that were skipped."""
        suite = BenchmarkSuite(
            self._engine_factory,
            frameworks=frameworks,
            warmup_iterations=self.config.warmup_iterations if warmup_iterations is None else warmup_iterations,
            iterations=self.config.benchmark_iterations if iterations is None else iterations,
        )
        async with self._lock:
            return await suite.run(sample_data)

    async def benchmark_all(self, sample_data: Sequence[float]) -> dict[Framework, BenchmarkResult]:
        """Benchmark every known framework; frameworks that could not run are omitted."""
        report = await self.benchmark(sample_data)
        return report.results

    async def __aenter__(self) -> "InferenceManager":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()

    # ── Internals (lock held) ─────────────────────────────

    async def _initialize(self, preferred: Optional[Framework], allow_fallback: bool) -> Framework:
        if self._engine is not None:
            await self._dispose()

        framework = Framework.parse(preferred) if preferred is not None else select_framework(self.platform)
        attempts: dict[Framework, BaseException] = {}

        try:
            await self._start(framework)
            return framework
        except Exception as e:
            if not allow_fallback:
                raise
            logger.warning("Failed to initialize %s: %s", framework.value, e)
            attempts[framework] = e

        for alternative in fallback_sequence(framework, self.platform):
            logger.info("Trying fallback: %s", alternative.value)
            try:
                await self._start(alternative)
            except Exception as e:
                logger.warning("Fallback %s failed: %s", alternative.value, e)
                attempts[alternative] = e
                continue
            logger.info("Successfully initialized fallback: %s", alternative.value)
            return alternative

        last_error = attempts[next(reversed(attempts))]
        raise AllFrameworksExhaustedError(attempts) from last_error

    async def _start(self, framework: Framework) -> None:
        engine = self._engine_factory(framework)
        try:
            await engine.initialize()
        except BaseException:
            await engine.dispose()
            raise
        self._engine = engine
        self._framework = framework
        logger.info("Initialized inference engine: %s", framework.value)

    async def _dispose(self) -> None:
        engine = self._engine
        self._engine = None
        self._framework = None
        if engine is not None:
            await engine.dispose()
