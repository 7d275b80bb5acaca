#!/usr/bin/env python3
"""
Benchmark results storage and reporting.

Contains the structured output data from completed benchmarks.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..framework import Framework
from .time_tracking import TimeLog


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Timing statistics for one framework over one benchmark run.

    Times are in milliseconds. Initialization and cleanup are measured
    once per engine; total covers the whole engine lifetime.
    """

    framework: Framework
    avg_inference_time_ms: float
    min_inference_time_ms: float
    max_inference_time_ms: float
    iterations: int
    warmup_iterations: int = 0
    initialization_time_ms: float = 0.0
    cleanup_time_ms: float = 0.0
    total_time_ms: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_time_log(cls, framework: Framework, time_log: TimeLog) -> "BenchmarkResult":
        """Aggregate the steady-state samples of a time log."""
        return cls(
            framework=framework,
            avg_inference_time_ms=time_log.get_average_steady_state_time() * 1000,
            min_inference_time_ms=time_log.get_min_steady_state_time() * 1000,
            max_inference_time_ms=time_log.get_max_steady_state_time() * 1000,
            iterations=len(time_log.steady_state_times),
            warmup_iterations=len(time_log.warmup_times),
            initialization_time_ms=(time_log.engine_initialization or 0.0) * 1000,
            cleanup_time_ms=(time_log.engine_cleanup or 0.0) * 1000,
            total_time_ms=time_log.get_total_time() * 1000,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "framework": self.framework.value,
            "avg_inference_time_ms": self.avg_inference_time_ms,
            "min_inference_time_ms": self.min_inference_time_ms,
            "max_inference_time_ms": self.max_inference_time_ms,
            "iterations": self.iterations,
            "warmup_iterations": self.warmup_iterations,
            "initialization_time_ms": self.initialization_time_ms,
            "cleanup_time_ms": self.cleanup_time_ms,
            "total_time_ms": self.total_time_ms,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"Framework: {self.framework.value}\n"
            f"Avg: {self.avg_inference_time_ms:.2f}ms\n"
            f"Min: {self.min_inference_time_ms:.2f}ms\n"
            f"Max: {self.max_inference_time_ms:.2f}ms\n"
        )


class SkipReason(str, Enum):
    """Why a framework has no benchmark result."""

    UNAVAILABLE = "unavailable"  # not supported on this host
    FAILED = "failed"  # supported, but initialization or inference raised


@dataclass(frozen=True)
class BenchmarkSkip:
    """A framework the harness could not measure."""

    framework: Framework
    reason: SkipReason
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"framework": self.framework.value, "reason": self.reason.value, "error": self.error}


@dataclass
class BenchmarkReport:
    """Everything one benchmark run produced, measured or not."""

    results: dict[Framework, BenchmarkResult] = field(default_factory=dict)
    skipped: dict[Framework, BenchmarkSkip] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=datetime.now)

    def ranked(self) -> list[BenchmarkResult]:
        """Results sorted by average inference time, fastest first."""
        return sorted(self.results.values(), key=lambda result: result.avg_inference_time_ms)

    def fastest(self) -> Optional[BenchmarkResult]:
        ranked = self.ranked()
        return ranked[0] if ranked else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated_at": self.generated_at.isoformat(),
            "results": [result.to_dict() for result in self.ranked()],
            "skipped": [skip.to_dict() for skip in self.skipped.values()],
        }

    def to_markdown(self) -> str:
        """Render the report as markdown."""
        lines = [
            "# Inference Engine Benchmark Report",
            f"Generated: {self.generated_at:%Y-%m-%d %H:%M:%S}",
            "",
            "## Results (sorted by average inference time)",
            "",
        ]

        for position, result in enumerate(self.ranked(), 1):
            lines.extend([
                f"### {position}. {result.framework.value}",
                f"- **Average Inference Time**: {result.avg_inference_time_ms:.2f} ms",
                f"- **Min Inference Time**: {result.min_inference_time_ms:.2f} ms",
                f"- **Max Inference Time**: {result.max_inference_time_ms:.2f} ms",
                f"- **Iterations**: {result.iterations}",
                f"- **Initialization Time**: {result.initialization_time_ms:.2f} ms",
                f"- **Cleanup Time**: {result.cleanup_time_ms:.2f} ms",
                "",
            ])

        if self.skipped:
            lines.extend(["## Skipped", ""])
            for skip in self.skipped.values():
                detail = f": {skip.error}" if skip.error else ""
                lines.append(f"- **{skip.framework.value}** ({skip.reason.value}){detail}")
            lines.append("")

        fastest = self.fastest()
        if fastest is not None:
            lines.append(f"## Winner: {fastest.framework.value}")
            lines.append(f"Fastest average inference time: {fastest.avg_inference_time_ms:.2f} ms")

        return "\n".join(lines) + "\n"
