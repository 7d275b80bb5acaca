#!/usr/bin/env python3
"""
Benchmark harness for comparing inference runtimes.

Provides structured benchmarking with consistent timing, skip tracking
and result reporting.
"""

from .benchmark_results import BenchmarkReport, BenchmarkResult, BenchmarkSkip, SkipReason
from .benchmark_suite import BenchmarkSuite
from .cli_parser import create_parser
from .time_tracking import TimeLog

__all__ = [
    "BenchmarkReport",
    "BenchmarkResult",
    "BenchmarkSkip",
    "BenchmarkSuite",
    "SkipReason",
    "TimeLog",
    "create_parser",
]
