#!/usr/bin/env python3
"""
Time tracking utilities for benchmark measurement.

Provides structured timing tracking for each phase of an engine benchmark.
"""

import time
from dataclasses import dataclass, field
from typing import Union


@dataclass
class TimeLog:
    """
    Tracks timing for each step of benchmarking one engine.

    All times are in seconds (float).
    """

    # Lifecycle timing
    engine_initialization: Union[float, None] = None
    engine_cleanup: Union[float, None] = None

    # Inference timing arrays
    warmup_times: list[float] = field(default_factory=list)
    steady_state_times: list[float] = field(default_factory=list)

    def start_timer(self) -> float:
        """Start a timer and return the start time."""
        return time.perf_counter()

    def end_timer(self, start_time: float) -> float:
        """End a timer and return elapsed time in seconds."""
        return time.perf_counter() - start_time

    def add_iteration_time(self, duration: float, is_warmup: bool = False) -> None:
        """Add an iteration time to the appropriate array."""
        if is_warmup:
            self.warmup_times.append(duration)
        else:
            self.steady_state_times.append(duration)

    def get_average_steady_state_time(self) -> float:
        """Get average steady-state inference time, clamped into [min, max]."""
        if not self.steady_state_times:
            return 0.0
        average = sum(self.steady_state_times) / len(self.steady_state_times)
        # Float summation can push the mean of identical samples past them
        return min(max(average, min(self.steady_state_times)), max(self.steady_state_times))

    def get_min_steady_state_time(self) -> float:
        return min(self.steady_state_times) if self.steady_state_times else 0.0

    def get_max_steady_state_time(self) -> float:
        return max(self.steady_state_times) if self.steady_state_times else 0.0

    def get_total_time(self) -> float:
        """Get total benchmark time."""
        total = 0.0
        for attr_name in ["engine_initialization", "engine_cleanup"]:
            value = getattr(self, attr_name)
            if value is not None:
                total += value
        return total + sum(self.warmup_times) + sum(self.steady_state_times)
