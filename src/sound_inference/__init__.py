"""On-device sound classifier runtime selection, fallback and benchmarking."""

from .benchmark import BenchmarkReport, BenchmarkResult, BenchmarkSkip, BenchmarkSuite, SkipReason
from .config import InferenceConfig
from .errors import (
    AllFrameworksExhaustedError,
    EngineInternalError,
    InferenceError,
    NotInitializedError,
    UnavailableOnPlatformError,
)
from .framework import Framework
from .frameworks import FakeEngine, InferenceEngine, create_engine, engine_factory
from .manager import InferenceManager
from .platform import Accelerator, HostPlatform, PlatformInfo
from .selection import fallback_sequence, select_framework

__all__ = [
    "Accelerator",
    "AllFrameworksExhaustedError",
    "BenchmarkReport",
    "BenchmarkResult",
    "BenchmarkSkip",
    "BenchmarkSuite",
    "EngineInternalError",
    "FakeEngine",
    "Framework",
    "HostPlatform",
    "InferenceConfig",
    "InferenceEngine",
    "InferenceError",
    "InferenceManager",
    "NotInitializedError",
    "PlatformInfo",
    "SkipReason",
    "UnavailableOnPlatformError",
    "create_engine",
    "engine_factory",
    "fallback_sequence",
    "select_framework",
]
