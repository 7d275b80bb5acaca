"""Simulated engine for CPU-only testing and dry-run benchmarks.

Returns deterministic scores derived from the audio content, allowing
reliable tests of selection, fallback and benchmarking without any
runtime installed.
"""

import hashlib
import time
from typing import Any, Optional

import numpy as np

from ..config import InferenceConfig
from ..constants import SIMULATED_LATENCY_MS
from ..framework import Framework
from ..platform import PlatformInfo
from .base import InferenceEngine


class FakeEngine(InferenceEngine):
    """Deterministic stand-in for any framework.

    Availability follows the real framework's platform requirements unless
    ``available`` overrides it. Call counters and an optional shared event
    list let tests observe the lifecycle.
    """

    def __init__(
        self,
        framework: Framework,
        platform: PlatformInfo,
        config: Optional[InferenceConfig] = None,
        *,
        latency_ms: float = 0.0,
        available: Optional[bool] = None,
        fail_on_initialize: bool = False,
        fail_on_infer: bool = False,
        events: Optional[list[tuple[str, Framework]]] = None,
    ):
        """Initialize the fake engine.

        Args:
            framework: Framework this engine pretends to be.
            platform: Host capabilities.
            config: Runtime configuration (only num_classes and labels are used).
            latency_ms: Simulated inference latency in milliseconds.
            available: Force ``is_available`` instead of using the real rules.
            fail_on_initialize: Make ``initialize`` fail like a broken runtime.
            fail_on_infer: Make every ``infer`` fail like a broken runtime.
            events: Shared list receiving ("initialize"|"infer"|"dispose", framework).
        """
        super().__init__(platform, config)
        self.framework = framework
        self._latency_ms = latency_ms
        self._available = available
        self._fail_on_initialize = fail_on_initialize
        self._fail_on_infer = fail_on_infer
        self._events = events
        self.initialize_count = 0
        self.infer_count = 0
        self.dispose_count = 0
        self._loaded = False

    @property
    def is_available(self) -> bool:
        if self._available is not None:
            return self._available
        return super().is_available

    async def initialize(self) -> None:
        self.initialize_count += 1
        self._record("initialize")
        await super().initialize()

    async def infer(self, samples) -> dict[str, Any]:
        self.infer_count += 1
        self._record("infer")
        return await super().infer(samples)

    async def dispose(self) -> None:
        self.dispose_count += 1
        self._record("dispose")
        await super().dispose()

    def load(self) -> None:
        if self._fail_on_initialize:
            raise RuntimeError(f"simulated {self.framework.value} initialization failure")
        self._loaded = True

    def run(self, audio: np.ndarray) -> Any:
        if self._fail_on_infer:
            raise RuntimeError(f"simulated {self.framework.value} inference failure")
        if self._latency_ms > 0:
            time.sleep(self._latency_ms / 1000.0)

        seed = int(self._hash_audio(audio)[:8], 16)
        rng = np.random.default_rng(seed)
        logits = rng.standard_normal(self.config.num_classes).astype(np.float32)
        exp = np.exp(logits - logits.max())
        return exp / exp.sum()

    def release(self) -> None:
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def _record(self, event: str) -> None:
        if self._events is not None:
            self._events.append((event, self.framework))

    @staticmethod
    def _hash_audio(audio: np.ndarray) -> str:
        """Short hash of the leading samples for deterministic output."""
        samples = audio[: min(100, len(audio))]
        return hashlib.sha256(samples.tobytes()).hexdigest()


def simulated_latency(framework: Framework) -> float:
    """Per-call latency the simulated runtime of a framework reports."""
    return SIMULATED_LATENCY_MS.get(framework.value, 0.0)
