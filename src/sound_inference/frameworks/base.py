#!/usr/bin/env python3
"""
Abstract inference engine interface.

Defines the contract that every runtime wrapper must follow and the
static platform requirements of each framework.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Optional

import numpy as np

from ..config import InferenceConfig
from ..errors import EngineInternalError, InferenceError, NotInitializedError, UnavailableOnPlatformError
from ..framework import Framework
from ..labels import label_for, load_labels
from ..platform import Accelerator, HostPlatform, PlatformInfo

logger = logging.getLogger(__name__)

ALL_HOSTS = frozenset(HostPlatform)


@dataclass(frozen=True)
class EngineRequirements:
    """Hosts a framework runs on and the accelerator it needs, if any."""

    hosts: frozenset[HostPlatform]
    accelerator: Optional[Accelerator] = None


ENGINE_REQUIREMENTS: dict[Framework, EngineRequirements] = {
    Framework.TFLITE_CPU: EngineRequirements(ALL_HOSTS),
    Framework.TFLITE_GPU: EngineRequirements(frozenset({HostPlatform.ANDROID}), Accelerator.GPU),
    Framework.TFLITE_NNAPI: EngineRequirements(frozenset({HostPlatform.ANDROID}), Accelerator.NNAPI),
    Framework.TFLITE_METAL: EngineRequirements(frozenset({HostPlatform.IOS}), Accelerator.METAL),
    Framework.ONNX_RUNTIME: EngineRequirements(ALL_HOSTS - {HostPlatform.WEB}),
    Framework.COREML: EngineRequirements(frozenset({HostPlatform.IOS, HostPlatform.MACOS})),
    Framework.PYTORCH_MOBILE: EngineRequirements(
        frozenset({
            HostPlatform.ANDROID,
            HostPlatform.IOS,
            HostPlatform.LINUX,
            HostPlatform.MACOS,
            HostPlatform.WINDOWS,
        })
    ),
}


def is_framework_available(framework: Framework, platform: PlatformInfo) -> bool:
    """Static compatibility of a framework with a host."""
    requirements = ENGINE_REQUIREMENTS[framework]
    if platform.host not in requirements.hosts:
        return False
    return requirements.accelerator is None or platform.supports(requirements.accelerator)


class InferenceEngine(ABC):
    """
    Abstract base class for a single runtime session.

    Subclasses implement the blocking hooks ``load``, ``run`` and
    ``release``; this class runs them off the event loop, enforces the
    lifecycle and turns raw scores into a result mapping.
    """

    framework: ClassVar[Framework]

    def __init__(self, platform: PlatformInfo, config: Optional[InferenceConfig] = None):
        self.platform = platform
        self.config = config or InferenceConfig()
        self.labels: Optional[list[str]] = None
        self._initialized = False

    @property
    def is_available(self) -> bool:
        """Whether this host can run the framework at all."""
        return is_framework_available(self.framework, self.platform)

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # ── Runtime hooks ─────────────────────────────────────

    @abstractmethod
    def load(self) -> None:
        """
        Acquire runtime resources (model load, delegate attachment).

        Runs in a worker thread. Any exception is reported as an
        EngineInternalError.
        """

    @abstractmethod
    def run(self, audio: np.ndarray) -> Any:
        """
        Run the model on one float32 waveform window.

        Returns the raw score array, shaped (classes,) or (frames, classes).
        """

    @abstractmethod
    def release(self) -> None:
        """Drop runtime handles. Must tolerate being called when nothing is loaded."""

    # ── Lifecycle ─────────────────────────────────────────

    async def initialize(self) -> None:
        if self._initialized:
            return
        if not self.is_available:
            raise UnavailableOnPlatformError(self.framework, self.platform.host, self._unavailable_detail())

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._load_all)
        except InferenceError:
            raise
        except Exception as e:
            raise EngineInternalError(self.framework, f"initialization failed: {e}") from e

        self._initialized = True
        logger.info("%s engine initialized", self.framework.value)

    async def infer(self, samples: Sequence[float]) -> dict[str, Any]:
        if not self._initialized:
            raise NotInitializedError(f"{self.framework.value} engine not initialized")

        audio = np.ascontiguousarray(samples, dtype=np.float32).reshape(-1)
        if audio.size == 0:
            return self._empty_result()

        loop = asyncio.get_running_loop()
        try:
            scores = await loop.run_in_executor(None, self.run, audio)
        except InferenceError:
            raise
        except Exception as e:
            raise EngineInternalError(self.framework, f"inference failed: {e}") from e

        return self._build_result(scores)

    async def dispose(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.release)
        except Exception as e:
            logger.warning("%s engine cleanup failed: %s", self.framework.value, e)
        if self._initialized:
            logger.info("%s engine disposed", self.framework.value)
        self._initialized = False

    # ── Helpers ───────────────────────────────────────────

    def require_model_file(self) -> Path:
        """Resolve this framework's model file, raising if it is missing."""
        path = self.config.model_path(self.framework)
        if not path.exists():
            raise FileNotFoundError(f"Model not found: {path}")
        return path

    def _load_all(self) -> None:
        if self.config.labels_path is not None and self.labels is None:
            self.labels = load_labels(self.config.labels_path)
        self.load()

    def _unavailable_detail(self) -> str:
        requirements = ENGINE_REQUIREMENTS[self.framework]
        if self.platform.host not in requirements.hosts:
            return "unsupported platform"
        if requirements.accelerator is not None and not self.platform.supports(requirements.accelerator):
            return f"{requirements.accelerator.value} accelerator not present"
        return "not supported on this host"

    def _build_result(self, scores: Any) -> dict[str, Any]:
        """Average frame scores and pick the top class."""
        scores = np.asarray(scores, dtype=np.float32)
        if scores.ndim <= 1:
            frame_scores = scores.reshape(1, -1)
        else:
            frame_scores = scores.reshape(-1, scores.shape[-1])
        if frame_scores.size == 0:
            return self._empty_result()

        mean_scores = frame_scores.mean(axis=0)
        class_index = int(np.argmax(mean_scores))
        result: dict[str, Any] = {
            "framework": self.framework.value,
            "class_index": class_index,
            "confidence": float(mean_scores[class_index]),
            "all_scores": mean_scores.tolist(),
        }
        if self.labels is not None:
            result["label"] = label_for(self.labels, class_index)
        return result

    def _empty_result(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "framework": self.framework.value,
            "class_index": -1,
            "confidence": 0.0,
            "all_scores": [],
        }
        if self.labels is not None:
            result["label"] = label_for(self.labels, -1)
        return result
