#!/usr/bin/env python3
"""
Engine factory.

Maps every framework identifier to its engine class and builds
factories the manager and benchmark harness create engines from.
"""

from collections.abc import Callable
from typing import Optional

from ..config import InferenceConfig
from ..framework import Framework
from ..platform import PlatformInfo
from .base import InferenceEngine, is_framework_available
from .coreml import CoreMLEngine
from .fake import FakeEngine, simulated_latency
from .onnx import ONNXRuntimeEngine
from .pytorch import PyTorchMobileEngine
from .tflite import TFLiteEngine, TFLiteGPUEngine, TFLiteMetalEngine, TFLiteNNAPIEngine

EngineFactory = Callable[[Framework], InferenceEngine]

ENGINE_CLASSES: dict[Framework, type[InferenceEngine]] = {
    Framework.TFLITE_CPU: TFLiteEngine,
    Framework.TFLITE_GPU: TFLiteGPUEngine,
    Framework.TFLITE_NNAPI: TFLiteNNAPIEngine,
    Framework.TFLITE_METAL: TFLiteMetalEngine,
    Framework.ONNX_RUNTIME: ONNXRuntimeEngine,
    Framework.COREML: CoreMLEngine,
    Framework.PYTORCH_MOBILE: PyTorchMobileEngine,
}

_missing = set(Framework) - ENGINE_CLASSES.keys()
if _missing:
    raise RuntimeError(f"No engine registered for: {', '.join(sorted(f.value for f in _missing))}")


def create_engine(
    framework: Framework | str,
    platform: PlatformInfo,
    config: Optional[InferenceConfig] = None,
) -> InferenceEngine:
    """Create an uninitialized engine for the given framework."""
    framework = Framework.parse(framework)
    config = config or InferenceConfig()
    if config.simulate:
        return FakeEngine(framework, platform, config, latency_ms=simulated_latency(framework))
    return ENGINE_CLASSES[framework](platform, config)


def engine_factory(platform: PlatformInfo, config: Optional[InferenceConfig] = None) -> EngineFactory:
    """Bind platform and config into a framework -> engine callable."""

    def factory(framework: Framework) -> InferenceEngine:
        return create_engine(framework, platform, config)

    return factory


def get_available_frameworks() -> list[str]:
    """Get list of known framework names."""
    return [framework.value for framework in Framework]


def frameworks_available_on(platform: PlatformInfo) -> list[Framework]:
    """Frameworks the host can run, in declaration order."""
    return [framework for framework in Framework if is_framework_available(framework, platform)]
