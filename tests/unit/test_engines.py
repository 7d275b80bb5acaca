"""Unit tests for engine implementations and the engine factory."""

from typing import Any

import numpy as np
import pytest

from sound_inference.config import InferenceConfig
from sound_inference.errors import EngineInternalError, NotInitializedError, UnavailableOnPlatformError
from sound_inference.framework import Framework
from sound_inference.frameworks.base import InferenceEngine, is_framework_available
from sound_inference.frameworks.coreml import CoreMLEngine
from sound_inference.frameworks.factory import (
    ENGINE_CLASSES,
    create_engine,
    engine_factory,
    frameworks_available_on,
    get_available_frameworks,
)
from sound_inference.frameworks.fake import FakeEngine
from sound_inference.frameworks.onnx import ONNXRuntimeEngine
from sound_inference.frameworks.pytorch import PyTorchMobileEngine
from sound_inference.frameworks.tflite import TFLiteEngine, TFLiteGPUEngine, TFLiteMetalEngine, TFLiteNNAPIEngine
from sound_inference.platform import Accelerator, HostPlatform, PlatformInfo


class FixedScoresEngine(InferenceEngine):
    """Engine whose runtime returns a preset score array."""

    framework = Framework.TFLITE_CPU

    def __init__(self, platform, scores, config=None):
        super().__init__(platform, config)
        self.scores = scores
        self.released = 0

    def load(self) -> None:
        pass

    def run(self, audio: np.ndarray) -> Any:
        return self.scores

    def release(self) -> None:
        self.released += 1


class TestAvailability:
    """Tests for static platform compatibility."""

    @pytest.mark.parametrize(
        ("framework", "host", "expected"),
        [
            (Framework.TFLITE_CPU, "linux", True),
            (Framework.TFLITE_CPU, "web", True),
            (Framework.TFLITE_GPU, "android", True),
            (Framework.TFLITE_GPU, "ios", False),
            (Framework.TFLITE_GPU, "linux", False),
            (Framework.TFLITE_NNAPI, "android", True),
            (Framework.TFLITE_NNAPI, "web", False),
            (Framework.TFLITE_METAL, "ios", True),
            (Framework.TFLITE_METAL, "android", False),
            (Framework.ONNX_RUNTIME, "windows", True),
            (Framework.ONNX_RUNTIME, "web", False),
            (Framework.COREML, "ios", True),
            (Framework.COREML, "macos", True),
            (Framework.COREML, "linux", False),
            (Framework.PYTORCH_MOBILE, "android", True),
            (Framework.PYTORCH_MOBILE, "web", False),
        ],
    )
    def test_availability_table(self, framework, host, expected):
        engine = ENGINE_CLASSES[framework](PlatformInfo.for_host(host))
        assert engine.is_available is expected
        assert is_framework_available(framework, PlatformInfo.for_host(host)) is expected

    def test_missing_accelerator(self):
        """An Android device without a GPU can't use the GPU delegate."""
        platform = PlatformInfo(HostPlatform.ANDROID, frozenset({Accelerator.NNAPI}))
        assert not TFLiteGPUEngine(platform).is_available
        assert TFLiteNNAPIEngine(platform).is_available

    @pytest.mark.asyncio
    async def test_availability_is_static(self, linux):
        """Availability does not change after an initialize attempt."""
        engine = FakeEngine(Framework.TFLITE_CPU, linux, fail_on_initialize=True)
        assert engine.is_available
        with pytest.raises(EngineInternalError):
            await engine.initialize()
        assert engine.is_available

    def test_available_on_desktop(self, linux):
        assert frameworks_available_on(linux) == [
            Framework.TFLITE_CPU,
            Framework.ONNX_RUNTIME,
            Framework.PYTORCH_MOBILE,
        ]

    def test_available_on_matches_table(self, android, web):
        """The listing agrees with the static table, accelerators included."""
        for platform in (android, web, PlatformInfo(HostPlatform.ANDROID, frozenset())):
            assert frameworks_available_on(platform) == [
                framework for framework in Framework if is_framework_available(framework, platform)
            ]
        assert frameworks_available_on(web) == [Framework.TFLITE_CPU]


class TestEngineLifecycle:
    """Tests for the lifecycle shared by all engines."""

    @pytest.mark.asyncio
    async def test_unavailable_initialize(self, linux):
        """Initializing on an unsupported host raises before touching the runtime."""
        engine = TFLiteMetalEngine(linux)

        with pytest.raises(UnavailableOnPlatformError) as exc_info:
            await engine.initialize()

        assert exc_info.value.framework == Framework.TFLITE_METAL
        assert exc_info.value.host == HostPlatform.LINUX
        assert "not available on linux" in str(exc_info.value)
        assert not engine.is_initialized

    @pytest.mark.asyncio
    async def test_missing_accelerator_message(self):
        platform = PlatformInfo(HostPlatform.ANDROID, frozenset())
        with pytest.raises(UnavailableOnPlatformError, match="gpu accelerator not present"):
            await TFLiteGPUEngine(platform).initialize()

    @pytest.mark.asyncio
    async def test_missing_model_file(self, linux, tmp_path):
        """A missing model surfaces as EngineInternalError chained to the cause."""
        engine = ONNXRuntimeEngine(linux, InferenceConfig(model_dir=tmp_path))

        with pytest.raises(EngineInternalError) as exc_info:
            await engine.initialize()

        assert exc_info.value.framework == Framework.ONNX_RUNTIME
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert not engine.is_initialized

    @pytest.mark.asyncio
    @pytest.mark.parametrize("engine_cls", [TFLiteEngine, ONNXRuntimeEngine, CoreMLEngine, PyTorchMobileEngine])
    async def test_infer_before_initialize(self, engine_cls):
        engine = engine_cls(PlatformInfo.for_host("macos"))
        with pytest.raises(NotInitializedError):
            await engine.infer([0.0] * 16)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("engine_cls", list(ENGINE_CLASSES.values()))
    async def test_dispose_never_initialized(self, engine_cls, linux):
        """dispose() is safe on an engine that never started, and repeatable."""
        engine = engine_cls(linux)
        await engine.dispose()
        await engine.dispose()
        assert not engine.is_initialized

    @pytest.mark.asyncio
    async def test_frame_scores_are_averaged(self, linux):
        """Multi-frame outputs are averaged before picking the top class."""
        scores = np.array([[0.1, 0.7, 0.2], [0.1, 0.3, 0.6]], dtype=np.float32)
        engine = FixedScoresEngine(linux, scores)
        await engine.initialize()

        result = await engine.infer([0.1] * 32)

        assert result["class_index"] == 1
        assert result["confidence"] == pytest.approx(0.5)
        assert result["all_scores"] == pytest.approx([0.1, 0.5, 0.4])

    @pytest.mark.asyncio
    async def test_batched_scores_are_flattened(self, linux):
        scores = np.array([[[0.2, 0.8]]], dtype=np.float32)
        engine = FixedScoresEngine(linux, scores)
        await engine.initialize()

        result = await engine.infer([0.1] * 4)

        assert result["class_index"] == 1
        assert len(result["all_scores"]) == 2

    @pytest.mark.asyncio
    async def test_empty_input_skips_runtime(self, linux):
        """An empty window never reaches the runtime."""
        engine = FixedScoresEngine(linux, scores=None)
        await engine.initialize()

        result = await engine.infer([])

        assert result == {"framework": "tflite_cpu", "class_index": -1, "confidence": 0.0, "all_scores": []}

    @pytest.mark.asyncio
    async def test_dispose_then_infer(self, linux):
        engine = FixedScoresEngine(linux, np.array([1.0, 0.0]))
        await engine.initialize()
        await engine.dispose()

        assert engine.released == 1
        with pytest.raises(NotInitializedError):
            await engine.infer([0.5])

    @pytest.mark.asyncio
    async def test_labels_attached(self, linux, tmp_path):
        """With a class map configured the top class is named."""
        labels = tmp_path / "class_map.csv"
        labels.write_text("index,mid,display_name\n0,/m/09x0r,Speech\n1,/m/05zppz,Siren\n")
        engine = FixedScoresEngine(linux, np.array([0.2, 0.8]), InferenceConfig(labels_path=labels))
        await engine.initialize()

        result = await engine.infer([0.1, 0.2])

        assert result["label"] == "Siren"


class TestFakeEngine:
    """Tests for the simulated engine."""

    @pytest.mark.asyncio
    async def test_deterministic_output(self, linux):
        """Same input, same scores."""
        engine = FakeEngine(Framework.TFLITE_CPU, linux)
        await engine.initialize()
        audio = [0.1, 0.2, 0.3]

        assert await engine.infer(audio) == await engine.infer(audio)

    @pytest.mark.asyncio
    async def test_scores_shape(self, linux, sample_window):
        engine = FakeEngine(Framework.ONNX_RUNTIME, linux)
        await engine.initialize()

        result = await engine.infer(sample_window)

        assert len(result["all_scores"]) == 521
        assert result["confidence"] == pytest.approx(max(result["all_scores"]))
        assert sum(result["all_scores"]) == pytest.approx(1.0, rel=1e-4)

    @pytest.mark.asyncio
    async def test_counters(self, linux):
        engine = FakeEngine(Framework.TFLITE_CPU, linux)
        await engine.initialize()
        await engine.infer([0.0])
        await engine.dispose()

        assert (engine.initialize_count, engine.infer_count, engine.dispose_count) == (1, 1, 1)
        assert not engine.is_loaded

    @pytest.mark.asyncio
    async def test_latency_simulation(self, linux):
        import time

        engine = FakeEngine(Framework.TFLITE_CPU, linux, latency_ms=30)
        await engine.initialize()
        start = time.perf_counter()
        await engine.infer([0.0] * 10)

        assert time.perf_counter() - start >= 0.03

    @pytest.mark.asyncio
    async def test_forced_unavailable(self, linux):
        engine = FakeEngine(Framework.TFLITE_CPU, linux, available=False)
        with pytest.raises(UnavailableOnPlatformError) as exc_info:
            await engine.initialize()
        assert "not supported on this host" in str(exc_info.value)


class TestFactory:
    """Tests for engine construction."""

    def test_every_framework_registered(self):
        assert set(ENGINE_CLASSES) == set(Framework)

    @pytest.mark.parametrize(
        ("framework", "engine_cls"),
        [
            (Framework.TFLITE_CPU, TFLiteEngine),
            (Framework.TFLITE_GPU, TFLiteGPUEngine),
            (Framework.TFLITE_NNAPI, TFLiteNNAPIEngine),
            (Framework.TFLITE_METAL, TFLiteMetalEngine),
            (Framework.ONNX_RUNTIME, ONNXRuntimeEngine),
            (Framework.COREML, CoreMLEngine),
            (Framework.PYTORCH_MOBILE, PyTorchMobileEngine),
        ],
    )
    def test_create_engine(self, framework, engine_cls, linux):
        engine = create_engine(framework, linux)
        assert type(engine) is engine_cls
        assert engine.framework == framework

    def test_create_engine_by_name(self, linux):
        assert isinstance(create_engine("onnx_runtime", linux), ONNXRuntimeEngine)

    def test_unknown_framework(self, linux):
        with pytest.raises(ValueError, match="Available: tflite_cpu"):
            create_engine("tensorrt", linux)

    def test_simulated_engines(self, linux):
        """simulate=True swaps every runtime for a fake with its simulated latency."""
        engine = create_engine(Framework.TFLITE_GPU, linux, InferenceConfig(simulate=True))
        assert isinstance(engine, FakeEngine)
        assert engine.framework == Framework.TFLITE_GPU
        assert engine._latency_ms == 20.0

    def test_engine_factory_binds_platform(self, android):
        factory = engine_factory(android)
        engine = factory(Framework.TFLITE_NNAPI)
        assert engine.platform is android
        assert engine.is_available

    def test_framework_names(self):
        assert get_available_frameworks() == [
            "tflite_cpu",
            "tflite_gpu",
            "tflite_nnapi",
            "tflite_metal",
            "onnx_runtime",
            "coreml",
            "pytorch_mobile",
        ]

