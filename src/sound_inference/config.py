"""
Configuration for the inference runtimes.

Provides structured configuration for model assets, delegate libraries
and benchmark defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .constants import BENCHMARK_ITERATIONS, MODEL_NAME, NUM_CLASSES, SAMPLE_RATE, WARMUP_ITERATIONS, WINDOW_SAMPLES
from .framework import Framework

ENV_PREFIX = "SOUND_INFERENCE_"

# Model file extension per runtime family
MODEL_SUFFIXES: dict[Framework, str] = {
    Framework.TFLITE_CPU: ".tflite",
    Framework.TFLITE_GPU: ".tflite",
    Framework.TFLITE_NNAPI: ".tflite",
    Framework.TFLITE_METAL: ".tflite",
    Framework.ONNX_RUNTIME: ".onnx",
    Framework.COREML: ".mlpackage",
    Framework.PYTORCH_MOBILE: ".ptl",
}

DEFAULT_DELEGATE_LIBRARIES: dict[Framework, str] = {
    Framework.TFLITE_GPU: "libtensorflowlite_gpu_delegate.so",
    Framework.TFLITE_NNAPI: "libnnapi_delegate.so",
    Framework.TFLITE_METAL: "libtensorflowlite_metal_delegate.dylib",
}


@dataclass
class InferenceConfig:
    """
    Runtime configuration shared by the manager, engines and benchmark.

    Example:
        config = InferenceConfig(
            model_dir=Path("assets"),
            labels_path=Path("assets/yamnet_class_map.csv"),
            benchmark_iterations=20,
        )
    """

    # Directory holding one model file per runtime (yamnet.tflite, yamnet.onnx, ...)
    model_dir: Path = field(default_factory=lambda: Path("assets"))
    model_name: str = MODEL_NAME

    # Optional class map CSV (index,mid,display_name)
    labels_path: Optional[Path] = None

    # Model I/O
    num_classes: int = NUM_CLASSES
    sample_rate: int = SAMPLE_RATE
    window_samples: int = WINDOW_SAMPLES

    # Benchmark defaults
    warmup_iterations: int = WARMUP_ITERATIONS
    benchmark_iterations: int = BENCHMARK_ITERATIONS

    # Shared library loaded for each delegate-backed TFLite framework
    delegate_libraries: dict[Framework, str] = field(default_factory=lambda: dict(DEFAULT_DELEGATE_LIBRARIES))

    # ONNX Runtime execution providers, in priority order
    onnx_providers: list[str] = field(default_factory=lambda: ["CPUExecutionProvider"])

    # Use simulated engines instead of real runtimes
    simulate: bool = False

    def model_path(self, framework: Framework) -> Path:
        """Path of the model file the given framework loads."""
        return Path(self.model_dir) / f"{self.model_name}{MODEL_SUFFIXES[framework]}"

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None, **overrides: Any) -> InferenceConfig:
        """
        Build a config from SOUND_INFERENCE_* environment variables.

        Recognized: MODEL_DIR, MODEL_NAME, LABELS, WARMUP_ITERATIONS,
        BENCHMARK_ITERATIONS, SIMULATE. Keyword overrides win over the
        environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if f"{ENV_PREFIX}MODEL_DIR" in env:
            values["model_dir"] = Path(env[f"{ENV_PREFIX}MODEL_DIR"])
        if f"{ENV_PREFIX}MODEL_NAME" in env:
            values["model_name"] = env[f"{ENV_PREFIX}MODEL_NAME"]
        if f"{ENV_PREFIX}LABELS" in env:
            values["labels_path"] = Path(env[f"{ENV_PREFIX}LABELS"])
        if f"{ENV_PREFIX}WARMUP_ITERATIONS" in env:
            values["warmup_iterations"] = int(env[f"{ENV_PREFIX}WARMUP_ITERATIONS"])
        if f"{ENV_PREFIX}BENCHMARK_ITERATIONS" in env:
            values["benchmark_iterations"] = int(env[f"{ENV_PREFIX}BENCHMARK_ITERATIONS"])
        if f"{ENV_PREFIX}SIMULATE" in env:
            values["simulate"] = env[f"{ENV_PREFIX}SIMULATE"].strip().lower() in ("1", "true", "yes", "on")

        values.update(overrides)
        return cls(**values)
