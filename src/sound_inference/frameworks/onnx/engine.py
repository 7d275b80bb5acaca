#!/usr/bin/env python3
"""
ONNX Runtime engine implementation.
"""

from typing import Any

import numpy as np

from ...framework import Framework
from ..base import InferenceEngine


class ONNXRuntimeEngine(InferenceEngine):
    """Cross-platform engine backed by an onnxruntime InferenceSession."""

    framework = Framework.ONNX_RUNTIME

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._session = None
        self._input = None

    def load(self) -> None:
        import onnxruntime as ort

        model_path = self.require_model_file()
        available = set(ort.get_available_providers())
        providers = [p for p in self.config.onnx_providers if p in available] or ["CPUExecutionProvider"]
        self._session = ort.InferenceSession(str(model_path), providers=providers)
        self._input = self._session.get_inputs()[0]

    def run(self, audio: np.ndarray) -> Any:
        feed = audio if len(self._input.shape) == 1 else audio.reshape(1, -1)
        return self._session.run(None, {self._input.name: feed})[0]

    def release(self) -> None:
        self._session = None
        self._input = None
