#!/usr/bin/env python3
"""
Core ML engine implementation.

Predictions need the Core ML framework, so the engine only runs on Apple
platforms even though coremltools installs elsewhere.
"""

from typing import Any

import numpy as np

from ...framework import Framework
from ..base import InferenceEngine


class CoreMLEngine(InferenceEngine):
    """Platform-native engine backed by coremltools.models.MLModel."""

    framework = Framework.COREML

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._model = None
        self._input_name: str | None = None
        self._input_rank = 1
        self._output_name: str | None = None

    def load(self) -> None:
        import coremltools as ct

        model_path = self.require_model_file()
        self._model = ct.models.MLModel(str(model_path), compute_units=ct.ComputeUnit.ALL)

        description = self._model.get_spec().description
        model_input = description.input[0]
        self._input_name = model_input.name
        self._input_rank = len(model_input.type.multiArrayType.shape) or 1
        self._output_name = description.output[0].name

    def run(self, audio: np.ndarray) -> Any:
        feed = audio if self._input_rank == 1 else audio.reshape(1, -1)
        prediction = self._model.predict({self._input_name: feed})
        return np.asarray(prediction[self._output_name])

    def release(self) -> None:
        self._model = None
