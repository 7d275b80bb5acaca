#!/usr/bin/env python3
"""
TensorFlow Lite engine implementations.

One interpreter per engine; the GPU, NNAPI and Metal variants differ only
in the delegate attached at load time.
"""

import logging
from typing import Any

import numpy as np

from ...framework import Framework
from ..base import InferenceEngine

logger = logging.getLogger(__name__)


class TFLiteEngine(InferenceEngine):
    """TFLite interpreter running on the CPU kernels."""

    framework = Framework.TFLITE_CPU

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._interpreter = None

    def load(self) -> None:
        from ai_edge_litert.interpreter import Interpreter

        model_path = self.require_model_file()
        delegates = self._load_delegates()
        self._interpreter = Interpreter(
            model_path=str(model_path),
            experimental_delegates=delegates or None,
        )
        self._interpreter.allocate_tensors()
        logger.debug("Loaded %s with %d delegate(s)", model_path.name, len(delegates))

    def _load_delegates(self) -> list[Any]:
        return []

    def run(self, audio: np.ndarray) -> Any:
        interpreter = self._interpreter
        input_detail = interpreter.get_input_details()[0]

        # Waveform models take [samples]; batched exports take [1, samples]
        shape = [audio.size] if len(input_detail["shape"]) == 1 else [1, audio.size]
        if list(input_detail["shape"]) != shape:
            interpreter.resize_tensor_input(input_detail["index"], shape)
            interpreter.allocate_tensors()

        interpreter.set_tensor(input_detail["index"], audio.reshape(shape))
        interpreter.invoke()

        output_detail = interpreter.get_output_details()[0]
        return interpreter.get_tensor(output_detail["index"]).copy()

    def release(self) -> None:
        self._interpreter = None


class TFLiteDelegateEngine(TFLiteEngine):
    """TFLite interpreter with a hardware delegate loaded from a shared library."""

    def _load_delegates(self) -> list[Any]:
        from ai_edge_litert.interpreter import load_delegate

        library = self.config.delegate_libraries.get(self.framework)
        if not library:
            raise RuntimeError(f"No delegate library configured for {self.framework.value}")
        return [load_delegate(library)]


class TFLiteGPUEngine(TFLiteDelegateEngine):
    framework = Framework.TFLITE_GPU


class TFLiteNNAPIEngine(TFLiteDelegateEngine):
    framework = Framework.TFLITE_NNAPI


class TFLiteMetalEngine(TFLiteDelegateEngine):
    framework = Framework.TFLITE_METAL
