#!/usr/bin/env python3
"""
PyTorch engine implementation.

Loads TorchScript exports: ``.ptl`` files go through the lite interpreter
used by PyTorch Mobile, anything else through torch.jit.load.
"""

from typing import Any

import numpy as np

from ...framework import Framework
from ..base import InferenceEngine


class PyTorchMobileEngine(InferenceEngine):
    """Engine backed by a scripted PyTorch module."""

    framework = Framework.PYTORCH_MOBILE

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._module = None

    def load(self) -> None:
        import torch

        model_path = self.require_model_file()
        if model_path.suffix == ".ptl":
            from torch.jit.mobile import _load_for_lite_interpreter

            self._module = _load_for_lite_interpreter(str(model_path), map_location="cpu")
        else:
            self._module = torch.jit.load(str(model_path), map_location="cpu")
            self._module.eval()

    def run(self, audio: np.ndarray) -> Any:
        import torch

        with torch.inference_mode():
            output = self._module(torch.from_numpy(audio))

        # Multi-output exports return (scores, embeddings, ...)
        if isinstance(output, (tuple, list)):
            output = output[0]
        return output.detach().cpu().numpy()

    def release(self) -> None:
        self._module = None
