"""Identifiers for the supported on-device inference runtimes."""

from enum import Enum


class Framework(str, Enum):
    """A runtime/accelerator pairing an engine can be built for."""

    TFLITE_CPU = "tflite_cpu"
    TFLITE_GPU = "tflite_gpu"
    TFLITE_NNAPI = "tflite_nnapi"
    TFLITE_METAL = "tflite_metal"
    ONNX_RUNTIME = "onnx_runtime"
    COREML = "coreml"
    PYTORCH_MOBILE = "pytorch_mobile"

    @classmethod
    def parse(cls, name: "Framework | str") -> "Framework":
        """Resolve a framework from its value, raising ValueError for unknown names."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            available = ", ".join(framework.value for framework in cls)
            raise ValueError(f"Unknown framework: {name}. Available: {available}") from None
