from .engine import ONNXRuntimeEngine

__all__ = ["ONNXRuntimeEngine"]
