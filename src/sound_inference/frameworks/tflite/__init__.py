from .engine import TFLiteEngine, TFLiteGPUEngine, TFLiteMetalEngine, TFLiteNNAPIEngine

__all__ = ["TFLiteEngine", "TFLiteGPUEngine", "TFLiteMetalEngine", "TFLiteNNAPIEngine"]
