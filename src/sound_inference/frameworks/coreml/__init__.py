from .engine import CoreMLEngine

__all__ = ["CoreMLEngine"]
