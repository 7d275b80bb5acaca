#!/usr/bin/env python3
"""
Inference engine implementations.

One engine per supported runtime, each exposing the same
initialize/infer/dispose lifecycle.
"""

from .base import ENGINE_REQUIREMENTS, InferenceEngine, is_framework_available
from .factory import ENGINE_CLASSES, EngineFactory, create_engine, engine_factory, get_available_frameworks
from .fake import FakeEngine

__all__ = [
    "ENGINE_CLASSES",
    "ENGINE_REQUIREMENTS",
    "EngineFactory",
    "FakeEngine",
    "InferenceEngine",
    "create_engine",
    "engine_factory",
    "get_available_frameworks",
    "is_framework_available",
]
