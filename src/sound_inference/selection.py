"""
Framework selection and fallback ordering.

Both functions are pure: the answer depends only on the framework and the
host description passed in.
"""

from .framework import Framework
from .platform import PlatformInfo

ANDROID_FALLBACKS = (
    Framework.TFLITE_NNAPI,
    Framework.TFLITE_GPU,
    Framework.TFLITE_CPU,
    Framework.ONNX_RUNTIME,
)
IOS_FALLBACKS = (
    Framework.TFLITE_METAL,
    Framework.TFLITE_CPU,
    Framework.ONNX_RUNTIME,
)
DEFAULT_FALLBACKS = (
    Framework.ONNX_RUNTIME,
    Framework.TFLITE_CPU,
)


def select_framework(platform: PlatformInfo) -> Framework:
    """Preferred framework for a host."""
    if platform.is_ios:
        return Framework.COREML
    if platform.is_android:
        return Framework.TFLITE_GPU
    if platform.is_web:
        return Framework.TFLITE_CPU
    return Framework.ONNX_RUNTIME


def fallback_sequence(failed: Framework, platform: PlatformInfo) -> list[Framework]:
    """Alternatives to try, in order, after ``failed`` could not initialize."""
    if platform.is_android:
        candidates = ANDROID_FALLBACKS
    elif platform.is_ios:
        candidates = IOS_FALLBACKS
    else:
        candidates = DEFAULT_FALLBACKS
    return [framework for framework in candidates if framework != failed]
