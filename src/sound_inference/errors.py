"""Exceptions raised by engines, the manager and the benchmark harness."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .framework import Framework
    from .platform import HostPlatform


class InferenceError(Exception):
    """Base class for every error this package raises on purpose."""


class UnavailableOnPlatformError(InferenceError):
    """The engine needs a platform feature or accelerator the host lacks."""

    def __init__(self, framework: "Framework", host: "HostPlatform", detail: str = ""):
        self.framework = framework
        self.host = host
        message = f"{framework.value} is not available on {host.value}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class NotInitializedError(InferenceError):
    """Inference was requested before an engine was initialized."""

    def __init__(self, message: str = "Inference engine not initialized"):
        super().__init__(message)


class EngineInternalError(InferenceError):
    """A runtime failed while loading a model or running inference."""

    def __init__(self, framework: "Framework", message: str):
        self.framework = framework
        super().__init__(f"{framework.value}: {message}")


class AllFrameworksExhaustedError(InferenceError):
    """Every candidate framework failed to initialize."""

    def __init__(self, attempts: "dict[Framework, BaseException]"):
        self.attempts = dict(attempts)
        tried = ", ".join(framework.value for framework in self.attempts) or "none"
        super().__init__(f"All inference frameworks failed to initialize (tried: {tried})")
