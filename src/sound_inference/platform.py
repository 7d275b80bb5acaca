#!/usr/bin/env python3
"""
Host platform capabilities.

Engines and the selection policy never query the running interpreter
directly; they receive a PlatformInfo so tests can simulate any host.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum


class HostPlatform(str, Enum):
    """Operating environment the classifier runs in."""

    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"
    OTHER = "other"


class Accelerator(str, Enum):
    """Hardware execution backends a delegate can attach to."""

    GPU = "gpu"
    NNAPI = "nnapi"
    METAL = "metal"


# Accelerators assumed present when only the host platform is known
DEFAULT_ACCELERATORS: dict[HostPlatform, frozenset[Accelerator]] = {
    HostPlatform.ANDROID: frozenset({Accelerator.GPU, Accelerator.NNAPI}),
    HostPlatform.IOS: frozenset({Accelerator.METAL}),
}

DESKTOP_PLATFORMS = frozenset({HostPlatform.MACOS, HostPlatform.LINUX, HostPlatform.WINDOWS, HostPlatform.OTHER})


@dataclass(frozen=True)
class PlatformInfo:
    """Static description of the host: which platform, which accelerators."""

    host: HostPlatform
    accelerators: frozenset[Accelerator] = field(default_factory=frozenset)

    @classmethod
    def for_host(cls, host: HostPlatform | str) -> "PlatformInfo":
        """Build the capabilities a typical device of this platform has."""
        host = HostPlatform(host)
        return cls(host=host, accelerators=DEFAULT_ACCELERATORS.get(host, frozenset()))

    @classmethod
    def detect(cls) -> "PlatformInfo":
        """Describe the interpreter this process is running on."""
        return cls.for_host(_host_from_sys_platform(sys.platform))

    @property
    def is_ios(self) -> bool:
        return self.host is HostPlatform.IOS

    @property
    def is_android(self) -> bool:
        return self.host is HostPlatform.ANDROID

    @property
    def is_web(self) -> bool:
        return self.host is HostPlatform.WEB

    @property
    def is_desktop(self) -> bool:
        return self.host in DESKTOP_PLATFORMS

    def supports(self, accelerator: Accelerator) -> bool:
        """Whether the hardware exposes the given accelerator."""
        return accelerator in self.accelerators


def _host_from_sys_platform(name: str) -> HostPlatform:
    if name == "ios":
        return HostPlatform.IOS
    if name == "android":
        return HostPlatform.ANDROID
    if name in ("emscripten", "wasi"):
        return HostPlatform.WEB
    if name == "darwin":
        return HostPlatform.MACOS
    if name == "win32":
        return HostPlatform.WINDOWS
    if name.startswith("linux"):
        return HostPlatform.LINUX
    return HostPlatform.OTHER
