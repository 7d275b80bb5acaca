"""Shared fixtures: simulated hosts and a recording fake-engine factory."""

from collections.abc import Iterable
from typing import Optional

import pytest

from sound_inference.config import InferenceConfig
from sound_inference.framework import Framework
from sound_inference.frameworks.fake import FakeEngine
from sound_inference.platform import PlatformInfo


class FakeEngineFactory:
    """Builds FakeEngines and remembers every engine it created."""

    def __init__(
        self,
        platform: PlatformInfo,
        *,
        failing: Iterable[Framework] = (),
        failing_infer: Iterable[Framework] = (),
        available: Optional[Iterable[Framework]] = None,
        config: Optional[InferenceConfig] = None,
    ):
        self.platform = platform
        self.failing = set(failing)
        self.failing_infer = set(failing_infer)
        self.available = set(available) if available is not None else None
        self.config = config
        self.created: list[FakeEngine] = []
        self.events: list[tuple[str, Framework]] = []

    def __call__(self, framework: Framework) -> FakeEngine:
        engine = FakeEngine(
            framework,
            self.platform,
            self.config,
            available=None if self.available is None else framework in self.available,
            fail_on_initialize=framework in self.failing,
            fail_on_infer=framework in self.failing_infer,
            events=self.events,
        )
        self.created.append(engine)
        return engine

    def engines_for(self, framework: Framework) -> list[FakeEngine]:
        return [engine for engine in self.created if engine.framework == framework]


@pytest.fixture
def linux():
    return PlatformInfo.for_host("linux")


@pytest.fixture
def android():
    return PlatformInfo.for_host("android")


@pytest.fixture
def ios():
    return PlatformInfo.for_host("ios")


@pytest.fixture
def web():
    return PlatformInfo.for_host("web")


@pytest.fixture
def sample_window():
    return [float(i % 100) / 100.0 for i in range(1000)]
