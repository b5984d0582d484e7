"""Shared fixtures: rule doubles, configs and engines."""

import asyncio

import pytest

from appibilities.engine.base import BaseRule
from appibilities.engine.config_loader import clear_config_cache
from appibilities.engine.objects import ObjectKind
from appibilities.engine.options import number_option
from appibilities.rules import build_assistant
from appibilities.services.assistant_engine import AssistantEngine


class ReportEveryTextRule(BaseRule):
    """Reports each text layer once."""

    def __init__(self, name: str = "test/report-every-text"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def check(self, context) -> None:
        for layer in context.objects[ObjectKind.TEXT]:
            context.report(f"text {layer.object_id}", layer)


class RaisingRule(BaseRule):
    """Reports ``before`` text layers, then raises."""

    def __init__(self, name: str = "test/raising", before: int = 0):
        self._name = name
        self.before = before

    @property
    def name(self) -> str:
        return self._name

    async def check(self, context) -> None:
        for layer in context.objects[ObjectKind.TEXT][: self.before]:
            context.report("reported before failure", layer)
        raise RuntimeError("check blew up")


class SlowRule(BaseRule):
    """Suspends between reports to expose any interleaving between rules."""

    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def check(self, context) -> None:
        for layer in context.objects[ObjectKind.TEXT]:
            await asyncio.sleep(0)
            context.report(self._name, layer)


class ThresholdRule(BaseRule):
    """Declares a numeric option with a lower bound."""

    @property
    def name(self) -> str:
        return "test/threshold"

    @property
    def options(self):
        return [number_option("limit", minimum=1)]

    async def check(self, context) -> None:
        limit = context.get_option("limit")
        for layer in context.objects[ObjectKind.ANY_LAYER]:
            if layer.frame.width < limit:
                context.report("too narrow", layer)


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def engine() -> AssistantEngine:
    """Engine over the bundled assistant, ignoring any configured file."""
    return AssistantEngine(assistant=build_assistant(), config_path="")
