"""Pytest fixtures for nestlog tests.

This module provides:
- SinkRecorder: captures every handler invocation per level
- A fresh, colorless LoggingContext per test (autouse)
- Factories for contexts with namespace overrides

Usage:
    def test_something(context, recorder):
        context.get_logger("app").warn("careful")
        assert recorder.levels == ["WARN"]
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest
import structlog

from nestlog.context import LoggingContext, reset_context
from nestlog.settings import NestlogSettings
from nestlog.severity import SeverityRegistry
from nestlog.sinks import bootstrap_registry
from nestlog.store import MemoryStore

# =============================================================================
# Sink Recording
# =============================================================================


@dataclass
class SinkCall:
    """One handler invocation."""

    level: str
    args: tuple[Any, ...]

    @property
    def prefix(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass
class SinkRecorder:
    """Collects handler invocations for assertions."""

    calls: list[SinkCall] = field(default_factory=list)

    def sink(self, level: str) -> Callable[..., None]:
        def handler(*args: Any) -> None:
            self.calls.append(SinkCall(level=level, args=args))

        return handler

    @property
    def levels(self) -> list[str]:
        return [call.level for call in self.calls]

    @property
    def prefixes(self) -> list[str]:
        return [call.prefix for call in self.calls]

    def clear(self) -> None:
        self.calls.clear()


def make_recording_registry(recorder: SinkRecorder) -> SeverityRegistry:
    """Baseline registry whose handlers all write into the recorder."""
    registry = bootstrap_registry(SeverityRegistry())
    for entry in registry.ordered():
        entry.handler = recorder.sink(entry.name)
    return registry


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def recorder() -> SinkRecorder:
    return SinkRecorder()


@pytest.fixture
def make_context(recorder: SinkRecorder) -> Callable[..., LoggingContext]:
    """Factory for recording contexts, optionally seeded with namespace overrides."""

    def factory(overrides: Any = None, **kwargs: Any) -> LoggingContext:
        settings = kwargs.pop("settings", None) or NestlogSettings(colors=False)
        store = kwargs.pop("store", None)
        if store is None:
            store = MemoryStore(
                {} if overrides is None else {settings.namespace_config_key: overrides}
            )
        registry = kwargs.pop("registry", None) or make_recording_registry(recorder)
        return reset_context(settings=settings, store=store, registry=registry, **kwargs)

    return factory


@pytest.fixture(autouse=True)
def context(make_context: Callable[..., LoggingContext]) -> Iterator[LoggingContext]:
    """Fresh process-wide context for every test."""
    yield make_context()
    reset_context(settings=NestlogSettings(colors=False), store=MemoryStore())


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
