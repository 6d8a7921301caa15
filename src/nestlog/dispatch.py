"""Call-site resolution - decides between a bound handler and a no-op.

Three call shapes share one gate (enabled flag + minimum rank, read at the
moment of resolution) but differ in how the level is found:

- named / ``as_``: strict registry lookup, unknown levels raise
- dynamic ``logger("level")``: unknown levels degrade to ERROR with a marker
- default ``log``: whatever ``logger.level`` was last set to
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from nestlog.colors import is_themed, theme
from nestlog.severity import Handler, SeverityLevel

if TYPE_CHECKING:
    from nestlog.logger import Logger

INVALID_LEVEL_MARKER = "[Invalid logging level]"
INVALID_LEVEL_SEVERITY = "ERROR"


@dataclass(frozen=True)
class BoundCall:
    """A resolved severity entry packaged with its rendered prefix."""

    entry: SeverityLevel
    prefix: str

    @property
    def handler(self) -> Handler:
        return self.entry.handler

    def __call__(self, *args: Any) -> None:
        self.entry.handler(self.prefix, *args)


class _NoOp:
    """Callable that swallows every argument."""

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        return None

    def __repr__(self) -> str:
        return "NOOP"


NOOP = _NoOp()

Resolved = BoundCall | _NoOp


def render_prefix(level: str, namespace: str, colors: bool = False) -> str:
    """Render ``[LEVEL][namespace]``, theming the level label when enabled."""
    label = f"[{level}]"
    if colors and is_themed(level):
        label = theme(label, level)
    return f"{label}[{namespace}]"


def passes_gate(logger: Logger, entry: SeverityLevel) -> bool:
    """Enabled and at or above the logger's minimum rank."""
    return logger.enabled and entry.rank >= logger.min_level_rank


def _bind(logger: Logger, entry: SeverityLevel, prefix: str) -> Resolved:
    if not passes_gate(logger, entry):
        return NOOP
    return BoundCall(entry, prefix)


def resolve_named(logger: Logger, level: str) -> Resolved:
    """Strict resolution used by named methods and ``as_``.

    Raises:
        UnknownLevelError: If the level is not registered
    """
    entry = logger.registry.get(level)
    return _bind(logger, entry, render_prefix(entry.name, logger.namespace, logger.colors))


def resolve_dynamic(logger: Logger, level: str) -> Resolved:
    """Call-syntax resolution; never raises on an unknown level."""
    entry = logger.registry.find(level)
    if entry is None:
        fallback = logger.registry.resolve(INVALID_LEVEL_SEVERITY)
        prefix = (
            render_prefix(INVALID_LEVEL_SEVERITY, logger.namespace, logger.colors)
            + f"{INVALID_LEVEL_MARKER}[{level.upper()}]"
        )
        return _bind(logger, fallback, prefix)
    return _bind(logger, entry, render_prefix(entry.name, logger.namespace, logger.colors))


def resolve_default(logger: Logger) -> Resolved:
    """Resolution for the default ``log`` accessor."""
    call = logger.default_call
    if not passes_gate(logger, call.entry):
        return NOOP
    return call


def invoke(logger: Logger, level: str, *args: Any, strict: bool = False) -> None:
    """Resolve ``level`` for ``logger`` and forward ``args`` to the sink.

    Args:
        logger: Logger whose gate and namespace apply
        level: Level name (case-insensitive)
        *args: Forwarded verbatim after the prefix
        strict: Raise on unknown levels instead of degrading to ERROR
    """
    resolver = resolve_named if strict else resolve_dynamic
    resolver(logger, level)(*args)
