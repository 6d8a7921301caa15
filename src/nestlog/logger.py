"""Namespace tree nodes.

A Logger is one node of a colon-delimited namespace tree rooted at ``"*"``.
Children are created lazily and memoized per parent; the configuration
passed when a node is first created is the only one ever applied to it.

Usage:
    log = get_logger("app:db", {"minLevel": "debug"})
    log.debug("connected", dsn)
    log("query")("select 1")   # dynamic level, never raises
    log.as_("warn")("slow query")
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from nestlog.dispatch import (
    BoundCall,
    Resolved,
    invoke,
    render_prefix,
    resolve_default,
    resolve_dynamic,
    resolve_named,
)
from nestlog.errors import InvalidNamespaceError
from nestlog.namespaces import DELIMITER, ROOT_NAMESPACE
from nestlog.severity import DEFAULT_LEVEL, DEFAULT_MIN_LEVEL, SeverityLevel, SeverityRegistry

if TYPE_CHECKING:
    from nestlog.context import LoggingContext


class LoggerConfig(BaseModel):
    """Create-time configuration for a logger."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    level: str | None = Field(default=None, description="Default level for log()")
    min_level: str | None = Field(default=None, alias="minLevel", description="Gate threshold")
    enabled: bool | None = Field(default=None, description="Initial enabled flag")


ConfigInput = LoggerConfig | Mapping[str, Any] | None


def _coerce_config(config: ConfigInput) -> LoggerConfig:
    if config is None:
        return LoggerConfig()
    if isinstance(config, LoggerConfig):
        return config
    return LoggerConfig.model_validate(config)


def _first_set(*values: Any) -> Any:
    return next(value for value in values if value is not None)


class Logger:
    """A node in the namespace tree with its own level, threshold and enabled flag."""

    def __init__(self, namespace: str, context: LoggingContext, config: ConfigInput = None) -> None:
        cfg = _coerce_config(config)
        override = context.namespace_configs.lookup(namespace)

        self._namespace = namespace
        self._context = context
        self._children: dict[str, Logger] = {}
        self._enabled: bool = _first_set(override.enabled, cfg.enabled, True)

        self.level = cfg.level or DEFAULT_LEVEL
        self.min_level = _first_set(override.min_level, cfg.min_level, DEFAULT_MIN_LEVEL)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def registry(self) -> SeverityRegistry:
        return self._context.registry

    @property
    def colors(self) -> bool:
        return self._context.colors

    @property
    def level(self) -> str:
        """Level used by ``log()``; unknown names fall back to LOG."""
        return self._level_entry.name

    @level.setter
    def level(self, name: str) -> None:
        with self._context.lock:
            entry = self.registry.resolve(name)
            self._level_entry: SeverityLevel = entry
            self._default_call = BoundCall(
                entry, render_prefix(entry.name, self._namespace, self.colors)
            )

    @property
    def default_call(self) -> BoundCall:
        return self._default_call

    @property
    def min_level(self) -> str:
        """Threshold below which calls are no-ops; unknown names fall back to LOG."""
        return self._min_level_entry.name

    @min_level.setter
    def min_level(self, name: str) -> None:
        with self._context.lock:
            self._min_level_entry: SeverityLevel = self.registry.resolve(name)

    @property
    def min_level_rank(self) -> int:
        return self._min_level_entry.rank

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        with self._context.lock:
            # Namespace config pinning enabled=False wins over code
            if self._context.namespace_configs.forces_disabled(self._namespace):
                self._enabled = False
                return
            self._enabled = bool(value)

    @property
    def children(self) -> Mapping[str, Logger]:
        return MappingProxyType(self._children)

    # -------------------------------------------------------------------------
    # Tree
    # -------------------------------------------------------------------------

    def get_logger(self, path: str, config: ConfigInput = None) -> Logger:
        """Resolve a descendant logger, creating missing nodes on the way.

        ``"*"``-prefixed paths are absolute and walk from the root; anything
        else walks from this logger. ``config`` only applies if the returned
        node is created by this call.

        Raises:
            InvalidNamespaceError: If the path has an empty segment
        """
        if path.startswith(ROOT_NAMESPACE):
            rest = path[len(ROOT_NAMESPACE) :]
            if not rest:
                return self._context.root
            if not rest.startswith(DELIMITER):
                raise InvalidNamespaceError(path, f"expected '{DELIMITER}' after '{ROOT_NAMESPACE}'")
            return self._context.root._walk(rest[len(DELIMITER) :], path, config)
        return self._walk(path, path, config)

    def _walk(self, relative: str, path: str, config: ConfigInput) -> Logger:
        segments = relative.split(DELIMITER)
        if not all(segments):
            raise InvalidNamespaceError(path, "empty segment")

        node = self
        for segment in segments[:-1]:
            node = node._child(segment, None)
        return node._child(segments[-1], config)

    def _child(self, segment: str, config: ConfigInput) -> Logger:
        with self._context.lock:
            child = self._children.get(segment)
            if child is None:
                child = self._context.create_logger(
                    f"{self._namespace}{DELIMITER}{segment}", config
                )
                self._children[segment] = child
            return child

    def get_handlers(self) -> dict[str, SeverityLevel]:
        return self.registry.get_handlers()

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def __call__(self, level: str) -> Resolved:
        return resolve_dynamic(self, level)

    def as_(self, level: str) -> Resolved:
        return resolve_named(self, level)

    def log(self, *args: Any) -> None:
        resolve_default(self)(*args)

    def trace(self, *args: Any) -> None:
        invoke(self, "TRACE", *args, strict=True)

    def debug(self, *args: Any) -> None:
        invoke(self, "DEBUG", *args, strict=True)

    def info(self, *args: Any) -> None:
        invoke(self, "INFO", *args, strict=True)

    def warn(self, *args: Any) -> None:
        invoke(self, "WARN", *args, strict=True)

    def error(self, *args: Any) -> None:
        invoke(self, "ERROR", *args, strict=True)

    def fatal(self, *args: Any) -> None:
        invoke(self, "FATAL", *args, strict=True)

    def __repr__(self) -> str:
        return (
            f"<Logger {self._namespace} level={self.level} "
            f"min_level={self.min_level} enabled={self._enabled}>"
        )
