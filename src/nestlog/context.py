"""Process-wide logging context.

Bundles the severity registry, the loaded namespace overrides and the root
logger. One context is created when nestlog is imported; tests swap it with
``reset_context``.
"""

from __future__ import annotations

import os
import sys
import threading

import structlog

from nestlog.errors import BootstrapError
from nestlog.logger import ConfigInput, Logger
from nestlog.namespaces import ROOT_NAMESPACE, NamespaceConfigs
from nestlog.settings import NestlogSettings
from nestlog.severity import Handler, Relation, SeverityLevel, SeverityRegistry
from nestlog.sinks import bootstrap_registry
from nestlog.store import EnvironmentStore, KeyValueStore, TomlFileStore

log = structlog.get_logger()


def detect_colors() -> bool:
    """Auto-detect: TTY or FORCE_COLOR env var."""
    force_color = os.environ.get("FORCE_COLOR", "")
    return sys.stderr.isatty() or force_color not in ("", "0", "false")


def default_store(settings: NestlogSettings) -> KeyValueStore:
    """TOML file store when configured, process environment otherwise."""
    if settings.config_file is not None:
        return TomlFileStore(settings.config_file)
    return EnvironmentStore()


class LoggingContext:
    """Registry, overrides and root logger shared by every logger of a process."""

    def __init__(
        self,
        settings: NestlogSettings | None = None,
        *,
        store: KeyValueStore | None = None,
        registry: SeverityRegistry | None = None,
        colors: bool | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            settings: Runtime settings (read from the environment if None)
            store: Key-value store holding namespace overrides
            registry: Pre-built registry; the baseline ladder is installed if None
            colors: Theme level names (settings, then auto-detect, if None)

        Raises:
            BootstrapError: If the registry has no default level
        """
        self.settings = settings or NestlogSettings()
        self.lock = threading.RLock()

        if registry is None:
            registry = bootstrap_registry(SeverityRegistry())
        elif registry.default_level not in registry:
            raise BootstrapError(
                f"No handler named '{registry.default_level}' found",
                details={"levels": list(registry)},
            )
        self.registry = registry

        if colors is None:
            colors = self.settings.colors if self.settings.colors is not None else detect_colors()
        self.colors = colors

        self.store = store if store is not None else default_store(self.settings)
        self.namespace_configs = NamespaceConfigs.load(
            self.store, self.settings.namespace_config_key
        )
        if len(self.namespace_configs):
            log.debug("Loaded namespace overrides", count=len(self.namespace_configs))

        self.root = self.create_logger(ROOT_NAMESPACE)

    def create_logger(self, namespace: str, config: ConfigInput = None) -> Logger:
        """Build a new, uncached logger for a full namespace."""
        return Logger(namespace, self, config)

    def get_logger(self, namespace: str, config: ConfigInput = None) -> Logger:
        return self.root.get_logger(namespace, config)

    def define_level(
        self,
        name: str,
        sibling: str,
        relation: Relation | int,
        handler: Handler,
        override: bool = False,
    ) -> SeverityLevel | None:
        return self.registry.define_relative(name, sibling, relation, handler, override)


_context = LoggingContext()


def get_context() -> LoggingContext:
    return _context


def reset_context(context: LoggingContext | None = None, **kwargs: object) -> LoggingContext:
    """Replace the process-wide context (a fresh one unless given)."""
    global _context
    _context = context if context is not None else LoggingContext(**kwargs)  # type: ignore[arg-type]
    return _context


def get_logger(namespace: str, config: ConfigInput = None) -> Logger:
    """Get (or create) a logger; relative paths resolve from the root."""
    return _context.get_logger(namespace, config)


def root_logger() -> Logger:
    return _context.root


def define_level(
    name: str,
    sibling: str,
    relation: Relation | int,
    handler: Handler,
    override: bool = False,
) -> SeverityLevel | None:
    """Register a custom level on the current context's registry."""
    return _context.define_level(name, sibling, relation, handler, override)
