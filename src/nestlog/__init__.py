"""
nestlog: Hierarchical, namespaced logging.

This package provides:
- A tree of named loggers ("*:app:db") memoized per parent
- A severity registry with relative level insertion (trace ... fatal + custom)
- Call-site resolution to a prefixed handler or a no-op
- Per-namespace overrides loaded from a key-value store

Usage:
    from nestlog import get_logger

    log = get_logger("app:db")
    log.info("connected")          # [INFO][*:app:db] connected
    log("custom")("oops")          # unknown level -> ERROR with marker
"""

from nestlog._version import __version__, get_version
from nestlog.colors import THEMES, Theme, colorize, register_theme, theme
from nestlog.context import (
    LoggingContext,
    define_level,
    get_context,
    get_logger,
    reset_context,
    root_logger,
)
from nestlog.dispatch import NOOP, BoundCall, invoke, render_prefix
from nestlog.errors import (
    BootstrapError,
    InvalidConsoleMethodError,
    InvalidNamespaceError,
    NestlogError,
    SeverityError,
    UnknownLevelError,
)
from nestlog.logger import Logger, LoggerConfig
from nestlog.namespaces import NamespaceConfigs, NamespaceOverride
from nestlog.settings import NestlogSettings
from nestlog.severity import Relation, SeverityLevel, SeverityRegistry
from nestlog.store import EnvironmentStore, KeyValueStore, MemoryStore, TomlFileStore

__all__ = [
    "NOOP",
    "THEMES",
    # Errors
    "BootstrapError",
    # Dispatch
    "BoundCall",
    "EnvironmentStore",
    "InvalidConsoleMethodError",
    "InvalidNamespaceError",
    "KeyValueStore",
    # Tree
    "Logger",
    "LoggerConfig",
    "LoggingContext",
    "MemoryStore",
    "NamespaceConfigs",
    "NamespaceOverride",
    "NestlogError",
    # Config
    "NestlogSettings",
    # Severity
    "Relation",
    "SeverityError",
    "SeverityLevel",
    "SeverityRegistry",
    "Theme",
    "TomlFileStore",
    "UnknownLevelError",
    # Version
    "__version__",
    "colorize",
    "define_level",
    "get_context",
    "get_logger",
    "get_version",
    "invoke",
    "register_theme",
    "render_prefix",
    "reset_context",
    "root_logger",
    "theme",
]
