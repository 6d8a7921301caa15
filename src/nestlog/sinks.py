"""Console sinks and the baseline severity ladder.

The ladder is built by successive relative insertions anchored on a
synthetic zero-rank NONE level:

    NONE < TRACE < DEBUG < LOG < INFO < WARN < ERROR < FATAL
"""

from __future__ import annotations

import sys
import traceback
from typing import Any, TextIO

from nestlog.errors import BootstrapError, InvalidConsoleMethodError
from nestlog.severity import Handler, Relation, SeverityRegistry

# Console method -> stream attribute on sys
CONSOLE_METHODS: dict[str, str] = {
    "trace": "stderr",
    "debug": "stdout",
    "log": "stdout",
    "info": "stdout",
    "warn": "stderr",
    "error": "stderr",
}


def _stream(name: str) -> TextIO:
    # Looked up per call so redirected/captured streams are honoured
    return getattr(sys, name)


def console_sink(method_name: str) -> Handler:
    """Build a sink that prints its positional arguments like a console method.

    Args:
        method_name: One of trace, debug, log, info, warn, error

    Returns:
        Callable accepting arbitrary positional arguments
    """
    method = method_name.lower()
    if method not in CONSOLE_METHODS:
        raise InvalidConsoleMethodError(method_name, sorted(CONSOLE_METHODS))

    stream_name = CONSOLE_METHODS[method]

    def sink(*args: Any) -> None:
        stream = _stream(stream_name)
        print(*args, file=stream)
        if method == "trace":
            stream.write("".join(traceback.format_stack()[:-1]))

    sink.__name__ = f"console_{method}"
    return sink


def define_console_handler(
    registry: SeverityRegistry,
    name: str,
    method_name: str,
    sibling: str,
    relation: Relation | int,
) -> None:
    """Register a console-backed level relative to an existing sibling."""
    registry.define_relative(name, sibling, relation, console_sink(method_name))


def bootstrap_registry(registry: SeverityRegistry) -> SeverityRegistry:
    """Install the seven baseline levels on top of the NONE anchor.

    Raises:
        BootstrapError: If the default level is missing afterwards
    """
    registry.define("NONE", 0, console_sink("log"))

    define_console_handler(registry, "TRACE", "trace", "NONE", Relation.ABOVE)
    define_console_handler(registry, "DEBUG", "debug", "TRACE", Relation.ABOVE)
    define_console_handler(registry, "LOG", "log", "DEBUG", Relation.ABOVE)
    define_console_handler(registry, "INFO", "info", "LOG", Relation.ABOVE)
    define_console_handler(registry, "WARN", "warn", "INFO", Relation.ABOVE)
    define_console_handler(registry, "ERROR", "error", "WARN", Relation.ABOVE)
    registry.define_relative("FATAL", "error", Relation.ABOVE, console_sink("error"))

    if registry.default_level not in registry:
        raise BootstrapError(
            f"No handler named '{registry.default_level}' found",
            details={"levels": list(registry)},
        )
    return registry
