"""structlog wiring for nestlog's own diagnostics.

nestlog reports recoverable problems (unknown sibling levels, malformed
namespace overrides) out of band through structlog, never through the
severity ladder it manages. Importing nestlog leaves structlog untouched;
applications opt in with ``configure_diagnostics``.

Usage:
    from nestlog.diagnostics import configure_diagnostics

    configure_diagnostics(level="DEBUG")
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from nestlog.colors import ANSI_RESET
from nestlog.settings import NestlogSettings

if TYPE_CHECKING:
    from structlog.typing import EventDict, WrappedLogger

ANSI_DIM = "\033[38;2;85;85;102m"
ANSI_CORAL = "\033[38;2;255;106;193m"

LEVEL_COLORS: dict[str, str] = {
    "debug": ANSI_DIM,
    "info": "\033[38;2;128;255;234m",
    "warning": "\033[38;2;241;250;140m",
    "error": "\033[38;2;255;99;99m",
    "critical": "\033[38;2;225;53;255m",
}


class DiagnosticsRenderer:
    """structlog renderer producing ``nestlog | HH:MM:SS | level | message key=value``."""

    def __init__(self, name: str = "nestlog", colors: bool = False) -> None:
        self.name = name
        self.colors = colors

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        timestamp = event_dict.pop("timestamp", datetime.now().strftime("%H:%M:%S"))
        level = event_dict.pop("level", method_name).lower()
        event = str(event_dict.pop("event", ""))
        kv_pairs = " ".join(
            f"{key}={value}" for key, value in event_dict.items() if not key.startswith("_")
        )

        if self.colors:
            lvl_color = LEVEL_COLORS.get(level, LEVEL_COLORS["info"])
            lvl = f"{lvl_color}{level:<7}{ANSI_RESET}"
            ts = f"{ANSI_DIM}{timestamp}{ANSI_RESET}"
            kv = f"{ANSI_CORAL}{kv_pairs}{ANSI_RESET}" if kv_pairs else ""
        else:
            lvl = f"{level:<7}"
            ts = timestamp
            kv = kv_pairs

        line = f"{self.name} | {ts} | {lvl} | {event}"
        if kv:
            line += f" {kv}"
        return line


def configure_diagnostics(
    *,
    level: str | None = None,
    colors: bool | None = None,
    json_output: bool = False,
) -> None:
    """Configure structlog for nestlog diagnostics.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR); settings default if None
        colors: Enable colors (auto-detect TTY if None)
        json_output: Use JSON output for log aggregation
    """
    if level is None:
        level = NestlogSettings().diagnostics_level
    if colors is None:
        colors = sys.stderr.isatty()

    renderer: structlog.typing.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = DiagnosticsRenderer(colors=colors)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_diagnostics_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get the structlog logger nestlog reports through."""
    return structlog.get_logger(name)
