"""Severity registry - named, ranked levels and their output handlers.

Levels are keyed case-insensitively (canonical key is upper-case) and ordered
by an integer rank. Ranks are only ever compared; relative insertion shifts
existing entries in place so the order stays strict.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any

import structlog

from nestlog.errors import UnknownLevelError

log = structlog.get_logger()

Handler = Callable[..., Any]

DEFAULT_LEVEL = "LOG"
DEFAULT_MIN_LEVEL = "INFO"


class Relation(IntEnum):
    """Placement of a new level relative to its anchor."""

    BELOW = -1
    SAME = 0
    ABOVE = 1


@dataclass
class SeverityLevel:
    """A registered level: canonical name, current rank and output sink."""

    name: str
    rank: int
    handler: Handler


class SeverityRegistry:
    """Mutable mapping from level name to handler and rank."""

    def __init__(self, *, default_level: str = DEFAULT_LEVEL) -> None:
        self._levels: dict[str, SeverityLevel] = {}
        self._lock = threading.RLock()
        self.default_level = default_level.upper()

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def define(self, name: str, rank: int, handler: Handler) -> SeverityLevel:
        """Register (or replace) a level at an absolute rank."""
        key = name.upper()
        with self._lock:
            entry = self._levels.get(key)
            if entry is None:
                entry = SeverityLevel(name=key, rank=rank, handler=handler)
                self._levels[key] = entry
            else:
                entry.rank = rank
                entry.handler = handler
            return entry

    def define_relative(
        self,
        name: str,
        sibling: str,
        relation: Relation | int,
        handler: Handler,
        override: bool = False,
    ) -> SeverityLevel | None:
        """Register a level positioned against an existing sibling level.

        Args:
            name: Level name (case-insensitive)
            sibling: Existing level to anchor on
            relation: BELOW (-1), SAME (0) or ABOVE (+1)
            handler: Sink receiving the rendered prefix plus caller arguments
            override: Replace handler and rank of an already registered name

        Returns:
            The registered entry, the untouched existing entry when the name is
            taken and override is False, or None when the sibling is unknown.
        """
        relation = Relation(relation)
        key = name.upper()
        sibling_key = sibling.upper()

        with self._lock:
            anchor = self._levels.get(sibling_key)
            if anchor is None:
                log.warning("No handler found for sibling level", sibling=sibling_key, name=key)
                return None

            existing = self._levels.get(key)
            if existing is not None and not override:
                return existing

            target = anchor.rank + (1 if relation is Relation.ABOVE else 0)

            if relation is not Relation.SAME:
                for entry in self._levels.values():
                    if entry is not existing and entry.rank >= target:
                        entry.rank += 1

            if existing is not None:
                existing.rank = target
                existing.handler = handler
                return existing

            entry = SeverityLevel(name=key, rank=target, handler=handler)
            self._levels[key] = entry
            return entry

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find(self, name: str) -> SeverityLevel | None:
        """Case-insensitive lookup, None on miss."""
        return self._levels.get(name.upper())

    def get(self, name: str) -> SeverityLevel:
        """Case-insensitive lookup that raises UnknownLevelError on miss."""
        entry = self._levels.get(name.upper())
        if entry is None:
            raise UnknownLevelError(name)
        return entry

    def resolve(self, name: str) -> SeverityLevel:
        """Case-insensitive lookup falling back to the default level on miss."""
        entry = self._levels.get(name.upper())
        if entry is not None:
            return entry
        log.debug(
            "Unknown level, using default", requested=name.upper(), default=self.default_level
        )
        return self.get(self.default_level)

    def get_handlers(self) -> dict[str, SeverityLevel]:
        """Point-in-time copy of every entry; mutating it leaves the registry alone."""
        with self._lock:
            return {key: replace(entry) for key, entry in self._levels.items()}

    def ordered(self) -> list[SeverityLevel]:
        """Entries sorted by ascending rank."""
        with self._lock:
            return sorted(self._levels.values(), key=lambda entry: entry.rank)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._levels

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._levels))

    def __len__(self) -> int:
        return len(self._levels)
