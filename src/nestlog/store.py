"""Key-value stores holding persisted namespace configuration.

A store answers a single question: what is stored under a key. Values are
either serialized strings (JSON) or already decoded tables (TOML).
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

import structlog

log = structlog.get_logger()


class KeyValueStore(Protocol):
    """Read-only key-value store collaborator."""

    def get(self, key: str) -> Any | None: ...


class EnvironmentStore:
    """Reads keys from the process environment."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def get(self, key: str) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(key)


class MemoryStore:
    """In-memory store, mostly for injection in tests and embedding apps."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})

    def get(self, key: str) -> Any | None:
        return self.data.get(key)


class TomlFileStore:
    """Reads top-level keys from a TOML file.

    A missing or corrupted file behaves like an empty store.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "rb") as f:
                return tomllib.load(f)
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            log.warning("Unreadable config store", path=str(self.path), error=str(e))
            return {}

    def get(self, key: str) -> Any | None:
        return self.load().get(key)
