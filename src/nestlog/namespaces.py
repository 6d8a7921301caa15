"""Persisted per-namespace overrides.

Overrides are loaded once from a key-value store and pre-seed the
``enabled``/``min_level`` of loggers created at a matching namespace.
Precedence per field: exact namespace entry > global ``"*"`` entry >
constructor config > hardcoded default.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from nestlog.store import KeyValueStore

log = structlog.get_logger()

ROOT_NAMESPACE = "*"
DELIMITER = ":"


class NamespaceOverride(BaseModel):
    """Override entry for one namespace."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    min_level: str | None = Field(default=None, alias="minLevel")
    enabled: bool | None = None


_OVERRIDES = TypeAdapter(dict[str, NamespaceOverride])


def normalize_namespace(key: str) -> str:
    """Anchor a namespace key at the root sentinel ("app:db" -> "*:app:db")."""
    if key.startswith(ROOT_NAMESPACE):
        return key
    return f"{ROOT_NAMESPACE}{DELIMITER}{key}"


class NamespaceConfigs:
    """Loaded override table with precedence-aware lookup."""

    def __init__(self, overrides: Mapping[str, NamespaceOverride] | None = None) -> None:
        self._overrides: dict[str, NamespaceOverride] = {
            normalize_namespace(key): value for key, value in (overrides or {}).items()
        }

    @classmethod
    def parse(cls, raw: Any) -> NamespaceConfigs:
        """Build from a JSON string or decoded mapping; malformed data means no overrides."""
        if raw is None or raw == "":
            return cls()
        try:
            data = json.loads(raw) if isinstance(raw, str | bytes) else raw
            return cls(_OVERRIDES.validate_python(data))
        except (ValueError, ValidationError) as e:
            log.warning("Ignoring malformed namespace config", error=str(e))
            return cls()

    @classmethod
    def load(cls, store: KeyValueStore, key: str) -> NamespaceConfigs:
        """Read and parse the override table stored under ``key``."""
        return cls.parse(store.get(key))

    def lookup(self, namespace: str) -> NamespaceOverride:
        """Effective override for a namespace, the global entry filling unset fields."""
        specific = self._overrides.get(namespace)
        fallback = self._overrides.get(ROOT_NAMESPACE)
        if specific is None:
            return fallback or NamespaceOverride()
        if fallback is None:
            return specific
        return NamespaceOverride(
            min_level=specific.min_level if specific.min_level is not None else fallback.min_level,
            enabled=specific.enabled if specific.enabled is not None else fallback.enabled,
        )

    def forces_disabled(self, namespace: str) -> bool:
        """True when overrides pin ``enabled`` to False for this namespace."""
        return self.lookup(namespace).enabled is False

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._overrides

    def __len__(self) -> int:
        return len(self._overrides)
