"""Runtime settings for nestlog.

Read from NESTLOG_* environment variables (and a local .env file).
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NestlogSettings(BaseSettings):
    """Settings controlling where overrides come from and how prefixes render."""

    model_config = SettingsConfigDict(
        env_prefix="NESTLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    namespace_config_key: str = Field(
        default="LOGGING_NAMESPACE_CONFIG",
        description="Store key holding the serialized per-namespace overrides",
    )
    config_file: Path | None = Field(
        default=None,
        description="TOML file used as the key-value store (environment when unset)",
    )
    colors: bool | None = Field(
        default=None,
        description="Theme level names in prefixes (auto-detect TTY/FORCE_COLOR if None)",
    )
    diagnostics_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level for nestlog's own diagnostics",
    )
