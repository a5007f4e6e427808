"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets the codec and the adapters read the same settings consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "cpmodel"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "cpmodel"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cpmodel"
    return Path.home() / ".config" / "cpmodel"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated env vars at the edge without putting parsing logic in
      the domain.
    - A single configuration contract for the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CPMODEL_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    log_level: str = Field(
        default="WARNING",
        pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level for the CLI handler.",
    )
    strict_consistency: bool = Field(
        default=False,
        description="Raise on decodable payloads that break the lifecycle invariants.",
    )
    json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation used when printing or exporting JSON.",
    )
    api_base_url: str = Field(
        default="https://api.upbound.io",
        min_length=8,
        description="Base URL used when building creation requests.",
    )
