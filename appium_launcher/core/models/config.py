"""
Configuration models.

Provides Pydantic models for launcher configuration with validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from .base import LauncherBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_APPIUM_PORT = 4723
BROADCAST_IP4_ADDRESS = "0.0.0.0"
BROADCAST_IP6_ADDRESS = "::"


class ConfigBaseModel(LauncherBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML/env strings
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ServerConfig(ConfigBaseModel):
    """Defaults applied to every service builder."""

    port: int = Field(default=DEFAULT_APPIUM_PORT, ge=0, le=65535)
    address: str = BROADCAST_IP4_ADDRESS
    startup_timeout: float = Field(default=20.0, gt=0)
    npm_timeout: float = Field(default=60.0, gt=0)
    base_path: str | None = None

    @field_validator("base_path", mode="before")
    @classmethod
    def validate_base_path(cls, v: str | None) -> str | None:
        """Treat blank base paths as unset."""
        if v is None or not str(v).strip():
            return None
        return str(v).strip()


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True
    file_path: Path | None = None  # ~/.appium-launcher/launcher.log when unset

