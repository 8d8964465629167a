"""
SDK configuration (pydantic-settings).

Values come from keyword overrides, then REXEC_* environment variables,
then the defaults below.

Example:
    >>> configure_settings(request_timeout=10)
    >>> get_settings().request_timeout
    10.0
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "https://rexec.pipeops.io"


class SDKSettings(BaseSettings):
    """Runtime settings for the rexec SDK."""

    model_config = SettingsConfigDict(
        env_prefix="REXEC_",
        extra="ignore",
    )

    # API
    host: str = DEFAULT_HOST
    token: str | None = None
    request_timeout: float = Field(default=30.0, ge=1.0, le=300.0)

    # Terminal
    default_cols: int = Field(default=80, ge=1, le=65535)
    default_rows: int = Field(default=24, ge=1, le=65535)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_rich: bool = True


_settings: SDKSettings | None = None


def get_settings() -> SDKSettings:
    """Return the cached settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = SDKSettings()
    return _settings


def configure_settings(**overrides: Any) -> SDKSettings:
    """
    Replace the cached settings.

    Args:
        **overrides: Field values taking precedence over the environment.

    Returns:
        The new settings instance.
    """
    global _settings
    _settings = SDKSettings(**overrides)
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None


__all__ = [
    "DEFAULT_HOST",
    "SDKSettings",
    "get_settings",
    "configure_settings",
    "reset_settings",
]
