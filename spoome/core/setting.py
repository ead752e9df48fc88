"""
Configuration Settings

This module defines client configuration using Pydantic Settings.
All configuration is loaded from SPOOME_* environment variables or a .env file;
arguments passed to a client constructor take precedence.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Defaults target the public spoo.me instance
- Self-hosted instances need ALLOW_CUSTOM_BASE_URL switched on
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["DEFAULT_BASE_URL", "VERSION", "Settings", "settings"]

VERSION = "0.1.0"
DEFAULT_BASE_URL = "https://spoo.me"


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_prefix="SPOOME_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    BASE_URL: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the spoo.me instance"
    )
    ALLOW_CUSTOM_BASE_URL: bool = Field(
        default=False,
        description="Allow base URLs other than the public instance (self-hosted deployments)"
    )
    TIMEOUT: float = Field(
        default=10.0,
        description="Transport timeout in seconds, enforced by httpx"
    )
    USER_AGENT: str = Field(
        default=f"spoome-python/{VERSION}",
        description="User-Agent header sent with every request"
    )


settings = Settings()
