"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the data structures and validation rules for
application settings using Pydantic models.
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from kaiscrape.core.transport import DEFAULT_USER_AGENT


class NetworkSettings(BaseModel):
    """HTTP-related configuration settings."""

    timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Network timeout in seconds"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User agent string sent with every request"
    )
    accept_language: str = Field(
        default="en-US,en;q=0.5",
        description="Accept-Language header value"
    )
    enable_fallback_fetch: bool = Field(
        default=True,
        description="Retry failed fetches once with a one-shot connection"
    )

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        """Validate user agent string."""
        if not v or len(v.strip()) < 10:
            raise ValueError("User agent must be a valid browser string")
        return v.strip()


class SiteSettings(BaseModel):
    """Target site configuration."""

    base_url: str = Field(
        default="https://animekai.to",
        description="Origin of the AnimeKai site"
    )
    error_image: str = Field(
        default="https://raw.githubusercontent.com/ShadeOfChaos/Sora-Modules/refs/heads/main/sora_host_down.png",
        description="Poster shown for synthetic error search results"
    )

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the base URL is an http(s) origin without trailing slash."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"Base URL must start with http:// or https://: {v}")
        return v.rstrip('/')


class UISettings(BaseModel):
    """User interface configuration settings."""

    show_banner: bool = Field(
        default=True,
        description="Whether to show the banner on startup"
    )
    color_theme: Literal["default", "dark", "light"] = Field(
        default="default",
        description="Color theme for the CLI interface"
    )
    table_style: Literal["rounded", "simple", "minimal"] = Field(
        default="rounded",
        description="Style for data tables"
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )
    file: Optional[str] = Field(
        default=None,
        description="Log file name (no file logging when unset)"
    )
    max_size: str = Field(
        default="10MB",
        description="Maximum log file size"
    )
    backup_count: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Number of backup log files to keep"
    )

    @field_validator('max_size')
    @classmethod
    def validate_max_size(cls, v: str) -> str:
        """Validate log file size format."""
        if not re.match(r'^\d+[KMGT]?B$', v.upper()):
            raise ValueError("Invalid size format. Use format like '10MB', '1GB'")
        return v.upper()

    @property
    def max_bytes(self) -> int:
        """Convert ``max_size`` to a byte count."""
        match = re.match(r'^(\d+)([KMGT]?)B$', self.max_size)
        number, unit = int(match.group(1)), match.group(2)
        return number * 1024 ** " KMGT".index(unit or " ")


class AppSettings(BaseModel):
    """Main application settings container."""

    network: NetworkSettings = Field(default_factory=NetworkSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Export all configuration models
__all__ = [
    "NetworkSettings",
    "SiteSettings",
    "UISettings",
    "LoggingSettings",
    "AppSettings",
]
