"""
AnimeKai Configuration - Plugin-specific configuration management.

This module handles configuration validation for the AnimeKai plugin and
holds the site's endpoint paths.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from kaiscrape.core.config_schemas import AppSettings, NetworkSettings, SiteSettings


# Endpoint paths, relative to the base URL
SEARCH_PATH = "/browser"
EPISODE_LIST_PATH = "/ajax/episodes/list"
LINK_LIST_PATH = "/ajax/links/list"
LINK_VIEW_PATH = "/ajax/links/view"

# Embed URLs become media URLs by swapping this path segment
EMBED_SEGMENT = "/e/"
MEDIA_SEGMENT = "/media/"


_network_defaults = NetworkSettings()
_site_defaults = SiteSettings()


class AnimeKaiConfig(BaseModel):
    """Configuration model for the AnimeKai plugin."""

    base_url: str = Field(_site_defaults.base_url, description="Origin of the AnimeKai site")
    error_image: str = Field(_site_defaults.error_image, description="Poster for synthetic error results")
    timeout: int = Field(_network_defaults.timeout, ge=5, le=300, description="Request timeout in seconds")
    user_agent: str = Field(_network_defaults.user_agent, description="User agent string for requests")
    accept_language: str = Field(_network_defaults.accept_language, description="Accept-Language header")
    enable_fallback_fetch: bool = Field(True, description="Use the one-shot fetch fallback")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip the trailing slash so paths can be appended directly."""
        return v.rstrip('/')

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        """Validate user agent string."""
        if not v or len(v.strip()) < 10:
            raise ValueError("User agent must be a valid browser string")
        return v.strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnimeKaiConfig':
        """Create configuration from dictionary."""
        return cls(**data)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> 'AnimeKaiConfig':
        """Derive plugin configuration from application settings."""
        return cls(
            base_url=settings.site.base_url,
            error_image=settings.site.error_image,
            timeout=settings.network.timeout,
            user_agent=settings.network.user_agent,
            accept_language=settings.network.accept_language,
            enable_fallback_fetch=settings.network.enable_fallback_fetch,
        )


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for the AnimeKai plugin."""
    return AnimeKaiConfig().to_dict()


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and normalize plugin configuration.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated and normalized configuration

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        validated_config = AnimeKaiConfig.from_dict(config)
        return validated_config.to_dict()
    except Exception as e:
        raise ValueError(f"Invalid AnimeKai plugin configuration: {e}")


# Export configuration utilities
__all__ = [
    "AnimeKaiConfig",
    "get_default_config",
    "validate_config",
    "SEARCH_PATH",
    "EPISODE_LIST_PATH",
    "LINK_LIST_PATH",
    "LINK_VIEW_PATH",
    "EMBED_SEGMENT",
    "MEDIA_SEGMENT",
]
