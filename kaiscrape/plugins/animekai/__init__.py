"""
AnimeKai Plugin - Site adapter for animekai.to

This plugin implements the search, detail, episode-list and stream
resolution stages against animekai.to pages and AJAX endpoints.
"""

from .plugin import AnimeKaiPlugin, plugin_metadata, default_config
from .config import AnimeKaiConfig, get_default_config, validate_config
from .parser import AnimeKaiParser, LANGUAGE_PRIORITY
from .resolver import AnimeKaiResolver

__all__ = [
    "AnimeKaiPlugin",
    "plugin_metadata",
    "default_config",
    "AnimeKaiConfig",
    "get_default_config",
    "validate_config",
    "AnimeKaiParser",
    "AnimeKaiResolver",
    "LANGUAGE_PRIORITY",
]
