"""
Plugin Layer - Site adapter implementations.

This module contains the plugin base class, shared scraping utilities and
the AnimeKai adapter.
"""

from kaiscrape.plugins.base import BasePlugin, PluginMetadata
from kaiscrape.plugins.common import (
    PatternTable,
    TextCleaner,
    URLHelper,
)

__all__ = [
    # Base Plugin Architecture
    "BasePlugin",
    "PluginMetadata",
    # Plugin Development Utilities
    "PatternTable",
    "TextCleaner",
    "URLHelper",
]
