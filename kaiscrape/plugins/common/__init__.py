"""
Common utilities for plugin development.

This package contains shared utilities and helper functions
used by the site plugins.
"""

from .utils import (
    ERROR_SENTINEL,
    PatternTable,
    TextCleaner,
    URLHelper,
)

__all__ = [
    "ERROR_SENTINEL",
    "PatternTable",
    "TextCleaner",
    "URLHelper",
]
