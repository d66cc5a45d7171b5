"""
UI Layer - Rich console, themes and result rendering.

This module contains the theme system and the Rich components used by the
command-line front end to show pipeline results and errors.
"""

from kaiscrape.ui.components import UIComponents
from kaiscrape.ui.themes import ThemeManager, ThemeName, get_palette, get_theme, set_theme
from kaiscrape.ui.error_handler import (
    ErrorHandler,
    display_info,
    display_stage_failure,
    display_warning,
    handle_error,
)
from kaiscrape.ui.progress import status_spinner
from kaiscrape.ui.console import get_console, setup_console, update_console_theme

__all__ = [
    # Core UI Components
    "UIComponents",
    # Theme System
    "ThemeManager",
    "ThemeName",
    "get_theme",
    "get_palette",
    "set_theme",
    # Error Handling
    "ErrorHandler",
    "handle_error",
    "display_stage_failure",
    "display_warning",
    "display_info",
    # Progress
    "status_spinner",
    # Console Management
    "get_console",
    "setup_console",
    "update_console_theme",
]
