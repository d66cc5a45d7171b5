"""
Theme System - Color palettes and Rich styles.

Each theme is a ``ColorPalette``; ``ThemeManager`` turns the active palette
into a Rich ``Theme`` whose style names the components and error panels
refer to.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from rich.theme import Theme


class ThemeName(str, Enum):
    """Available theme names."""
    DEFAULT = "default"
    DARK = "dark"
    LIGHT = "light"


@dataclass
class ColorPalette:
    """Color palette definition for a theme."""

    primary: str
    secondary: str
    accent: str

    success: str
    warning: str
    error: str
    info: str

    text: str
    muted: str

    border_primary: str
    border_secondary: str


_PALETTES: Dict[ThemeName, ColorPalette] = {
    ThemeName.DEFAULT: ColorPalette(
        primary="blue",
        secondary="cyan",
        accent="magenta",
        success="green",
        warning="yellow",
        error="red",
        info="blue",
        text="white",
        muted="dim white",
        border_primary="blue",
        border_secondary="dim blue",
    ),
    ThemeName.DARK: ColorPalette(
        primary="bright_blue",
        secondary="bright_cyan",
        accent="bright_magenta",
        success="bright_green",
        warning="bright_yellow",
        error="bright_red",
        info="bright_blue",
        text="bright_white",
        muted="bright_black",
        border_primary="bright_blue",
        border_secondary="grey37",
    ),
    ThemeName.LIGHT: ColorPalette(
        primary="blue",
        secondary="dark_cyan",
        accent="dark_magenta",
        success="dark_green",
        warning="dark_orange",
        error="dark_red",
        info="blue",
        text="black",
        muted="grey37",
        border_primary="blue",
        border_secondary="grey70",
    ),
}


class ThemeManager:
    """Tracks the active theme and builds Rich themes from palettes."""

    def __init__(self):
        self._current_theme = ThemeName.DEFAULT

    def get_palette(self, theme_name: Optional[ThemeName] = None) -> ColorPalette:
        """
        Get color palette for a theme.

        Args:
            theme_name: Theme to get palette for (defaults to current theme)
        """
        return _PALETTES.get(theme_name or self._current_theme, _PALETTES[ThemeName.DEFAULT])

    def set_theme(self, theme_name: ThemeName) -> None:
        """
        Set the current theme.

        Raises:
            ValueError: If the theme is unknown
        """
        if theme_name not in _PALETTES:
            raise ValueError(f"Unknown theme: {theme_name}")
        self._current_theme = theme_name

    def get_current_theme(self) -> ThemeName:
        return self._current_theme

    def create_rich_theme(self, theme_name: Optional[ThemeName] = None) -> Theme:
        """Create a Rich Theme object from a color palette."""
        palette = self.get_palette(theme_name)

        return Theme({
            "panel.border": palette.border_primary,
            "table.header": f"bold {palette.secondary}",
            "table.border": palette.border_secondary,

            "success": palette.success,
            "warning": palette.warning,
            "error": palette.error,
            "info": palette.info,

            "primary": palette.primary,
            "secondary": palette.secondary,
            "accent": palette.accent,
            "muted": palette.muted,

            "title": f"bold {palette.primary}",
            "link": f"underline {palette.primary}",
            "episode.number": f"bold {palette.accent}",
            "stream.url": f"underline {palette.success}",
            "stream.missing": palette.muted,
        })


# Global theme manager instance
_theme_manager = ThemeManager()


def get_theme_manager() -> ThemeManager:
    """Get the global theme manager instance."""
    return _theme_manager


def get_theme(theme_name: Optional[ThemeName] = None) -> Theme:
    """Get a Rich Theme for a theme name (defaults to current theme)."""
    return _theme_manager.create_rich_theme(theme_name)


def get_palette(theme_name: Optional[ThemeName] = None) -> ColorPalette:
    """Get color palette for a theme (defaults to current theme)."""
    return _theme_manager.get_palette(theme_name)


def set_theme(theme_name: ThemeName) -> None:
    """Set the global theme."""
    _theme_manager.set_theme(theme_name)


# Export theme system components
__all__ = [
    "ThemeName",
    "ColorPalette",
    "ThemeManager",
    "get_theme_manager",
    "get_theme",
    "get_palette",
    "set_theme",
]
