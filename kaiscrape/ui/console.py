"""
Console Management - The shared Rich console.

All command output goes through one console so the active theme applies
everywhere. Log records go to stderr separately (see ``cli.main``).
"""

from typing import Optional

from rich.console import Console

from kaiscrape.ui.themes import ThemeName, get_theme


# Global console instance
_console: Optional[Console] = None


def setup_console(
    theme_name: Optional[ThemeName] = None,
    force_terminal: Optional[bool] = None,
    width: Optional[int] = None
) -> Console:
    """
    Set up and configure the global Rich console.

    Args:
        theme_name: Theme to apply to the console
        force_terminal: Force terminal mode detection
        width: Console width override

    Returns:
        Configured Rich Console instance
    """
    global _console

    console_kwargs = {
        "theme": get_theme(theme_name),
        "force_terminal": force_terminal,
        "color_system": "auto",
    }
    if width is not None:
        console_kwargs["width"] = width

    _console = Console(**console_kwargs)
    return _console


def get_console() -> Console:
    """Get the global Rich console, creating a default one if needed."""
    global _console

    if _console is None:
        _console = setup_console()

    return _console


def update_console_theme(theme_name: ThemeName) -> None:
    """Rebuild the console with a new theme."""
    if _console is not None:
        setup_console(theme_name)


# Export console management functions
__all__ = [
    "setup_console",
    "get_console",
    "update_console_theme",
]
