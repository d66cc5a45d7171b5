"""
Error Handler - Rich error displays with context and suggestions.

Exceptions raised in the CLI and failed stage results are both rendered
as panels carrying the message, the relevant context fields and a short
list of suggestions for the failure category.
"""

import traceback
from typing import Dict, List, Optional, Tuple

from rich.panel import Panel

from kaiscrape.core.exceptions import (
    ConfigurationError,
    DecodeError,
    ExtractionError,
    KaiScrapeError,
    NetworkError,
    UpstreamError,
)
from kaiscrape.core.models import ErrorKind, StageResult
from kaiscrape.ui.console import get_console
from kaiscrape.ui.themes import get_palette


# Panel title and suggestions per failure category
KIND_DISPLAY: Dict[ErrorKind, Tuple[str, List[str]]] = {
    ErrorKind.TRANSPORT: (
        "🌐 Network Error",
        [
            "Check your internet connection",
            "Verify the site is reachable from your network",
            "Raise [cyan]network.timeout[/cyan] if requests are slow",
            "Make sure [cyan]network.enable_fallback_fetch[/cyan] is enabled",
        ],
    ),
    ErrorKind.EXTRACTION: (
        "🔎 Extraction Error",
        [
            "Check that the URL points at an anime page or episode link",
            "The site layout may have changed; run with [cyan]--debug[/cyan] to see which patterns were tried",
        ],
    ),
    ErrorKind.DECODE: (
        "🔐 Decode Error",
        [
            "The site may have changed its token scheme",
            "Run with [cyan]--debug[/cyan] to inspect the payload",
        ],
    ),
    ErrorKind.UPSTREAM: (
        "🛰️  Upstream Error",
        [
            "The site reported a failure; try again in a few moments",
            "Try another episode or server",
        ],
    ),
    ErrorKind.INVALID_INPUT: (
        "✋ Invalid Input",
        [
            "Use a URL returned by [cyan]kaiscrape search[/cyan] or [cyan]kaiscrape episodes[/cyan]",
            "Error placeholders (URLs starting with '#') cannot be fetched",
        ],
    ),
}


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    def __init__(self):
        """Initialize error handler with current theme."""
        self.console = get_console()
        self.palette = get_palette()

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, KaiScrapeError):
            self._display_kaiscrape_error(error, context, show_traceback)
        else:
            self._handle_generic_error(error, context, show_traceback)

    def _display_kaiscrape_error(
        self,
        error: KaiScrapeError,
        context: Optional[str],
        show_traceback: bool
    ) -> None:
        if isinstance(error, ConfigurationError):
            title = "⚙️  Configuration Error"
            suggestions = [
                "Check configuration file syntax and format",
                "Inspect values with [cyan]kaiscrape config show[/cyan]",
                "Reset to defaults with [cyan]kaiscrape config reset[/cyan]",
            ]
        else:
            title, suggestions = KIND_DISPLAY[error.kind]
            suggestions = list(suggestions)

        fields = self._error_fields(error)

        if isinstance(error, NetworkError) and error.status_code:
            if error.status_code == 403:
                suggestions.insert(0, "The site may be blocking requests; try a different user agent")
            elif error.status_code == 404:
                suggestions.insert(0, "The requested page may no longer exist")
            elif error.status_code >= 500:
                suggestions.insert(0, "The site is experiencing server issues")

        details = str(error.details) if show_traceback and error.details else None
        self._print_panel(title, error.message, fields, context, suggestions, details)

    def _error_fields(self, error: KaiScrapeError) -> List[Tuple[str, str]]:
        """Context fields worth showing for each exception type."""
        fields: List[Tuple[str, Optional[object]]] = []

        if isinstance(error, ConfigurationError):
            fields.append(("Configuration file", error.config_path))
        elif isinstance(error, NetworkError):
            fields.append(("URL", error.url))
            fields.append(("Status Code", error.status_code))
        elif isinstance(error, ExtractionError):
            fields.append(("Field", error.field_name))
        elif isinstance(error, DecodeError):
            fields.append(("Payload", error.payload[:80] if error.payload else None))
        elif isinstance(error, UpstreamError):
            fields.append(("Status", error.status))

        return [(label, str(value)) for label, value in fields if value is not None]

    def _handle_generic_error(
        self,
        error: Exception,
        context: Optional[str],
        show_traceback: bool
    ) -> None:
        """Handle generic Python exceptions."""
        suggestions = [
            "Check the command syntax and arguments",
            "Verify your configuration is correct",
            "Report this issue if it persists",
        ]

        details = traceback.format_exc() if show_traceback else None
        self._print_panel(
            "💥 Unexpected Error",
            f"{error.__class__.__name__}: {error}",
            [],
            context,
            suggestions,
            details,
        )

    def display_stage_failure(self, result: StageResult, context: Optional[str] = None) -> None:
        """
        Display a failed stage result.

        Args:
            result: Stage result whose ``ok`` is False
            context: What the stage was working on
        """
        kind = result.error_kind or ErrorKind.UPSTREAM
        title, suggestions = KIND_DISPLAY[kind]
        self._print_panel(title, result.error or "Unknown error", [("Category", kind.value)], context, suggestions)

    def _print_panel(
        self,
        title: str,
        message: str,
        fields: List[Tuple[str, str]],
        context: Optional[str],
        suggestions: List[str],
        details: Optional[str] = None
    ) -> None:
        content_parts = [f"[{self.palette.error}]{message}[/{self.palette.error}]"]

        for label, value in fields:
            content_parts.append(f"\n[dim]{label}:[/dim] [cyan]{value}[/cyan]")

        if context:
            content_parts.append(f"\n[dim]Context:[/dim] {context}")

        content_parts.append(f"\n\n[{self.palette.info}]💡 Suggestions:[/{self.palette.info}]")
        for suggestion in suggestions:
            content_parts.append(f"• {suggestion}")

        if details:
            content_parts.append(f"\n\n[dim]Details:[/dim]\n{details}")

        self.console.print(Panel(
            "\n".join(content_parts),
            title=title,
            border_style=self.palette.error,
            padding=(1, 2)
        ))

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning message."""
        self.console.print(Panel(
            f"[{self.palette.warning}]{message}[/{self.palette.warning}]",
            title=f"[{self.palette.warning}]{title}[/{self.palette.warning}]",
            border_style=self.palette.warning,
            padding=(1, 2)
        ))

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information message."""
        self.console.print(Panel(
            f"[{self.palette.info}]{message}[/{self.palette.info}]",
            title=f"[{self.palette.info}]{title}[/{self.palette.info}]",
            border_style=self.palette.info,
            padding=(1, 2)
        ))


def get_error_handler() -> ErrorHandler:
    """Get an error handler bound to the current console and theme."""
    return ErrorHandler()


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """Handle and display an error."""
    get_error_handler().handle_error(error, context, show_traceback)


def display_stage_failure(result: StageResult, context: Optional[str] = None) -> None:
    """Display a failed stage result."""
    get_error_handler().display_stage_failure(result, context)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    """Display a warning message."""
    get_error_handler().display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    """Display an information message."""
    get_error_handler().display_info(message, title)


# Export error handling functions
__all__ = [
    "ErrorHandler",
    "KIND_DISPLAY",
    "get_error_handler",
    "handle_error",
    "display_stage_failure",
    "display_warning",
    "display_info",
]
