"""
CLI Main Application - Typer app entry point.

This module provides the main CLI application: global options, logging
and theme setup, and command registration.
"""

import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.traceback import install as install_rich_traceback

from kaiscrape import __version__
from kaiscrape.core import ConfigManager, create_default_config_files
from kaiscrape.core.config_schemas import LoggingSettings
from kaiscrape.core.exceptions import ConfigurationError, KaiScrapeError
from kaiscrape.ui import (
    ThemeName,
    UIComponents,
    get_console,
    get_theme,
    handle_error,
    set_theme,
    setup_console,
)
from kaiscrape.cli.context import get_config_manager, set_config_manager


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Create main Typer application
app = typer.Typer(
    name="kaiscrape",
    help="🎌 AnimeKai search, episode and stream extraction",
    no_args_is_help=True,
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version information and exit",
        is_flag=True,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory path",
        envvar="KAISCRAPE_CONFIG_DIR",
        exists=False,
        file_okay=False,
        dir_okay=True,
    ),
    theme: Optional[ThemeName] = typer.Option(
        None,
        "--theme",
        help="UI color theme",
        case_sensitive=False,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
        is_flag=True,
    ),
    no_banner: bool = typer.Option(
        False,
        "--no-banner",
        help="Disable startup banner",
        is_flag=True,
    ),
) -> None:
    """
    🎌 kaiscrape - AnimeKai metadata and stream extraction.

    Search the site, inspect an anime page, list its episodes and resolve
    any episode to a playable stream URL.
    """
    if version:
        get_console().print(f"[bold blue]kaiscrape[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    try:
        _initialize_application(
            config_dir=config_dir,
            theme=theme,
            debug=debug,
            show_banner=not no_banner and ctx.invoked_subcommand is not None,
        )
    except KaiScrapeError as e:
        handle_error(e, "During application initialization", show_traceback=debug)
        raise typer.Exit(1)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _initialize_application(
    config_dir: Optional[Path] = None,
    theme: Optional[ThemeName] = None,
    debug: bool = False,
    show_banner: bool = True,
) -> None:
    """
    Initialize the application with configuration and UI setup.

    Args:
        config_dir: Configuration directory override
        theme: Theme override
        debug: Enable debug mode
        show_banner: Whether to show startup banner
    """
    if config_dir is None:
        config_dir = Path("config")

    if not config_dir.exists():
        create_default_config_files(config_dir)

    try:
        config_manager = ConfigManager(config_dir)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", str(config_dir))

    set_config_manager(config_manager)
    settings = config_manager.settings

    _setup_logging(debug, settings.logging, config_dir)
    install_rich_traceback(show_locals=debug)

    _setup_ui(theme)

    # Banner goes to stderr so --json output stays parseable
    if show_banner and settings.ui.show_banner:
        banner = UIComponents(settings.ui.table_style).create_banner(
            f"🎌 kaiscrape v{__version__}\n{settings.site.base_url}"
        )
        Console(stderr=True, theme=get_theme()).print(banner)


def _setup_logging(debug: bool = False, settings: Optional[LoggingSettings] = None, config_dir: Optional[Path] = None) -> None:
    """
    Set up application logging.

    Records go to stderr so command output on stdout stays clean. A
    rotating log file is added when ``logging.file`` is set; relative
    paths are resolved against the configuration directory.

    Args:
        debug: Enable debug logging
        settings: Logging settings
        config_dir: Configuration directory
    """
    settings = settings or LoggingSettings()
    level = logging.DEBUG if debug else getattr(logging, settings.level)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if settings.file:
        log_path = Path(settings.file).expanduser()
        if not log_path.is_absolute() and config_dir is not None:
            log_path = config_dir / log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        ))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def _setup_ui(theme_override: Optional[ThemeName] = None) -> None:
    """
    Set up UI console and theme.

    Args:
        theme_override: Theme to use (overrides configuration)
    """
    if theme_override:
        theme = theme_override
    else:
        try:
            theme = ThemeName(get_config_manager().settings.ui.color_theme)
        except (RuntimeError, ValueError):
            theme = ThemeName.DEFAULT

    set_theme(theme)
    setup_console(theme_name=theme)

    logger.debug(f"UI initialized with theme: {theme.value}")


def _register_commands() -> None:
    """Register commands with the main app."""
    # Import commands here to avoid circular imports
    from kaiscrape.cli.commands import config, details, episodes, search, stream

    app.command(name="search")(search.search_command)
    app.command(name="details")(details.details_command)
    app.command(name="episodes")(episodes.episodes_command)
    app.command(name="stream")(stream.stream_command)
    app.command(name="resolve")(stream.resolve_command)
    app.add_typer(config.app, name="config", help="⚙️  Manage configuration")


# Register commands at module level to ensure they're available for help
_register_commands()


@app.command(name="info")
def show_info() -> None:
    """📋 Show application and configuration information."""
    from kaiscrape.cli.commands.info import show_application_info

    show_application_info(get_config_manager())


def cli_main() -> None:
    """
    Main CLI entry point for the kaiscrape command.
    """
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)  # Standard exit code for SIGINT
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


# Export main components
__all__ = [
    "app",
    "cli_main",
]
