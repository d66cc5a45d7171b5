"""
Configuration Command - Settings management.

This module implements the ``config`` command group for inspecting and
changing the settings stored in ``settings.json``.
"""

import json
from typing import Any, Optional

import typer
from rich.prompt import Confirm

from kaiscrape.cli.context import get_config_manager
from kaiscrape.core.exceptions import ConfigurationError
from kaiscrape.ui import (
    ThemeName,
    UIComponents,
    display_info,
    display_warning,
    get_console,
    handle_error,
    set_theme,
    update_console_theme,
)


# Create config command group
app = typer.Typer(
    name="config",
    help="⚙️  Manage application configuration and settings",
    no_args_is_help=True,
)


def parse_value(raw: str) -> Any:
    """
    Interpret a command-line value.

    JSON literals (numbers, booleans, null) are decoded; anything else is
    kept as a plain string.
    """
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@app.command(name="show")
def show_config(
    section: Optional[str] = typer.Argument(
        None,
        help="Configuration section to display (network, site, ui, logging)"
    ),
) -> None:
    """📋 Display current configuration."""
    config_manager = get_config_manager()
    settings = config_manager.settings.model_dump()

    if section is not None and section not in settings:
        display_warning(
            f"Unknown section '{section}'. Available sections: {', '.join(settings)}",
            "⚠️  Unknown Section"
        )
        raise typer.Exit(1)

    ui = UIComponents(config_manager.settings.ui.table_style)
    console = get_console()

    for name, values in settings.items():
        if section is not None and name != section:
            continue
        grid = ui.create_status_grid({key: "-" if value is None else value for key, value in values.items()})
        console.print(ui.create_info_panel(grid, title=f"⚙️  {name}"))

    console.print(f"[dim]Configuration file: {config_manager.config_dir / 'settings.json'}[/dim]")


@app.command(name="get")
def get_config(
    key: str = typer.Argument(..., help="Configuration key (dot notation)"),
) -> None:
    """🔎 Print a single configuration value."""
    sentinel = object()
    value = get_config_manager().get_setting(key, sentinel)

    if value is sentinel:
        display_warning(f"Unknown configuration key: {key}", "⚠️  Unknown Key")
        raise typer.Exit(1)

    typer.echo(json.dumps(value) if not isinstance(value, str) else value)


@app.command(name="set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key (dot notation)"),
    value: str = typer.Argument(..., help="New value for the setting"),
) -> None:
    """
    🔧 Set a configuration value.

    Example: kaiscrape config set network.timeout 60
    """
    try:
        get_config_manager().update_setting(key, parse_value(value))
    except ConfigurationError as e:
        handle_error(e, f"Failed to set configuration value '{key}'")
        raise typer.Exit(1)

    if key == "ui.color_theme":
        theme = ThemeName(get_config_manager().settings.ui.color_theme)
        set_theme(theme)
        update_console_theme(theme)

    display_info(f"{key} = {value}", "✅ Configuration Updated")


@app.command(name="reset")
def reset_config(
    confirm: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
) -> None:
    """🔄 Reset configuration to defaults."""
    if not confirm and not Confirm.ask(
        "[bold red]⚠️  This will reset ALL configuration to defaults. Continue?[/bold red]",
        default=False
    ):
        display_info("Configuration reset cancelled.", "ℹ️  Cancelled")
        return

    try:
        get_config_manager().reset_to_defaults()
    except ConfigurationError as e:
        handle_error(e, "Failed to reset configuration")
        raise typer.Exit(1)

    display_info("Configuration has been reset to default values.", "✅ Configuration Reset")


@app.command(name="validate")
def validate_config() -> None:
    """✅ Validate current configuration."""
    report = get_config_manager().validate_configuration()

    for warning in report["warnings"]:
        display_warning(warning)

    if not report["valid"]:
        display_warning("\n".join(report["issues"]), "❌ Invalid Configuration")
        raise typer.Exit(1)

    display_info("Configuration is valid.", "✅ Valid")


# Export command group
__all__ = ["app", "parse_value"]
