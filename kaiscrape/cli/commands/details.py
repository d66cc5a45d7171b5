"""
Details Command - Description, aliases and air date of an anime page.
"""

import typer

from kaiscrape import interface
from kaiscrape.cli.context import get_config_manager
from kaiscrape.cli.pipeline import echo_json, run_stage_sync
from kaiscrape.ui import UIComponents, display_stage_failure, get_console


def details_command(
    url: str = typer.Argument(..., help="Anime page URL from search results"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the raw JSON result",
    ),
) -> None:
    """📖 Show details for an anime page."""
    if json_output:
        echo_json(interface.details, url)
        return

    result = run_stage_sync(lambda plugin: plugin.get_details(url), "Loading details...")

    ui = UIComponents(get_config_manager().settings.ui.table_style)
    get_console().print(ui.create_details_panel(result.value[0], url))

    if not result.ok:
        display_stage_failure(result, f"Loading details for {url}")
        raise typer.Exit(1)


# Export command
__all__ = ["details_command"]
