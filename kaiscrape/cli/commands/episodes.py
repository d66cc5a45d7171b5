"""
Episodes Command - Episode list of an anime page.
"""

import typer

from kaiscrape import interface
from kaiscrape.cli.context import get_config_manager
from kaiscrape.cli.pipeline import echo_json, run_stage_sync
from kaiscrape.ui import UIComponents, display_stage_failure, display_warning, get_console


def episodes_command(
    url: str = typer.Argument(..., help="Anime page URL from search results"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the raw JSON result",
    ),
    sort: bool = typer.Option(
        False,
        "--sort",
        help="Order episodes by number instead of page order",
    ),
) -> None:
    """
    📺 List the episodes of an anime page.

    Each row carries the link-list request URL to pass to
    [cyan]kaiscrape stream[/cyan].
    """
    if json_output:
        echo_json(interface.episodes, url)
        return

    result = run_stage_sync(lambda plugin: plugin.get_episodes(url), "Loading episode list...")

    if not result.ok:
        display_stage_failure(result, f"Listing episodes for {url}")
        raise typer.Exit(1)

    episodes = result.value
    if not episodes:
        display_warning("The episode list is empty.", "📺 No Episodes")
        return

    if sort:
        episodes = sorted(episodes, key=lambda episode: episode.number)

    ui = UIComponents(get_config_manager().settings.ui.table_style)
    get_console().print(ui.create_episodes_table(episodes))


# Export command
__all__ = ["episodes_command"]
