"""
Search Command - Keyword search on the browse page.
"""

import logging
from typing import Optional

import typer

from kaiscrape import interface
from kaiscrape.cli.context import get_config_manager
from kaiscrape.cli.pipeline import echo_json, run_stage_sync
from kaiscrape.ui import (
    UIComponents,
    display_stage_failure,
    display_warning,
    get_console,
)


logger = logging.getLogger(__name__)


def search_command(
    query: str = typer.Argument(..., help="Anime title to search for"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the raw JSON result",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum number of results to display (default: show all)",
        min=1,
    ),
) -> None:
    """
    🔍 Search AnimeKai by title.

    Examples:

        kaiscrape search "frieren"

        kaiscrape search "one piece" --limit 5 --json
    """
    query = query.strip()
    if not query:
        display_warning("Search query must not be empty.", "⚠️  Empty Query")
        raise typer.Exit(1)

    if json_output:
        echo_json(interface.search, query)
        return

    result = run_stage_sync(lambda plugin: plugin.search(query), f"Searching for '{query}'...")

    if not result.ok:
        display_stage_failure(result, f"Searching for '{query}'")
        raise typer.Exit(1)

    results = result.value
    if not results:
        display_warning(
            f"No results found for '{query}'.\n\n"
            "Try different keywords or an alternative title.",
            "🔍 No Results Found"
        )
        return

    shown = results[:limit] if limit else results
    ui = UIComponents(get_config_manager().settings.ui.table_style)
    get_console().print(ui.create_search_results_table(shown))

    if len(shown) < len(results):
        get_console().print(f"[dim]Showing {len(shown)} of {len(results)} results[/dim]")


# Export command
__all__ = ["search_command"]
