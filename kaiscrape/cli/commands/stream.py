"""
Stream Commands - Resolve episode references to playable streams.

``stream`` resolves a single link-list request URL; ``resolve`` chains
the episode list and stream stages for an anime page.
"""

import logging
from typing import List, Optional

import typer

from kaiscrape import interface
from kaiscrape.cli.context import get_config_manager
from kaiscrape.cli.pipeline import echo_json, run_stage_sync
from kaiscrape.core.models import EpisodeRef, StreamResult
from kaiscrape.interface import to_json
from kaiscrape.ui import (
    UIComponents,
    display_stage_failure,
    display_warning,
    get_console,
)


logger = logging.getLogger(__name__)


def stream_command(
    url: str = typer.Argument(..., help="Link-list request URL from the episode list"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the raw JSON result",
    ),
) -> None:
    """▶️  Resolve an episode to its stream and subtitle URLs."""
    if json_output:
        echo_json(interface.stream_url, url)
        return

    result = run_stage_sync(lambda plugin: plugin.get_stream(url), "Resolving stream...")

    ui = UIComponents(get_config_manager().settings.ui.table_style)
    get_console().print(ui.create_stream_panel(result.value, url))

    if not result.ok:
        display_stage_failure(result, "Resolving stream")
        raise typer.Exit(1)


def pick_episode(episodes: List[EpisodeRef], number: Optional[int]) -> Optional[EpisodeRef]:
    """
    Pick an episode by number.

    Returns:
        The first episode with that number, the first episode when no
        number is given, or None
    """
    if not episodes:
        return None
    if number is None:
        return episodes[0]
    return next((episode for episode in episodes if episode.number == number), None)


def resolve_command(
    url: str = typer.Argument(..., help="Anime page URL from search results"),
    episode: Optional[int] = typer.Option(
        None,
        "--episode",
        "-e",
        help="Episode number to resolve (default: first listed)",
        min=0,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the raw JSON stream result",
    ),
) -> None:
    """
    🎯 List an anime's episodes and resolve one of them.

    Example:

        kaiscrape resolve https://animekai.to/watch/frieren-xyz --episode 3
    """
    result = run_stage_sync(
        lambda plugin: plugin.get_episodes(url),
        "Loading episode list...",
        show_spinner=not json_output,
    )

    if not result.ok:
        if json_output:
            typer.echo(to_json(StreamResult(error=result.error)))
        else:
            display_stage_failure(result, f"Listing episodes for {url}")
        raise typer.Exit(1)

    episodes = result.value
    target = pick_episode(episodes, episode)

    if target is None:
        message = f"Episode {episode} is not among the {len(episodes)} listed episodes"
        if json_output:
            typer.echo(to_json(StreamResult(error=message)))
        else:
            display_warning(message, "📺 Episode Not Found")
        raise typer.Exit(1)

    logger.debug(f"Resolving episode {target.number}: {target.request_url}")

    if not json_output:
        get_console().print(f"[dim]Resolving episode {target.number} of {len(episodes)}[/dim]")

    stream_command(target.request_url, json_output=json_output)


# Export commands
__all__ = ["stream_command", "resolve_command", "pick_episode"]
