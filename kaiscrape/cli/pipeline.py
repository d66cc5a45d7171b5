"""
Pipeline Runner - Synchronous helpers for running stages from commands.

Typer commands are synchronous; these helpers drive one stage (or one
inbound interface call) to completion with ``asyncio.run`` while a
spinner is shown.
"""

import asyncio
import logging
from typing import Awaitable, Callable

import typer

from kaiscrape.cli.context import get_plugin_config
from kaiscrape.core.models import StageResult
from kaiscrape.interface import run_stage
from kaiscrape.plugins.animekai import AnimeKaiPlugin
from kaiscrape.ui import status_spinner


logger = logging.getLogger(__name__)


def run_stage_sync(
    stage: Callable[[AnimeKaiPlugin], Awaitable[StageResult]],
    message: str,
    show_spinner: bool = True
) -> StageResult:
    """
    Run one stage on a fresh plugin built from the current settings.

    Args:
        stage: Coroutine function taking the plugin
        message: Spinner text
        show_spinner: Whether to show the spinner; off for JSON output

    Returns:
        The stage result
    """
    if not show_spinner:
        return asyncio.run(run_stage(stage, get_plugin_config()))

    with status_spinner(message):
        return asyncio.run(run_stage(stage, get_plugin_config()))


def echo_json(call: Callable[..., Awaitable[str]], *args: str) -> None:
    """Print the JSON text an inbound interface function returns."""
    typer.echo(asyncio.run(call(*args, config=get_plugin_config())))


# Export runner helpers
__all__ = ["run_stage_sync", "echo_json"]
