"""
CLI Layer - Command-line interface components.

This module contains the Typer-based CLI application and command
implementations that drive the AnimeKai pipeline from a terminal.
"""

from kaiscrape.cli.main import app

__all__ = ["app"]
