"""
kaiscrape - AnimeKai metadata and stream extraction pipeline.

Scrapes animekai.to listing, detail and episode pages, walks the site's
AJAX endpoints and decodes the token/payload scheme that hides the final
video source. Ships a Typer and Rich command-line front end.
"""

__version__ = "0.1.0"
__author__ = "kaiscrape contributors"

# Package metadata
__title__ = "kaiscrape"
__description__ = "AnimeKai metadata and stream extraction pipeline"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

from kaiscrape.core.models import SearchResult, DetailRecord, EpisodeRef, StreamResult
from kaiscrape.interface import search, details, episodes, stream_url

__all__ = [
    "__version__",
    "__author__",
    "SearchResult",
    "DetailRecord",
    "EpisodeRef",
    "StreamResult",
    "search",
    "details",
    "episodes",
    "stream_url",
]
