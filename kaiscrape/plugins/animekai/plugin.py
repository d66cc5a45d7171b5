"""
AnimeKai Plugin - Pipeline stages for animekai.to

This module implements the four pipeline stages: search, details, episode
listing and stream resolution. Every stage catches its own failures and
returns a ``StageResult`` whose value keeps the stage's normal shape, so
callers never need exception handling.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from kaiscrape.core.codec import KaiCodec
from kaiscrape.core.exceptions import (
    DecodeError,
    ExtractionError,
    InvalidInputError,
    KaiScrapeError,
    UpstreamError,
)
from kaiscrape.core.models import (
    NOT_AVAILABLE,
    DetailRecord,
    EpisodeRef,
    ErrorKind,
    SearchResult,
    StageResult,
    StreamResult,
)
from kaiscrape.core.transport import Transport
from kaiscrape.plugins.base import BasePlugin, PluginMetadata
from kaiscrape.plugins.common import TextCleaner, URLHelper

from .config import AnimeKaiConfig, EPISODE_LIST_PATH, LINK_LIST_PATH, SEARCH_PATH, get_default_config
from .parser import AnimeKaiParser
from .resolver import AnimeKaiResolver


logger = logging.getLogger(__name__)


SEARCH_ERROR_TITLE = "Error: Unable to load search results"
SEARCH_ERROR_MESSAGE = "Unable to load search results."

plugin_metadata = PluginMetadata(
    name="AnimeKai",
    version="1.0.0",
    author="kaiscrape contributors",
    description="Search, details, episodes and stream resolution for animekai.to",
    website="https://animekai.to",
)

default_config = get_default_config()


class AnimeKaiPlugin(BasePlugin):
    """
    AnimeKai plugin for animekai.to

    Stages are independent: each one takes only its input URL or keyword
    and the plugin's configuration, performs its network calls in sequence
    and keeps nothing afterwards.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, transport: Optional[Transport] = None):
        """
        Initialize AnimeKai plugin.

        Args:
            config: Plugin configuration dictionary
            transport: Transport to use instead of the default one

        Raises:
            ValueError: If the merged configuration is invalid
        """
        merged_config = {**default_config}
        if config:
            merged_config.update(config)

        self.settings = AnimeKaiConfig.from_dict(merged_config)
        super().__init__(self.settings.to_dict(), transport)

        self.resolver = AnimeKaiResolver(self._fetch, self.base_url)

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        return plugin_metadata

    @property
    def base_url(self) -> str:
        """Get base URL for animekai.to"""
        return self.settings.base_url

    def _failure(self, stage: str, value: Any, error: Exception) -> StageResult:
        """Log a stage failure and wrap the placeholder value."""
        if isinstance(error, KaiScrapeError):
            self.logger.warning(f"{stage} failed: {error}")
            kind = error.kind
        else:
            self.logger.exception(f"{stage} failed unexpectedly: {error}")
            kind = ErrorKind.UPSTREAM
        return StageResult.failure(value, str(error), kind)

    def _search_error_result(self) -> SearchResult:
        return SearchResult(
            title=SEARCH_ERROR_TITLE,
            image_url=self.settings.error_image,
            page_url=URLHelper.make_error_sentinel(SEARCH_ERROR_MESSAGE),
        )

    def _link_list_url(self, token: str) -> str:
        query = urlencode({'token': token, '_': KaiCodec.encode(token)}, quote_via=quote)
        return f"{self.base_url}{LINK_LIST_PATH}?{query}"

    async def search(self, keyword: str) -> StageResult[List[SearchResult]]:
        """
        Search animekai.to by keyword.

        Args:
            keyword: Search keyword

        Returns:
            Listing results in document order; a single synthetic error
            result if the browse page could not be fetched
        """
        try:
            query = urlencode({'keyword': keyword}, quote_via=quote)
            search_url = f"{self.base_url}{SEARCH_PATH}?{query}"

            logger.debug(f"Searching AnimeKai with keyword: '{keyword}'")
            response = await self._fetch(search_url)

            parser = AnimeKaiParser(response.text, self.base_url)
            results = [SearchResult(**item) for item in parser.parse_search_results()]

            logger.info(f"Found {len(results)} results for keyword: '{keyword}'")
            return StageResult.success(results)

        except Exception as e:
            return self._failure("Search", [self._search_error_result()], e)

    async def get_details(self, page_url: str) -> StageResult[List[DetailRecord]]:
        """
        Extract description, aliases and air date from an anime page.

        Error sentinels are answered from the embedded message without any
        network call. Fields that cannot be found fall back to
        "Not available".

        Args:
            page_url: Anime page URL or error sentinel

        Returns:
            A list holding exactly one record
        """
        if URLHelper.is_error_sentinel(page_url):
            message = URLHelper.sentinel_message(page_url)
            record = DetailRecord(
                description=TextCleaner.clean(f"{message} Please try again later."),
                aliases="",
                airdate="",
            )
            return StageResult.failure([record], message, ErrorKind.INVALID_INPUT)

        try:
            logger.debug(f"Extracting details from: {page_url}")
            response = await self._fetch(page_url)

            fields = AnimeKaiParser(response.text, self.base_url).parse_details()
            missing = [name for name, value in fields.items() if not value]
            if missing:
                logger.debug(f"Detail fields not found: {', '.join(missing)}")

            record = DetailRecord(**{name: value or NOT_AVAILABLE for name, value in fields.items()})
            return StageResult.success([record])

        except Exception as e:
            record = DetailRecord(
                description=f"Error loading description: {e}",
                aliases="Aliases: Unknown",
                airdate="Aired: Unknown",
            )
            return self._failure("Details", [record], e)

    async def get_episodes(self, page_url: str) -> StageResult[List[EpisodeRef]]:
        """
        List the episodes of an anime page.

        Args:
            page_url: Anime page URL

        Returns:
            Episode references in document order; empty on any failure
        """
        try:
            if URLHelper.is_error_sentinel(page_url):
                raise InvalidInputError("Cannot list episodes for an error placeholder")

            logger.debug(f"Fetching anime page: {page_url}")
            response = await self._fetch(page_url)

            anime_id = AnimeKaiParser(response.text, self.base_url).parse_anime_id()
            if not anime_id:
                raise ExtractionError("Could not find anime ID on page", field_name="anime_id")

            token = KaiCodec.encode(anime_id)
            if not token:
                raise DecodeError("Could not encode anime ID", payload=anime_id)

            query = urlencode({'ani_id': anime_id, '_': token}, quote_via=quote)
            list_url = f"{self.base_url}{EPISODE_LIST_PATH}?{query}"

            logger.debug(f"Fetching episode list: {list_url}")
            data = await self._fetch_json(list_url, headers=self._ajax_headers(page_url))

            result = data.get("result") if isinstance(data, dict) else None
            if not result or not isinstance(result, str):
                raise UpstreamError("Invalid episode list data")

            list_html = TextCleaner.unescape_json_string(result)
            pairs = AnimeKaiParser(list_html, self.base_url).parse_episode_tokens()
            if not pairs:
                raise ExtractionError("No episodes found in episode list", field_name="episode")

            episodes = [
                EpisodeRef(request_url=self._link_list_url(episode_token), number=number)
                for number, episode_token in pairs
            ]

            logger.info(f"Found {len(episodes)} episodes for anime ID {anime_id}")
            return StageResult.success(episodes)

        except Exception as e:
            return self._failure("Episode list", [], e)

    async def get_stream(self, episode_url: str) -> StageResult[StreamResult]:
        """
        Resolve an episode's link-list URL to a stream.

        Args:
            episode_url: ``request_url`` of an ``EpisodeRef``

        Returns:
            Stream result; on failure both URLs are None and ``error`` is set
        """
        try:
            if URLHelper.is_error_sentinel(episode_url):
                raise InvalidInputError("Cannot resolve a stream for an error placeholder")

            logger.debug(f"Fetching stream info from: {episode_url}")
            return StageResult.success(await self.resolver.resolve(episode_url))

        except Exception as e:
            return self._failure("Stream resolution", StreamResult(error=str(e)), e)

    def __str__(self) -> str:
        return f"AnimeKai Plugin v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"AnimeKaiPlugin(base_url='{self.base_url}')"


# Export plugin class and metadata
__all__ = [
    "AnimeKaiPlugin",
    "plugin_metadata",
    "default_config",
    "SEARCH_ERROR_TITLE",
    "SEARCH_ERROR_MESSAGE",
]
