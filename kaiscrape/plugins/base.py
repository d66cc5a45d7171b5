"""
Base Plugin Interface - Abstract base class for site plugins.

This module defines the interface a site plugin implements: the four
pipeline stages (search, details, episodes, stream) each returning a
``StageResult``, plus shared fetch helpers built on the transport.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from kaiscrape.core.exceptions import NetworkError
from kaiscrape.core.models import DetailRecord, EpisodeRef, SearchResult, StageResult, StreamResult
from kaiscrape.core.transport import DEFAULT_USER_AGENT, RawResponse, Transport


logger = logging.getLogger(__name__)


class PluginMetadata(BaseModel):
    """Metadata information for a plugin."""

    name: str = Field(..., description="Plugin display name")
    version: str = Field(default="1.0.0", description="Plugin version")
    author: str = Field(default="Unknown", description="Plugin author")
    description: str = Field(default="", description="Plugin description")
    website: Optional[str] = Field(None, description="Source website URL")


class BasePlugin(ABC):
    """
    Abstract base class for site plugins.

    A plugin owns no state between stage calls other than its
    configuration and transport; stages must not stash data on ``self``.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, transport: Optional[Transport] = None):
        """
        Initialize the plugin with configuration.

        Args:
            config: Plugin-specific configuration dictionary
            transport: Transport to use; one is built from the config if omitted
        """
        self.config = config or {}
        self._transport = transport
        self._owns_transport = transport is None

        # Set up logging for this plugin
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._initialize_config()

    def _initialize_config(self) -> None:
        """Initialize plugin configuration with defaults."""
        self.timeout = self.config.get('timeout', 30)
        self.user_agent = self.config.get('user_agent', DEFAULT_USER_AGENT)
        self.accept_language = self.config.get('accept_language', 'en-US,en;q=0.5')
        self.enable_fallback_fetch = self.config.get('enable_fallback_fetch', True)

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata information."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Get the base URL for the site."""
        pass

    @property
    def transport(self) -> Transport:
        """Get or create the transport."""
        if self._transport is None:
            self._transport = Transport.create_default(
                user_agent=self.user_agent,
                timeout=self.timeout,
                accept_language=self.accept_language,
                enable_fallback=self.enable_fallback_fetch,
            )
        return self._transport

    def _ajax_headers(self, referer: str) -> Dict[str, str]:
        """Headers marking a request as programmatic."""
        return {
            'X-Requested-With': 'XMLHttpRequest',
            'Referer': referer,
        }

    async def _fetch(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        method: str = 'GET',
        body: Optional[Any] = None
    ) -> RawResponse:
        """
        Fetch a URL and require a successful status.

        Raises:
            NetworkError: If the transport gave up or the status is not 2xx
        """
        response = await self.transport.request(url, headers=headers, method=method, body=body)

        if response is None:
            raise NetworkError(f"Failed to fetch {url}", url=url)

        if not response.ok:
            raise NetworkError(
                f"HTTP {response.status} error for {url}",
                url=url,
                status_code=response.status,
                details=response.text[:200]
            )

        self.logger.debug(f"Fetched {url} ({len(response.text)} bytes)")
        return response

    async def _fetch_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """Fetch a URL and parse the body as JSON."""
        response = await self._fetch(url, headers=headers)
        return response.json()

    @abstractmethod
    async def search(self, keyword: str) -> StageResult[List[SearchResult]]:
        """
        Search the site by keyword.

        Args:
            keyword: Search keyword

        Returns:
            Search results; on failure a single synthetic error entry
        """
        pass

    @abstractmethod
    async def get_details(self, page_url: str) -> StageResult[List[DetailRecord]]:
        """
        Extract descriptive fields from an anime page.

        Returns:
            A list holding exactly one record
        """
        pass

    @abstractmethod
    async def get_episodes(self, page_url: str) -> StageResult[List[EpisodeRef]]:
        """
        List the episodes of an anime page.

        Returns:
            Episode references in document order; empty on failure
        """
        pass

    @abstractmethod
    async def get_stream(self, episode_url: str) -> StageResult[StreamResult]:
        """
        Resolve an episode reference to a playable stream.

        Returns:
            Stream result; URLs are None and ``error`` is set on failure
        """
        pass

    async def cleanup(self) -> None:
        """Clean up resources used by the plugin."""
        if self._transport is not None and self._owns_transport:
            await self._transport.close()
            self._transport = None

    async def __aenter__(self) -> "BasePlugin":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


# Export base plugin class and metadata
__all__ = ["BasePlugin", "PluginMetadata"]
