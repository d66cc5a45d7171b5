"""
HTTP Transport - Ordered fetch strategies with silent fallback.

The transport tries each configured fetch strategy in turn: a pooled
``aiohttp.ClientSession`` first, then a one-shot ``aiohttp.request``. A
strategy that raises (for any reason, including a closed or missing
session) hands the same request to the next one. When every strategy has
failed the transport logs a diagnostic and returns ``None``; it never lets
the underlying error reach the caller.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import aiohttp

from kaiscrape.core.exceptions import DecodeError


logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class RawResponse:
    """A fully read HTTP response."""

    status: int
    url: str
    text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """
        Parse the body as JSON.

        Raises:
            DecodeError: If the body is not valid JSON
        """
        try:
            return json.loads(self.text)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Response from {self.url} is not valid JSON", payload=self.text[:200], details=str(e))


FetchStrategy = Callable[[str, Dict[str, str], str, Optional[Any]], Awaitable[RawResponse]]


class SessionFetcher:
    """Primary strategy: a lazily created, pooled aiohttp session."""

    name = "session"

    def __init__(self, headers: Optional[Dict[str, str]] = None, timeout: float = 30):
        self.headers = headers or {}
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with proper configuration."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
                use_dns_cache=True
            )

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self.headers
            )

        return self._session

    async def __call__(
        self,
        url: str,
        headers: Dict[str, str],
        method: str,
        body: Optional[Any]
    ) -> RawResponse:
        async with self.session.request(method, url, headers=headers, data=body) as response:
            text = await response.text(errors="replace")
            return RawResponse(
                status=response.status,
                url=str(response.url),
                text=text,
                headers=dict(response.headers),
            )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")
        self._session = None


class OneShotFetcher:
    """Secondary strategy: a plain request on a throwaway connection."""

    name = "one-shot"

    def __init__(self, headers: Optional[Dict[str, str]] = None, timeout: float = 30):
        self.headers = headers or {}
        self.timeout = timeout

    async def __call__(
        self,
        url: str,
        headers: Dict[str, str],
        method: str,
        body: Optional[Any]
    ) -> RawResponse:
        merged = {**self.headers, **headers}
        async with aiohttp.request(
            method,
            url,
            headers=merged,
            data=body,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        ) as response:
            text = await response.text(errors="replace")
            return RawResponse(
                status=response.status,
                url=str(response.url),
                text=text,
                headers=dict(response.headers),
            )


class Transport:
    """
    Fetches URLs through an ordered list of strategies.

    Every strategy receives the same arguments. HTTP error statuses are
    returned as ordinary responses; only exceptions trigger the fallback.
    """

    def __init__(self, strategies: Sequence[FetchStrategy]):
        """
        Initialize transport.

        Args:
            strategies: Fetch strategies in the order they should be tried
        """
        self.strategies: List[FetchStrategy] = list(strategies)

    @classmethod
    def create_default(
        cls,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30,
        accept_language: str = "en-US,en;q=0.5",
        enable_fallback: bool = True
    ) -> "Transport":
        """Build the standard session + one-shot transport."""
        headers = {
            'User-Agent': user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': accept_language,
        }

        strategies: List[FetchStrategy] = [SessionFetcher(headers, timeout)]
        if enable_fallback:
            strategies.append(OneShotFetcher(headers, timeout))

        return cls(strategies)

    async def request(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        method: str = "GET",
        body: Optional[Any] = None
    ) -> Optional[RawResponse]:
        """
        Fetch a URL, falling back across strategies.

        Args:
            url: Absolute URL to fetch
            headers: Extra request headers
            method: HTTP method
            body: Request body for non-GET methods

        Returns:
            The response, or None if every strategy failed
        """
        headers = headers or {}

        for strategy in self.strategies:
            name = _strategy_name(strategy)
            try:
                logger.debug(f"{method} {url} via {name}")
                return await strategy(url, headers, method, body)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Fetch via {name} failed for {url}: {e!r}")

        logger.error(f"All fetch strategies failed for {url}")
        return None

    async def close(self) -> None:
        """Release resources held by the strategies."""
        for strategy in self.strategies:
            close = getattr(strategy, "close", None)
            if close is not None:
                try:
                    await close()
                except Exception as e:
                    logger.debug(f"Error closing fetch strategy {_strategy_name(strategy)}: {e}")

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def _strategy_name(strategy: FetchStrategy) -> str:
    return getattr(strategy, "name", None) or getattr(strategy, "__name__", repr(strategy))


__all__ = [
    "DEFAULT_USER_AGENT",
    "RawResponse",
    "FetchStrategy",
    "SessionFetcher",
    "OneShotFetcher",
    "Transport",
]
