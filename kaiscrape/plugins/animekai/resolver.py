"""
AnimeKai Stream Resolver - Walks an episode's link list to a playable source.

Chain: link list -> server lid -> link view (encoded embed payload) ->
media endpoint (encoded sources payload) -> best source and subtitle.
Each hop depends on a value extracted from the previous one, so hops run
strictly in sequence with a single attempt each. Any missing value aborts
the chain with a ``KaiScrapeError`` describing the hop that failed.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote, urlencode

from kaiscrape.core.codec import KaiCodec
from kaiscrape.core.exceptions import DecodeError, ExtractionError, UpstreamError
from kaiscrape.core.models import StreamResult
from kaiscrape.core.transport import RawResponse
from kaiscrape.plugins.common import TextCleaner

from .config import EMBED_SEGMENT, LINK_VIEW_PATH, MEDIA_SEGMENT
from .parser import AnimeKaiParser


logger = logging.getLogger(__name__)


Fetch = Callable[..., Awaitable[RawResponse]]


class AnimeKaiResolver:
    """Resolves link-list URLs produced by the episode stage."""

    def __init__(self, fetch: Fetch, base_url: str = "https://animekai.to"):
        """
        Initialize resolver.

        Args:
            fetch: Coroutine ``fetch(url, headers=...)`` returning a successful
                   response or raising ``NetworkError``
            base_url: Base URL for the site
        """
        self._fetch = fetch
        self.base_url = base_url

    @property
    def _ajax_headers(self) -> Dict[str, str]:
        return {
            'X-Requested-With': 'XMLHttpRequest',
            'Referer': f"{self.base_url}/",
        }

    async def resolve(self, episode_url: str) -> StreamResult:
        """
        Resolve an episode link-list URL.

        Args:
            episode_url: ``/ajax/links/list`` URL from an ``EpisodeRef``

        Returns:
            Stream result with a source URL and optional subtitle URL

        Raises:
            KaiScrapeError: If any hop fails
        """
        lid = await self._find_server_lid(episode_url)
        logger.debug(f"Found server with data-lid: {lid}")

        embed_url = await self._fetch_embed_url(lid)
        logger.debug(f"Embed URL: {embed_url}")

        media = await self._fetch_media_payload(embed_url)

        result = self.build_stream_result(media)
        logger.info(f"Resolved stream for {episode_url}")
        return result

    async def _find_server_lid(self, episode_url: str) -> str:
        response = await self._fetch(episode_url, headers=self._ajax_headers)
        link_html = self._link_list_html(response.text)

        lid = AnimeKaiParser(link_html, self.base_url).parse_server_lid()
        if not lid:
            raise ExtractionError("No server with data-lid found", field_name="lid")

        return lid

    def _link_list_html(self, body: str) -> str:
        """
        Get the link-list markup out of a link-list response.

        The response is normally JSON whose ``result`` holds the markup.
        Bodies that do not parse as JSON, even after unescaping, are
        treated as the markup itself.
        """
        payload = _parse_json(body)
        if payload is None:
            payload = _parse_json(TextCleaner.unescape_json_string(body))

        if not isinstance(payload, dict):
            logger.debug("Link list is not a JSON object, parsing as HTML")
            return TextCleaner.unescape_json_string(body)

        if payload.get("status") is False:
            raise UpstreamError(payload.get("message") or "Server returned error status", status=False)

        result = payload.get("result")
        if not result:
            raise UpstreamError("No result data in response")

        if isinstance(result, list):
            return "\n".join(str(item) for item in result)

        return TextCleaner.unescape_json_string(str(result))

    async def _fetch_embed_url(self, lid: str) -> str:
        token = KaiCodec.encode(lid)
        if not token:
            raise DecodeError("Could not encode server id", payload=lid)

        query = urlencode({'id': lid, '_': token}, quote_via=quote)
        response = await self._fetch(f"{self.base_url}{LINK_VIEW_PATH}?{query}", headers=self._ajax_headers)
        data = response.json()

        result = data.get("result") if isinstance(data, dict) else None
        if not result:
            raise UpstreamError("Invalid server data")

        embed = result if isinstance(result, dict) else _decode_json(KaiCodec.decode(result), "server")

        url = embed.get("url") if isinstance(embed, dict) else None
        if not url:
            raise ExtractionError("No URL found in decoded data", field_name="url")

        return url

    async def _fetch_media_payload(self, embed_url: str) -> Dict[str, Any]:
        media_url = embed_url.replace(EMBED_SEGMENT, MEDIA_SEGMENT, 1)
        logger.debug(f"Fetching media URL: {media_url}")

        response = await self._fetch(media_url, headers={'Referer': embed_url})
        data = response.json()

        result = data.get("result") if isinstance(data, dict) else None
        if not result:
            raise UpstreamError("Invalid media data")

        if isinstance(result, dict):
            return result

        payload = _decode_json(KaiCodec.decode_mega(result), "media")
        if not isinstance(payload, dict):
            raise DecodeError("Media payload is not a JSON object")

        return payload

    @classmethod
    def build_stream_result(cls, media: Dict[str, Any]) -> StreamResult:
        """
        Pick the stream and subtitle from a decoded media payload.

        Raises:
            ExtractionError: If the payload has no usable source
        """
        sources = [s for s in media.get("sources") or [] if isinstance(s, dict)]
        if not sources:
            raise ExtractionError("No stream sources found in the response", field_name="sources")

        logger.debug(f"Found {len(sources)} stream sources")
        source = cls.select_source(sources)
        if not source.get("file"):
            raise ExtractionError("Selected stream source has no file", field_name="file")

        tracks = [t for t in media.get("tracks") or [] if isinstance(t, dict)]
        subtitle = cls.select_subtitle(tracks)

        return StreamResult(
            stream_url=source["file"],
            subtitle_url=subtitle.get("file") if subtitle else None,
        )

    @staticmethod
    def select_source(sources: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Prefer the first HLS source, else the first source."""
        return next((s for s in sources if s.get("type") == "hls"), sources[0])

    @staticmethod
    def select_subtitle(tracks: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Prefer an English caption track, else the first caption track."""
        captions = [t for t in tracks if t.get("kind") == "captions"]
        english = next(
            (t for t in captions if "english" in str(t.get("label") or "").lower()),
            None
        )
        return english or (captions[0] if captions else None)


def _parse_json(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _decode_json(decoded: str, label: str) -> Any:
    if not decoded:
        raise DecodeError(f"Could not decode {label} payload")
    try:
        return json.loads(decoded)
    except ValueError as e:
        raise DecodeError(f"Decoded {label} payload is not valid JSON", payload=decoded[:200], details=str(e))


# Export resolver
__all__ = ["AnimeKaiResolver"]
