"""
Inbound Interface - JSON entry points for a rendering host.

Each function runs one pipeline stage on a fresh plugin and returns the
stage's value serialized as JSON text with the host's key names. The
functions never raise: failures come back as the stage's placeholder
value (an error entry, an error record, an empty list or a stream result
with null URLs).
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from kaiscrape.core.models import DetailRecord, SearchResult, StageResult, StreamResult
from kaiscrape.core.transport import Transport
from kaiscrape.plugins.animekai import AnimeKaiConfig, AnimeKaiPlugin
from kaiscrape.plugins.animekai.plugin import SEARCH_ERROR_MESSAGE, SEARCH_ERROR_TITLE
from kaiscrape.plugins.common import URLHelper


logger = logging.getLogger(__name__)


def to_json(value: Any) -> str:
    """Serialize a stage value using wire key names."""
    if isinstance(value, list):
        data = [item.model_dump(by_alias=True) for item in value]
    else:
        data = value.model_dump(by_alias=True)
    return json.dumps(data, ensure_ascii=False)


async def run_stage(
    stage: Callable[[AnimeKaiPlugin], Awaitable[StageResult]],
    config: Optional[Dict[str, Any]] = None,
    transport: Optional[Transport] = None
) -> StageResult:
    """
    Run one stage on a plugin that lives only for this call.

    Args:
        stage: Coroutine function taking the plugin
        config: Plugin configuration overrides
        transport: Transport to use instead of the default one

    Returns:
        The stage result
    """
    async with AnimeKaiPlugin(config, transport=transport) as plugin:
        return await stage(plugin)


async def search(
    keyword: str,
    config: Optional[Dict[str, Any]] = None,
    transport: Optional[Transport] = None
) -> str:
    """Search by keyword; JSON array of ``{title, image, href}``."""
    try:
        result = await run_stage(lambda plugin: plugin.search(keyword), config, transport)
        return to_json(result.value)
    except Exception as e:
        logger.exception(f"Search interface failed: {e}")
        fallback = SearchResult(
            title=SEARCH_ERROR_TITLE,
            image_url=(config or {}).get("error_image") or AnimeKaiConfig().error_image,
            page_url=URLHelper.make_error_sentinel(SEARCH_ERROR_MESSAGE),
        )
        return to_json([fallback])


async def details(
    url: str,
    config: Optional[Dict[str, Any]] = None,
    transport: Optional[Transport] = None
) -> str:
    """Describe an anime page; JSON array holding one ``{description, aliases, airdate}``."""
    try:
        result = await run_stage(lambda plugin: plugin.get_details(url), config, transport)
        return to_json(result.value)
    except Exception as e:
        logger.exception(f"Details interface failed: {e}")
        fallback = DetailRecord(
            description=f"Error loading description: {e}",
            aliases="Aliases: Unknown",
            airdate="Aired: Unknown",
        )
        return to_json([fallback])


async def episodes(
    url: str,
    config: Optional[Dict[str, Any]] = None,
    transport: Optional[Transport] = None
) -> str:
    """List episodes of an anime page; JSON array of ``{href, number}``."""
    try:
        result = await run_stage(lambda plugin: plugin.get_episodes(url), config, transport)
        return to_json(result.value)
    except Exception as e:
        logger.exception(f"Episodes interface failed: {e}")
        return "[]"


async def stream_url(
    episode_url: str,
    config: Optional[Dict[str, Any]] = None,
    transport: Optional[Transport] = None
) -> str:
    """Resolve an episode reference; JSON object ``{stream, subtitles, error}``."""
    try:
        result = await run_stage(lambda plugin: plugin.get_stream(episode_url), config, transport)
        return to_json(result.value)
    except Exception as e:
        logger.exception(f"Stream interface failed: {e}")
        return to_json(StreamResult(error=str(e)))


__all__ = [
    "search",
    "details",
    "episodes",
    "stream_url",
    "run_stage",
    "to_json",
]
