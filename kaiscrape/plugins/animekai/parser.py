"""
AnimeKai Parser - Regex extraction for animekai.to pages and AJAX bodies.

All extraction goes through ``PatternTable`` instances so every field has
an ordered list of candidate patterns. The site's markup shifts between
deployments; when a pattern stops matching, the next one is tried and a
field that exhausts its table is reported as absent.
"""

import re
import logging
from typing import Dict, List, Optional, Tuple

from kaiscrape.plugins.common import PatternTable, TextCleaner, URLHelper


logger = logging.getLogger(__name__)


# Language groups in the order they are preferred
LANGUAGE_PRIORITY: Tuple[str, ...] = ("dub", "softsub", "sub")


SEARCH_PATTERNS = PatternTable({
    "block": [
        r'<div class="aitem">([\s\S]*?)</div>\s*</div>\s*</div>',
    ],
    "href": [
        r'<a[^>]+href="([^"]+)"[^>]*class="poster"[^>]*>',
        r'<a[^>]+class="poster"[^>]*href="([^"]+)"[^>]*>',
    ],
    "image": [
        r'<img[^>]+data-src="([^"]+)"[^>]*>',
        r'<img[^>]+src="([^"]+)"[^>]*>',
    ],
    "title": [
        r'<a[^>]+class="title"[^>]+title="([^"]+)"[^>]*>',
        r'<a[^>]+title="([^"]+)"[^>]+class="title"[^>]*>',
        r'<a[^>]+class="title"[^>]*>([^<]+)</a>',
    ],
})

DETAIL_PATTERNS = PatternTable({
    "description": [
        r'<div class="desc text-expand">([\s\S]*?)</div>',
        r'<div class="ani-description">([\s\S]*?)</div>',
        r'<div[^>]*class="[^"]*description[^"]*"[^>]*>([\s\S]*?)</div>',
    ],
    "aliases": [
        r'<small class="al-title text-expand">([\s\S]*?)</small>',
        r'<div class="ani-names">([\s\S]*?)</div>',
        r'<div[^>]*class="[^"]*alternative-titles[^"]*"[^>]*>([\s\S]*?)</div>',
    ],
    "airdate": [
        r'Aired:</span>\s*<span[^>]*>([\s\S]*?)</span>',
        r'<div class="ani-date">([\s\S]*?)</div>',
        r'Aired:\s*([^<]+)',
    ],
})

EPISODE_PATTERNS = PatternTable({
    "anime_id": [
        r'<div class="rate-box"[^>]*data-id="([^"]+)"',
        r'data-ani-id="([^"]+)"',
    ],
    "episode": [
        r'<a[^>]*\snum="(?P<num>[^"]+)"[^>]*\stoken="(?P<token>[^"]+)"[^>]*>',
        r'<a[^>]*\sdata-num="(?P<num>[^"]+)"[^>]*\sdata-token="(?P<token>[^"]+)"[^>]*>',
    ],
})

LINK_PATTERNS = PatternTable({
    **{
        language: [
            rf'<div class="server-items lang-group" data-id="{language}"[^>]*>([\s\S]*?)</div>',
            rf'<div[^>]*class="[^"]*lang-group[^"]*"[^>]*data-id="{language}"[^>]*>([\s\S]*?)</div>',
        ]
        for language in LANGUAGE_PRIORITY
    },
    "lang_group": [
        r'(lang-group)',
    ],
    "lid": [
        r'<span class="server"[^>]*data-lid="([^"]+)"[^>]*>',
        r'data-lid="([^"]+)"',
    ],
})


class AnimeKaiParser:
    """Specialized parser for animekai.to content."""

    def __init__(self, html_content: str, base_url: str = "https://animekai.to"):
        """
        Initialize AnimeKai parser.

        Args:
            html_content: HTML (or JSON-embedded HTML) to parse
            base_url: Base URL for resolving relative links
        """
        self.html = html_content or ""
        self.base_url = base_url

    def parse_search_results(self) -> List[Dict[str, str]]:
        """
        Parse listing blocks from the browse page.

        Blocks missing a link, poster or title are skipped.

        Returns:
            Dicts with ``title``, ``image`` and absolute ``href``, in document order
        """
        results = []

        for block_match in SEARCH_PATTERNS.find_all("block", self.html):
            block = block_match.group(1)

            href = SEARCH_PATTERNS.first("href", block)
            image = SEARCH_PATTERNS.first("image", block)
            title = TextCleaner.clean(SEARCH_PATTERNS.first("title", block))

            if not (href and image and title):
                logger.debug("Skipping incomplete listing block")
                continue

            results.append({
                "title": title,
                "image": image,
                "href": URLHelper.make_absolute(href, self.base_url),
            })

        return results

    def parse_details(self) -> Dict[str, Optional[str]]:
        """
        Parse descriptive fields from an anime page.

        Returns:
            Cleaned ``description``, ``aliases`` and ``airdate``; None where absent
        """
        details: Dict[str, Optional[str]] = {}

        for field in ("description", "aliases", "airdate"):
            value = DETAIL_PATTERNS.first(field, self.html)
            details[field] = TextCleaner.clean(value) if value else None

        return details

    def parse_anime_id(self) -> Optional[str]:
        """Extract the anime id embedded in an anime page."""
        return EPISODE_PATTERNS.first("anime_id", self.html)

    def parse_episode_tokens(self) -> List[Tuple[int, str]]:
        """
        Parse ``(number, token)`` pairs from an episode-list body.

        Pairs whose number has no leading digits are skipped.

        Returns:
            Pairs in document order
        """
        pairs = []

        for match in EPISODE_PATTERNS.find_all("episode", self.html):
            number_match = re.match(r'\s*(\d+)', match.group("num"))
            if not number_match:
                logger.debug(f"Skipping episode with unparseable number: {match.group('num')!r}")
                continue
            pairs.append((int(number_match.group(1)), match.group("token")))

        return pairs

    def select_language_group(self) -> Optional[Tuple[str, str]]:
        """
        Pick the preferred language group of a link list.

        Returns:
            ``(language, section_html)`` for the first non-empty group, or None
        """
        for language in LANGUAGE_PRIORITY:
            content = LINK_PATTERNS.first(language, self.html)
            if content:
                logger.debug(f"Using {language} language group")
                return language, content.strip()

        return None

    def parse_server_lid(self) -> Optional[str]:
        """
        Extract the link id of the server to play.

        The lid comes from the preferred language group. Documents without
        any language-group markup are searched as a whole.
        """
        if LINK_PATTERNS.first("lang_group", self.html) is None:
            logger.debug("No language groups in link list, searching whole document")
            return LINK_PATTERNS.first("lid", self.html)

        group = self.select_language_group()
        if group is None:
            return None

        return LINK_PATTERNS.first("lid", group[1])


# Export parser
__all__ = [
    "AnimeKaiParser",
    "LANGUAGE_PRIORITY",
    "SEARCH_PATTERNS",
    "DETAIL_PATTERNS",
    "EPISODE_PATTERNS",
    "LINK_PATTERNS",
]
