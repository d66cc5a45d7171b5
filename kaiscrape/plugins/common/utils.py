"""
Plugin Utilities - Common helpers for scraping plugins.

This module provides the text normalizer applied to every human-readable
field, URL helpers including the error-sentinel convention, and the
ordered-fallback pattern table used for regex extraction.
"""

import re
import logging
from typing import Dict, List, Mapping, Match, Optional, Pattern, Sequence, Tuple, Union
from urllib.parse import quote, unquote, urljoin, urlparse


logger = logging.getLogger(__name__)


ERROR_SENTINEL = "#"


class TextCleaner:
    """Utility class for cleaning and normalizing text content."""

    # Character references the site uses in titles and synopses
    ENTITY_REPLACEMENTS = {
        "&#8217;": "'",
        "&#8211;": "-",
    }

    NUMERIC_ENTITY = re.compile(r"&#[0-9]+;")
    WHITESPACE = re.compile(r"\s+")

    @classmethod
    def clean(cls, text: Optional[str]) -> str:
        """
        Normalize an extracted text fragment.

        Known character references become their literal characters, all
        other numeric references are dropped, whitespace runs collapse to a
        single space and the result is trimmed.

        Args:
            text: Raw fragment, possibly None

        Returns:
            Cleaned text
        """
        if not text:
            return ""

        # Dropping a reference can splice a new one together, so repeat
        # until nothing changes.
        previous = None
        while previous != text:
            previous = text
            for entity, replacement in cls.ENTITY_REPLACEMENTS.items():
                text = text.replace(entity, replacement)
            text = cls.NUMERIC_ENTITY.sub("", text)

        return cls.WHITESPACE.sub(" ", text).strip()

    @staticmethod
    def unescape_json_string(raw: Optional[str]) -> str:
        """
        Undo backslash escaping left on HTML embedded in JSON.

        This is deliberately not a JSON parse: it only reverses escaped
        quotes, backslashes and whitespace control characters so that
        regexes and ``json.loads`` can run on the embedded content.
        """
        if not raw:
            return ""

        return (
            raw.replace('\\"', '"')
            .replace("\\'", "'")
            .replace("\\\\", "\\")
            .replace("\\n", "\n")
            .replace("\\t", "\t")
            .replace("\\r", "\r")
        )


class URLHelper:
    """Utility class for URL manipulation and the error-sentinel convention."""

    @staticmethod
    def is_absolute(url: str) -> bool:
        """Check if URL is absolute."""
        return bool(urlparse(url).netloc)

    @staticmethod
    def make_absolute(url: str, base_url: str) -> str:
        """Convert relative URL to absolute."""
        if URLHelper.is_absolute(url):
            return url
        return urljoin(base_url.rstrip("/") + "/", url)

    @staticmethod
    def is_error_sentinel(url: Optional[str]) -> bool:
        """Check whether a page URL is an error placeholder."""
        return bool(url) and url.startswith(ERROR_SENTINEL)

    @staticmethod
    def make_error_sentinel(message: str) -> str:
        """Build a page URL that carries an error message instead of a location."""
        return ERROR_SENTINEL + quote(message, safe="")

    @staticmethod
    def sentinel_message(url: str) -> str:
        """Recover the human-readable message from an error sentinel."""
        return unquote(url[len(ERROR_SENTINEL):])


PatternSpec = Union[str, Pattern[str]]


class PatternTable:
    """
    Ordered regex fallbacks per field.

    Each field maps to a list of patterns tried in declared order; the
    first one producing a non-blank capture wins. Patterns are data, so
    they can be added or reordered without touching control flow.
    """

    def __init__(self, fields: Mapping[str, Sequence[PatternSpec]], flags: int = 0):
        """
        Initialize pattern table.

        Args:
            fields: Field name to ordered pattern list
            flags: Regex flags applied to string patterns
        """
        self._fields: Dict[str, Tuple[Pattern[str], ...]] = {
            name: tuple(
                p if isinstance(p, re.Pattern) else re.compile(p, flags)
                for p in patterns
            )
            for name, patterns in fields.items()
        }

    def patterns(self, field: str) -> Tuple[Pattern[str], ...]:
        return self._fields[field]

    def first(self, field: str, text: str) -> Optional[str]:
        """
        Extract a single value for a field.

        Args:
            field: Field name
            text: Document to search

        Returns:
            The first non-blank capture, or None if every pattern failed
        """
        for index, pattern in enumerate(self._fields[field]):
            match = pattern.search(text)
            if match and match.group(1) and match.group(1).strip():
                logger.debug(f"Field '{field}' matched pattern #{index + 1}")
                return match.group(1)

        logger.debug(f"Field '{field}' not found ({len(self._fields[field])} patterns tried)")
        return None

    def find_all(self, field: str, text: str) -> List[Match[str]]:
        """
        Extract every occurrence of a repeated field.

        The first pattern that matches at least once supplies all results;
        later patterns are only consulted when earlier ones match nothing.

        Returns:
            Match objects in document order
        """
        for index, pattern in enumerate(self._fields[field]):
            matches = list(pattern.finditer(text))
            if matches:
                logger.debug(f"Field '{field}' matched {len(matches)} times with pattern #{index + 1}")
                return matches

        logger.debug(f"Field '{field}' not found ({len(self._fields[field])} patterns tried)")
        return []


# Export utility classes
__all__ = [
    "ERROR_SENTINEL",
    "TextCleaner",
    "URLHelper",
    "PatternTable",
]
