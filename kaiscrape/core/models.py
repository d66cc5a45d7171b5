"""
Core Data Models - Pydantic models for the AnimeKai pipeline.

This module defines the records each pipeline stage emits and the
``StageResult`` wrapper that carries either a value or a typed failure.
Field names are Pythonic; aliases give the JSON keys the rendering host
expects (``href``, ``image``, ``stream``, ``subtitles``).
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


NOT_AVAILABLE = "Not available"

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories a stage can report."""

    TRANSPORT = "transport"
    EXTRACTION = "extraction"
    DECODE = "decode"
    UPSTREAM = "upstream"
    INVALID_INPUT = "invalid_input"

    def __str__(self) -> str:
        return self.value


class SearchResult(BaseModel):
    """
    A single listing block from the browse page.

    ``page_url`` is either an absolute AnimeKai URL or, for synthetic
    error entries, an error sentinel starting with ``#``.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Anime title")
    image_url: str = Field(..., alias="image", description="Poster image URL")
    page_url: str = Field(..., alias="href", description="Anime page URL or error sentinel")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure title is properly formatted."""
        return v.strip()

    def __str__(self) -> str:
        return self.title

    def __repr__(self) -> str:
        return f"SearchResult(title='{self.title}')"


class DetailRecord(BaseModel):
    """Descriptive fields scraped from an anime page."""

    description: str = Field(NOT_AVAILABLE, description="Synopsis")
    aliases: str = Field(NOT_AVAILABLE, description="Alternative titles")
    airdate: str = Field(NOT_AVAILABLE, description="Air date text as shown on the site")


class EpisodeRef(BaseModel):
    """
    Reference to one episode's link-list endpoint.

    ``request_url`` already carries the episode token and its encoded
    authentication parameter, so it can be handed straight to the
    stream resolver.
    """

    model_config = ConfigDict(populate_by_name=True)

    request_url: str = Field(..., alias="href", description="Link-list AJAX URL")
    number: int = Field(..., ge=0, description="Episode number")

    def __str__(self) -> str:
        return f"Episode {self.number}"

    def __repr__(self) -> str:
        return f"EpisodeRef(number={self.number})"


class StreamResult(BaseModel):
    """Terminal artifact of the pipeline."""

    model_config = ConfigDict(populate_by_name=True)

    stream_url: Optional[str] = Field(None, alias="stream", description="Playable source URL")
    subtitle_url: Optional[str] = Field(None, alias="subtitles", description="Subtitle track URL")
    error: Optional[str] = Field(None, description="Failure description")

    @property
    def is_playable(self) -> bool:
        """Check whether a stream URL was recovered."""
        return bool(self.stream_url)


class StageResult(BaseModel, Generic[T]):
    """
    Outcome of one pipeline stage.

    ``value`` always has the stage's normal shape. On failure it holds the
    stage's placeholder (an empty list, a synthetic record, a
    ``StreamResult`` with null URLs) and ``error``/``error_kind`` explain
    what went wrong.
    """

    value: T
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, value: T, error: str, kind: ErrorKind) -> "StageResult[T]":
        return cls(value=value, error=error, error_kind=kind)


# Export all models and types
__all__ = [
    "NOT_AVAILABLE",
    "ErrorKind",
    "SearchResult",
    "DetailRecord",
    "EpisodeRef",
    "StreamResult",
    "StageResult",
]
