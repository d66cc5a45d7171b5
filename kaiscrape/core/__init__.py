"""
Core Layer - Data models, codec, transport and configuration.

This module contains the building blocks shared by the AnimeKai pipeline
stages and the command-line front end.
"""

from kaiscrape.core.codec import KaiCodec
from kaiscrape.core.config_manager import ConfigManager
from kaiscrape.core.config_schemas import AppSettings
from kaiscrape.core.config_defaults import create_default_config_files, get_default_settings
from kaiscrape.core.exceptions import (
    KaiScrapeError,
    ConfigurationError,
    DecodeError,
    ExtractionError,
    InvalidInputError,
    NetworkError,
    UpstreamError,
)
from kaiscrape.core.models import (
    DetailRecord,
    EpisodeRef,
    ErrorKind,
    SearchResult,
    StageResult,
    StreamResult,
)
from kaiscrape.core.transport import RawResponse, Transport

__all__ = [
    # Data Models
    "SearchResult",
    "DetailRecord",
    "EpisodeRef",
    "StreamResult",
    "StageResult",
    "ErrorKind",
    # Codec and Transport
    "KaiCodec",
    "Transport",
    "RawResponse",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "create_default_config_files",
    "get_default_settings",
    # Exceptions
    "KaiScrapeError",
    "ConfigurationError",
    "NetworkError",
    "ExtractionError",
    "DecodeError",
    "UpstreamError",
    "InvalidInputError",
]
