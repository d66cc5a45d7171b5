"""
Core Exceptions - Custom exception classes for kaiscrape.

Pipeline helpers raise these; the stage boundaries in the AnimeKai plugin
catch them and turn them into failed ``StageResult`` values, so none of
them ever reaches a caller of the inbound interface.
"""

from typing import Optional, Any

from kaiscrape.core.models import ErrorKind


class KaiScrapeError(Exception):
    """Base exception class for all kaiscrape-specific errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize kaiscrape error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(KaiScrapeError):
    """Raised when configuration-related errors occur."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_path: Path to the problematic configuration file
            details: Additional error context
        """
        super().__init__(message, details)
        self.config_path = config_path


class NetworkError(KaiScrapeError):
    """Raised when a page or endpoint could not be fetched."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if a response was received
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ExtractionError(KaiScrapeError):
    """Raised when every pattern for a required field has failed."""

    kind = ErrorKind.EXTRACTION

    def __init__(self, message: str, field_name: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.field_name = field_name


class DecodeError(KaiScrapeError):
    """Raised when a token, base64 payload or JSON body cannot be decoded."""

    kind = ErrorKind.DECODE

    def __init__(self, message: str, payload: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.payload = payload


class UpstreamError(KaiScrapeError):
    """Raised when the site reports a failure in its own response body."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, message: str, status: Optional[Any] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.status = status


class InvalidInputError(KaiScrapeError):
    """Raised for inputs a stage refuses to work with, such as error sentinels."""

    kind = ErrorKind.INVALID_INPUT


# Export all exception classes
__all__ = [
    "KaiScrapeError",
    "ConfigurationError",
    "NetworkError",
    "ExtractionError",
    "DecodeError",
    "UpstreamError",
    "InvalidInputError",
]
