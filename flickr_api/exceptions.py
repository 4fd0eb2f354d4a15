"""
Defines custom exceptions for the library to allow for more specific error handling.
"""

from typing import Optional


class FlickrError(Exception):
    """Base exception for all library-specific errors."""


class TransportError(FlickrError):
    """Raised when the HTTP request could not be completed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ParseError(FlickrError):
    """Raised when a response body cannot be decoded into the expected shape."""


class APIError(FlickrError):
    """
    Raised when Flickr answers with a failure envelope.

    Carries the remote error code and message verbatim.
    """

    def __init__(self, code: str, message: str):
        super().__init__(f"Flickr error code {code}: {message}")
        self.code = code
        self.message = message


class ConfigurationError(FlickrError):
    """Raised for invalid client settings."""
