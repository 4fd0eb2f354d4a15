"""
flickr-api: an async client for the Flickr REST API.
"""

__version__ = "0.1.0"

from flickr_api.api import FlickrClient
from flickr_api.exceptions import (
    APIError,
    ConfigurationError,
    FlickrError,
    ParseError,
    TransportError,
)
from flickr_api.models import ClientConfig

__all__ = [
    "APIError",
    "ClientConfig",
    "ConfigurationError",
    "FlickrClient",
    "FlickrError",
    "ParseError",
    "TransportError",
    "__version__",
]
