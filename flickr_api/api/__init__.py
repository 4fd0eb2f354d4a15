"""
Flickr API Layer.

This package builds, signs, rate-limits and decodes calls to the Flickr REST
API.
"""

from .auth import DELETE_PERM, READ_PERM, WRITE_PERM, FlickrAuthenticator
from .client import FlickrClient
from .rate_limiter import RateLimiter
from .transport import AiohttpTransport, Transport

__all__ = [
    "DELETE_PERM",
    "READ_PERM",
    "WRITE_PERM",
    "AiohttpTransport",
    "FlickrAuthenticator",
    "FlickrClient",
    "RateLimiter",
    "Transport",
]
