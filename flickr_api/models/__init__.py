"""
Data Models Layer.

This package contains Pydantic models for client configuration, API method
parameters, and API response payloads.
"""

from .config import ClientConfig
from .params import APIParams, marshal
from .responses import FlickrModel

__all__ = ["APIParams", "ClientConfig", "FlickrModel", "marshal"]
