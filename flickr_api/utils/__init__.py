"""
Utilities Layer.

Logging helpers shared by the API modules.
"""

from .log import configure_logging, redact_params

__all__ = ["configure_logging", "redact_params"]
