"""
Logging helpers.

The library only creates module loggers under the 'flickr_api' namespace;
applications opt into console output with configure_logging().
"""

import logging
from typing import Dict, Mapping, Optional

from rich.console import Console
from rich.logging import RichHandler

# Values that must not reach log output.
SENSITIVE_KEYS = frozenset({"api_sig", "auth_token"})


def redact_params(params: Mapping[str, str]) -> Dict[str, str]:
    """Returns a copy of request parameters safe to log."""
    return {k: ("***" if k in SENSITIVE_KEYS else v) for k, v in params.items()}


def configure_logging(
    verbose: int = 0, console: Optional[Console] = None
) -> logging.Logger:
    """
    Attaches a Rich console handler to the 'flickr_api' logger.

    Args:
        verbose: 0 for warnings only, 1 for info, 2 or more for debug.
        console: Console to render to; a new stderr console by default.

    Returns:
        The configured package logger.
    """
    log = logging.getLogger("flickr_api")

    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    log.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in log.handlers):
        log.addHandler(
            RichHandler(
                console=console or Console(stderr=True),
                rich_tracebacks=True,
                show_path=False,
                markup=True,
            )
        )
    return log
