"""
HTTP transport used by the client to execute fully built request URLs.
"""

import asyncio
import logging
from typing import Optional, Protocol

import aiohttp
from yarl import URL

from flickr_api.exceptions import TransportError

log = logging.getLogger(__name__)


class Transport(Protocol):
    """Executes a request and returns the raw response body."""

    async def request(self, method: str, url: str) -> bytes: ...

    async def close(self) -> None: ...


class AiohttpTransport:
    """
    Transport backed by a lazily created aiohttp session.
    """

    def __init__(self, timeout: float = 60.0, connection_limit: int = 8):
        """
        Args:
            timeout: Total timeout in seconds for one request.
            connection_limit: Size of the connection pool.
        """
        self.timeout = timeout
        self.connection_limit = connection_limit
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.connection_limit,
                ttl_dns_cache=300,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"Accept-Encoding": "gzip, deflate"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def request(self, method: str, url: str) -> bytes:
        """
        Sends the request and returns the body of a 2xx response.

        The URL is sent as-is; its query is already percent-encoded and signed.

        Raises:
            TransportError: On connection failures, timeouts and non-2xx
            statuses.
        """
        await self._initialize_session()
        target = URL(url, encoded=True)

        try:
            async with self._session.request(method, target) as r:
                body = await r.read()
                if not 200 <= r.status < 300:
                    raise TransportError(
                        f"HTTP {r.status} from {target.host}{target.path}",
                        status=r.status,
                    )
                return body
        except aiohttp.ClientError as e:
            log.debug(f"{method} {target.host}{target.path} failed: {e}")
            raise TransportError(f"Request to {target.host} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request to {target.host} timed out after {self.timeout}s"
            ) from e
