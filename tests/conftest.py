"""
Shared fixtures for the flickr_api tests.
"""

import json
from typing import Any, Dict, List, Tuple
from urllib.parse import parse_qsl, urlsplit

import pytest

from flickr_api.api.client import FlickrClient
from flickr_api.exceptions import TransportError


class FakeTransport:
    """
    In-memory transport that records requests and replays queued bodies.
    """

    def __init__(self):
        self.requests: List[Tuple[str, str]] = []
        self.responses: List[Any] = []
        self.closed = False

    def queue_json(self, payload: Dict[str, Any]) -> None:
        self.responses.append(json.dumps(payload).encode("utf-8"))

    def queue_body(self, body: bytes) -> None:
        self.responses.append(body)

    def queue_error(self, error: Exception) -> None:
        self.responses.append(error)

    def last_params(self) -> Dict[str, str]:
        _, url = self.requests[-1]
        return dict(parse_qsl(urlsplit(url).query))

    async def request(self, method: str, url: str) -> bytes:
        self.requests.append((method, url))
        if not self.responses:
            raise TransportError("No response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


def _make_client(
    transport: FakeTransport, auth_token: str = "", min_interval: float = 0.0
) -> FlickrClient:
    return FlickrClient.create(
        api_key="key1",
        secret="s3cr3t",
        auth_token=auth_token,
        transport=transport,
        min_interval=min_interval,
    )


@pytest.fixture
def client(transport: FakeTransport) -> FlickrClient:
    """Client without rate-limit spacing so tests run instantly."""
    return _make_client(transport)


@pytest.fixture
def authed_client(transport: FakeTransport) -> FlickrClient:
    return _make_client(transport, auth_token="tok-123")

