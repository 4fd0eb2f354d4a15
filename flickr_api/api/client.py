"""
Async client for the Flickr REST API with request signing and rate limiting.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Type, Union

from pydantic import ValidationError

from flickr_api.exceptions import APIError, ConfigurationError
from flickr_api.models.config import REQUEST_PERIOD, ClientConfig
from flickr_api.models.params import (
    APIParams,
    ContactsGetPublicListParams,
    PeopleGetInfoParams,
    PhotosGetFavoritesParams,
    PhotosGetInfoParams,
    PhotosSearchParams,
    PushSubscribeParams,
    marshal,
)
from flickr_api.models.responses import (
    ContactsGetPublicListResponse,
    PersonResponse,
    PhotoFavoritesResponse,
    PhotoInfo,
    SearchResponse,
)
from flickr_api.utils.log import redact_params

from .auth import FlickrAuthenticator
from .envelope import ModelT, decode_envelope, parse_payload
from .rate_limiter import RateLimiter
from .signing import sign_request
from .transport import AiohttpTransport, Transport
from .urls import build_url, rest_params

log = logging.getLogger(__name__)

Params = Union[APIParams, Mapping[str, Any], None]


class FlickrClient:
    """
    Async client for the Flickr JSON REST API.

    One instance is meant to be shared by the whole application: all calls made
    through it pass one rate limiter, keeping the app under the hourly quota.
    """

    def __init__(self, config: ClientConfig, transport: Optional[Transport] = None):
        """
        Initializes the API client.

        Args:
            config: Validated client settings.
            transport: Executes HTTP requests. Defaults to an aiohttp-backed
                transport using the configured timeout.
        """
        self.config = config
        self.api_key: str = config.api_key
        self.secret: str = config.secret

        # Set by the authenticator after a frob exchange, or supplied up front
        self.auth_token: str = config.auth_token

        self._transport: Transport = transport or AiohttpTransport(
            timeout=config.timeout
        )
        self._rate_limiter = RateLimiter(config.min_interval)
        self._authenticator = FlickrAuthenticator(self)

    @classmethod
    def create(
        cls,
        api_key: str,
        secret: str,
        auth_token: str = "",
        transport: Optional[Transport] = None,
        min_interval: float = REQUEST_PERIOD,
        **settings: Any,
    ) -> "FlickrClient":
        """
        Builds a client from plain settings.

        See https://www.flickr.com/services/api/misc.api_keys.html for
        obtaining an API key and secret.

        Raises:
            ConfigurationError: If any setting fails validation.
        """
        try:
            config = ClientConfig(
                api_key=api_key,
                secret=secret,
                auth_token=auth_token,
                min_interval=min_interval,
                **settings,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Client configuration is invalid:\n{e}") from e
        return cls(config, transport=transport)

    @property
    def authenticator(self) -> FlickrAuthenticator:
        """Provides access to the authentication helper."""
        return self._authenticator

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "FlickrClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def method_url(self, method: str, params: Params = None, sign: bool = True) -> str:
        """
        Builds the request URL for a REST method call.

        Signed calls carry the auth token, when one is set, and api_sig.
        """
        if params is None:
            wire: Dict[str, str] = {}
        elif isinstance(params, Mapping):
            wire = {str(k): str(v) for k, v in params.items()}
        else:
            wire = marshal(params)

        full = rest_params(self.api_key, method, wire)
        if sign:
            if self.auth_token:
                full["auth_token"] = self.auth_token
            _, full = sign_request(self.secret, self.api_key, method, full)

        log.debug(f"Prepared {method} with {redact_params(full)}")
        return build_url(self.config.rest_endpoint, full)

    async def api_call(
        self, method: str, params: Params = None, sign: bool = True
    ) -> Dict[str, Any]:
        """
        Makes a rate-limited API call and checks the response envelope.

        Args:
            method: The API method name, e.g. 'flickr.photos.search'.
            params: A parameter object, or a plain mapping for ad-hoc calls.
            sign: Whether to sign the call. Public reads may skip it.

        Returns:
            The decoded response object.

        Raises:
            TransportError: If the request could not be completed.
            ParseError: If the response is not a Flickr envelope.
            APIError: If Flickr reports a failure.
        """
        url = self.method_url(method, params, sign)

        await self._rate_limiter.acquire()
        body = await self._transport.request("GET", url)

        try:
            return decode_envelope(body)
        except APIError as e:
            log.debug(f"API call to {method} failed: {e}")
            raise

    async def call(
        self,
        method: str,
        params: Params,
        model: Type[ModelT],
        key: Optional[str],
        sign: bool = True,
    ) -> ModelT:
        """Makes an API call and validates its payload into `model`."""
        envelope = await self.api_call(method, params, sign=sign)
        return parse_payload(envelope, model, key)

    # Public API Methods
    async def test_echo(self, **params: Any) -> Dict[str, Any]:
        """Calls flickr.test.echo, which returns its arguments."""
        return await self.api_call("flickr.test.echo", params, sign=False)

    async def photos_search(self, params: PhotosSearchParams) -> SearchResponse:
        """
        Searches for photos.

        The thumbnail URL and size are always requested so each returned photo
        carries its aspect ratio.
        See https://www.flickr.com/services/api/flickr.photos.search.html
        """
        extras = [e for e in params.extras.split(",") if e]
        if "url_t" not in extras:
            extras.append("url_t")
        params = params.model_copy(update={"extras": ",".join(extras)})
        return await self.call(
            "flickr.photos.search", params, SearchResponse, "photos"
        )

    async def contacts_get_public_list(
        self, params: ContactsGetPublicListParams
    ) -> ContactsGetPublicListResponse:
        """Gets the public contact list for a user."""
        return await self.call(
            "flickr.contacts.getPublicList",
            params,
            ContactsGetPublicListResponse,
            "contacts",
        )

    async def people_get_info(self, params: PeopleGetInfoParams) -> PersonResponse:
        return await self.call("flickr.people.getInfo", params, PersonResponse, "person")

    async def photos_get_info(self, params: PhotosGetInfoParams) -> PhotoInfo:
        return await self.call("flickr.photos.getInfo", params, PhotoInfo, "photo")

    async def photos_get_favorites(
        self, params: PhotosGetFavoritesParams
    ) -> PhotoFavoritesResponse:
        """Lists the people who have faved a photo."""
        return await self.call(
            "flickr.photos.getFavorites", params, PhotoFavoritesResponse, "photo"
        )

    async def push_subscribe(self, params: PushSubscribeParams) -> None:
        """Subscribes a callback URL to a push feed topic."""
        await self.api_call("flickr.push.subscribe", params)
