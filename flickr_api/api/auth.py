"""
Handles the Flickr web authentication flow: building the permission URL and
exchanging the returned frob for a token.

See https://www.flickr.com/services/api/auth.howto.web.html
"""

import logging
from typing import TYPE_CHECKING

from flickr_api.models.responses import AuthToken

from .envelope import parse_payload
from .signing import sign_params
from .urls import build_url

if TYPE_CHECKING:
    from .client import FlickrClient

log = logging.getLogger(__name__)

# Permission levels, see https://www.flickr.com/services/api/auth.spec.html
READ_PERM = "read"
WRITE_PERM = "write"
DELETE_PERM = "delete"


class FlickrAuthenticator:
    """
    Manages the authentication flow for the Flickr API client.
    """

    def __init__(self, api_client: "FlickrClient"):
        """
        Args:
            api_client: A reference to the main FlickrClient instance.
        """
        self._api_client = api_client

    def auth_url(self, perms: str) -> str:
        """
        Returns the URL where a user grants the app access to their account.

        Args:
            perms: One of READ_PERM, WRITE_PERM or DELETE_PERM.
        """
        client = self._api_client
        params = sign_params(client.secret, {"api_key": client.api_key, "perms": perms})
        return build_url(client.config.auth_endpoint, params)

    async def get_token(self, frob: str) -> AuthToken:
        """
        Exchanges a temporary frob for a token that does not expire.

        The token is also set on the client so later signed calls act on
        behalf of the user.
        """
        envelope = await self._api_client.api_call(
            "flickr.auth.getToken", {"frob": frob}
        )
        auth = parse_payload(envelope, AuthToken, "auth")
        self._api_client.auth_token = auth.token
        log.info(f"Authenticated as: {auth.user.username or auth.user.nsid}")
        return auth
