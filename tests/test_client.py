"""
Client Pipeline Tests
---------------------
End-to-end calls through the client with an in-memory transport.
"""

import time
from urllib.parse import parse_qsl, urlsplit

import pytest

from flickr_api.api.auth import READ_PERM
from flickr_api.api.client import FlickrClient
from flickr_api.api.signing import compute_signature
from flickr_api.exceptions import APIError, ConfigurationError, ParseError, TransportError
from flickr_api.models.params import (
    ContactsGetPublicListParams,
    PeopleGetInfoParams,
    PhotosGetFavoritesParams,
    PhotosGetInfoParams,
    PhotosSearchParams,
    PushSubscribeParams,
)
from flickr_api.models.responses import Photo

SEARCH_RESPONSE = {
    "photos": {
        "page": 1,
        "pages": 10,
        "perpage": 2,
        "total": "20",
        "photo": [
            {
                "id": "101",
                "owner": "12@N01",
                "secret": "abc",
                "server": "65535",
                "farm": 66,
                "title": "Sunset",
                "ispublic": 1,
                "url_t": "https://live.staticflickr.com/65535/101_abc_t.jpg",
                "width_t": "100",
                "height_t": "50",
            },
            {
                "id": "102",
                "owner": "12@N01",
                "secret": "def",
                "server": "65535",
                "farm": 66,
                "title": "No thumbnail",
                "ispublic": 1,
            },
        ],
    },
    "stat": "ok",
}


def _signature_is_valid(params):
    unsigned = {k: v for k, v in params.items() if k != "api_sig"}
    return params["api_sig"] == compute_signature("s3cr3t", unsigned)


class TestConfiguration:

    def test_empty_api_key_rejected(self, transport):
        with pytest.raises(ConfigurationError):
            FlickrClient.create(api_key="", secret="s", transport=transport)

    def test_negative_interval_rejected(self, transport):
        with pytest.raises(ConfigurationError):
            FlickrClient.create(
                api_key="k", secret="s", transport=transport, min_interval=-1
            )

    def test_bad_endpoint_rejected(self, transport):
        with pytest.raises(ConfigurationError):
            FlickrClient.create(
                api_key="k", secret="s", transport=transport, rest_endpoint="ftp://x"
            )

    def test_default_interval_is_one_second(self, transport):
        client = FlickrClient.create(api_key="k", secret="s", transport=transport)

        assert client.rate_limiter.min_interval == 1.0


class TestMethodUrl:

    def test_unsigned_url(self, authed_client):
        url = authed_client.method_url("flickr.test.echo", {"foo": "1"}, sign=False)
        params = dict(parse_qsl(urlsplit(url).query))

        assert url.startswith("https://api.flickr.com/services/rest/?")
        assert params == {
            "api_key": "key1",
            "foo": "1",
            "format": "json",
            "method": "flickr.test.echo",
            "nojsoncallback": "1",
        }

    def test_signed_url_carries_token_and_signature(self, authed_client):
        url = authed_client.method_url(
            "flickr.people.getInfo", PeopleGetInfoParams(user_id="12@N01")
        )
        params = dict(parse_qsl(urlsplit(url).query))

        assert params["auth_token"] == "tok-123"
        assert params["user_id"] == "12@N01"
        assert _signature_is_valid(params)

    def test_signed_without_token(self, client):
        url = client.method_url("flickr.people.getInfo", PeopleGetInfoParams())
        params = dict(parse_qsl(urlsplit(url).query))

        assert "auth_token" not in params
        assert _signature_is_valid(params)

    def test_identical_inputs_identical_urls(self, client):
        params = PhotosSearchParams(text="cats", per_page=5)

        assert client.method_url("flickr.photos.search", params) == client.method_url(
            "flickr.photos.search", params
        )

    def test_non_params_object_rejected(self, client):
        with pytest.raises(TypeError):
            client.method_url("flickr.photos.search", ["text", "cats"])


class TestApiCall:

    @pytest.mark.asyncio
    async def test_test_echo_is_unsigned(self, client, transport):
        transport.queue_json({"foo": {"_content": "1"}, "stat": "ok"})

        result = await client.test_echo(foo="1")

        assert result["foo"] == {"_content": "1"}
        assert "api_sig" not in transport.last_params()
        assert transport.requests[0][0] == "GET"

    @pytest.mark.asyncio
    async def test_api_error_surfaces(self, client, transport):
        transport.queue_json({"stat": "fail", "code": 1, "message": "User not found"})

        with pytest.raises(APIError) as exc_info:
            await client.people_get_info(PeopleGetInfoParams(user_id="nobody"))

        assert exc_info.value.code == "1"
        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_transport_error_surfaces_once(self, client, transport):
        transport.queue_error(TransportError("connection reset"))
        transport.queue_json({"stat": "ok"})

        with pytest.raises(TransportError):
            await client.test_echo()

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_malformed_body_is_parse_error(self, client, transport):
        transport.queue_body(b"<rsp stat='ok'></rsp>")

        with pytest.raises(ParseError):
            await client.test_echo()

    @pytest.mark.asyncio
    async def test_calls_pass_rate_limiter(self, transport):
        client = FlickrClient.create(
            api_key="k", secret="s", transport=transport, min_interval=0.2
        )
        transport.queue_json({"stat": "ok"})
        transport.queue_json({"stat": "ok"})

        start = time.monotonic()
        await client.test_echo()
        await client.test_echo()

        assert time.monotonic() - start >= 0.2

    @pytest.mark.asyncio
    async def test_close_closes_transport(self, client, transport):
        async with client:
            pass

        assert transport.closed


class TestEndpoints:

    @pytest.mark.asyncio
    async def test_photos_search(self, client, transport):
        transport.queue_json(SEARCH_RESPONSE)

        result = await client.photos_search(
            PhotosSearchParams(text="sunset", extras="tags", per_page=2)
        )

        sent = transport.last_params()
        assert sent["method"] == "flickr.photos.search"
        assert sent["extras"] == "tags,url_t"
        assert sent["per_page"] == "2"
        assert _signature_is_valid(sent)

        assert result.total == 20
        assert result.per_page == 2
        first, second = result.photos
        assert first.farm == "66"
        assert first.ratio == 2.0
        assert second.ratio == 0.0
        assert first.url("-") == "https://farm66.staticflickr.com/65535/101_abc.jpg"
        assert first.url("z") == "https://farm66.staticflickr.com/65535/101_abc_z.jpg"

    def test_photo_url_uses_https_farm_host(self):
        photo = Photo(id="7", secret="s", server="12", farm=3)

        url = photo.url("o")
        assert url.startswith("https://farm3.staticflickr.com/")
        assert "static.flickr.com" not in url
        assert url.endswith("/12/7_s_o.jpg")

    @pytest.mark.asyncio
    async def test_photos_search_does_not_duplicate_url_t(self, client, transport):
        transport.queue_json(SEARCH_RESPONSE)

        await client.photos_search(PhotosSearchParams(extras="url_t"))

        assert transport.last_params()["extras"] == "url_t"

    @pytest.mark.asyncio
    async def test_contacts_get_public_list(self, client, transport):
        transport.queue_json(
            {
                "contacts": {
                    "page": 1,
                    "pages": 1,
                    "perpage": 1000,
                    "total": 1,
                    "contact": [{"nsid": "1@N01", "username": "alice", "ignored": 0}],
                },
                "stat": "ok",
            }
        )

        result = await client.contacts_get_public_list(
            ContactsGetPublicListParams(user_id="12@N01")
        )

        assert result.contacts[0].username == "alice"
        assert result.per_page == 1000

    @pytest.mark.asyncio
    async def test_people_get_info(self, client, transport):
        transport.queue_json(
            {
                "person": {
                    "id": "12@N01",
                    "nsid": "12@N01",
                    "ispro": 0,
                    "iconserver": "1",
                    "iconfarm": 1,
                    "path_alias": None,
                    "username": {"_content": "bob"},
                },
                "stat": "ok",
            }
        )

        person = await client.people_get_info(PeopleGetInfoParams(user_id="12@N01"))

        assert person.username == "bob"
        assert person.is_pro == "0"
        assert person.path_alias == ""

    @pytest.mark.asyncio
    async def test_photos_get_info(self, client, transport):
        transport.queue_json(
            {
                "photo": {
                    "id": "101",
                    "secret": "abc",
                    "dateuploaded": "1577836800",
                    "owner": {"nsid": "12@N01", "username": "bob"},
                    "title": {"_content": "Sunset"},
                    "description": {"_content": ""},
                    "tags": {
                        "tag": [
                            {
                                "id": "t1",
                                "authorname": "bob",
                                "raw": "Beach",
                                "_content": "beach",
                                "machine_tag": 0,
                            }
                        ]
                    },
                },
                "stat": "ok",
            }
        )

        info = await client.photos_get_info(
            PhotosGetInfoParams(photo_id="101", photo_secret="abc")
        )

        assert transport.last_params()["secret"] == "abc"
        assert info.title == "Sunset"
        assert info.owner.username == "bob"
        assert info.tags[0].content == "beach"
        assert info.tags[0].author_name == "bob"

    @pytest.mark.asyncio
    async def test_photos_get_favorites(self, client, transport):
        transport.queue_json(
            {
                "photo": {
                    "id": "101",
                    "page": 1,
                    "perpage": 10,
                    "total": "1",
                    "person": [{"nsid": "3@N01", "favedate": "1577836800"}],
                },
                "stat": "ok",
            }
        )

        faves = await client.photos_get_favorites(
            PhotosGetFavoritesParams(photo_id="101", per_page=10)
        )

        assert faves.total == 1
        assert faves.favorites[0].nsid == "3@N01"

    @pytest.mark.asyncio
    async def test_push_subscribe(self, authed_client, transport):
        transport.queue_json({"stat": "ok"})

        result = await authed_client.push_subscribe(
            PushSubscribeParams(
                topic="contacts_photos",
                callback="https://example.com/hook",
                verify="sync",
            )
        )

        sent = transport.last_params()
        assert result is None
        assert sent["topic"] == "contacts_photos"
        assert sent["auth_token"] == "tok-123"
        assert _signature_is_valid(sent)


class TestAuthentication:

    def test_auth_url(self, client):
        url = client.authenticator.auth_url(READ_PERM)
        parts = urlsplit(url)
        params = dict(parse_qsl(parts.query))

        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
            "https://www.flickr.com/services/auth/"
        )
        assert params["perms"] == "read"
        assert params["api_key"] == "key1"
        assert _signature_is_valid(params)

    @pytest.mark.asyncio
    async def test_get_token_sets_client_token(self, client, transport):
        transport.queue_json(
            {
                "auth": {
                    "token": {"_content": "72157-abcdef"},
                    "perms": {"_content": "read"},
                    "user": {"nsid": "12@N01", "username": "bob", "fullname": "Bob"},
                },
                "stat": "ok",
            }
        )

        auth = await client.authenticator.get_token("frob-1")

        sent = transport.last_params()
        assert sent["method"] == "flickr.auth.getToken"
        assert sent["frob"] == "frob-1"
        assert _signature_is_valid(sent)
        assert auth.token == "72157-abcdef"
        assert auth.perms == "read"
        assert auth.user.nsid == "12@N01"
        assert client.auth_token == "72157-abcdef"

    @pytest.mark.asyncio
    async def test_get_token_failure_keeps_token_unset(self, client, transport):
        transport.queue_json({"stat": "fail", "code": 108, "message": "Invalid frob"})

        with pytest.raises(APIError):
            await client.authenticator.get_token("bad")

        assert client.auth_token == ""
