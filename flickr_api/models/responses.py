"""
Pydantic models for the payloads returned by the Flickr JSON API.
"""

from typing import Annotated, Any, List

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

# Image sizes supported by Flickr.  See
# https://www.flickr.com/services/api/misc.urls.html
SIZE_SMALL_SQUARE = "s"
SIZE_THUMBNAIL = "t"
SIZE_SMALL = "m"
SIZE_MEDIUM_500 = "-"
SIZE_MEDIUM_640 = "z"
SIZE_LARGE = "b"
SIZE_ORIGINAL = "o"


def _unwrap_content(value: Any) -> Any:
    """Flickr JSON renders XML text nodes as {"_content": ...}."""
    if isinstance(value, dict):
        return value.get("_content", "")
    return value


def _unwrap_list(key: str):
    def unwrap(value: Any) -> Any:
        if isinstance(value, dict):
            return value.get(key, [])
        return value

    return unwrap


Text = Annotated[str, BeforeValidator(_unwrap_content)]


class FlickrModel(BaseModel):
    """Base for response shapes: lenient about numbers and unknown keys."""

    model_config = ConfigDict(
        populate_by_name=True, coerce_numbers_to_str=True, extra="ignore"
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Lets defaults apply where Flickr sends null."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class User(FlickrModel):
    """A Flickr user."""

    username: Text = ""
    nsid: str = ""
    fullname: str = ""


class Photo(FlickrModel):
    """A photo as listed by search results."""

    id: str = ""
    owner: str = ""
    secret: str = ""
    server: str = ""
    farm: str = ""
    title: Text = ""
    is_public: str = Field("", alias="ispublic")
    url_t: str = ""
    width_t: str = ""
    height_t: str = ""

    # Width divided by height of the thumbnail, 0.0 when unknown.
    ratio: float = 0.0

    @model_validator(mode="after")
    def compute_ratio(self) -> "Photo":
        try:
            width = float(self.width_t)
            height = float(self.height_t)
        except ValueError:
            return self
        if height:
            self.ratio = width / height
        return self

    def url(self, size: str) -> str:
        """
        Returns the URL to this photo in the given size.

        Photos are served over https from the farm{farm}.staticflickr.com hosts,
        which replaced the older http farm{farm}.static.flickr.com CDN names.
        """
        base = (
            f"https://farm{self.farm}.staticflickr.com/"
            f"{self.server}/{self.id}_{self.secret}"
        )
        if size == SIZE_MEDIUM_500:
            return f"{base}.jpg"
        return f"{base}_{size}.jpg"


class SearchResponse(FlickrModel):
    """Payload of flickr.photos.search."""

    page: int = 0
    pages: int = 0
    per_page: int = Field(0, alias="perpage")
    total: int = 0
    photos: List[Photo] = Field(default_factory=list, alias="photo")


class ContactsGetPublicListResponse(FlickrModel):
    """Payload of flickr.contacts.getPublicList."""

    page: int = 0
    pages: int = 0
    per_page: int = Field(0, alias="perpage")
    total: int = 0
    contacts: List[User] = Field(default_factory=list, alias="contact")


class Owner(FlickrModel):
    nsid: str = ""
    username: str = ""
    realname: str = ""
    location: str = ""
    iconserver: str = ""
    iconfarm: str = ""
    path_alias: str = ""


class Tag(FlickrModel):
    id: str = ""
    author: str = ""
    author_name: str = Field("", alias="authorname")
    raw: str = ""
    machine_tag: str = ""
    content: str = Field("", alias="_content")


class PhotoInfo(FlickrModel):
    """Payload of flickr.photos.getInfo."""

    id: str = ""
    secret: str = ""
    server: str = ""
    farm: str = ""
    date_uploaded: str = Field("", alias="dateuploaded")
    is_favorite: str = Field("", alias="isfavorite")
    license: str = ""
    safety_level: str = ""
    rotation: str = ""
    views: str = ""
    media: str = ""
    owner: Owner = Field(default_factory=Owner)
    title: Text = ""
    description: Text = ""
    tags: Annotated[List[Tag], BeforeValidator(_unwrap_list("tag"))] = Field(
        default_factory=list
    )


class FavoritePerson(FlickrModel):
    nsid: str = ""
    username: str = ""
    realname: str = ""
    favedate: str = ""
    iconserver: str = ""
    iconfarm: str = ""


class PhotoFavoritesResponse(FlickrModel):
    """Payload of flickr.photos.getFavorites."""

    id: str = ""
    secret: str = ""
    server: str = ""
    farm: str = ""
    page: int = 0
    pages: int = 0
    per_page: int = Field(0, alias="perpage")
    total: int = 0
    favorites: List[FavoritePerson] = Field(default_factory=list, alias="person")


class PersonResponse(FlickrModel):
    """Payload of flickr.people.getInfo."""

    id: str = ""
    nsid: str = ""
    is_pro: str = Field("", alias="ispro")
    iconserver: str = ""
    iconfarm: str = ""
    path_alias: str = ""
    gender: str = ""
    ignored: str = ""
    contact: str = ""
    friend: str = ""
    family: str = ""
    reverse_contact: str = Field("", alias="revcontact")
    reverse_friend: str = Field("", alias="revfriend")
    reverse_family: str = Field("", alias="revfamily")
    username: Text = ""


class AuthToken(FlickrModel):
    """Payload of flickr.auth.getToken."""

    token: Text = ""
    perms: Text = ""
    user: User = Field(default_factory=User)
