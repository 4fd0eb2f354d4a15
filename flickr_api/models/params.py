"""
Typed parameter objects for Flickr API methods and their conversion to wire
key/value pairs.

A field left at its zero value ("", 0, 0.0, or None for timestamps) is treated
as unset and never sent. Wire names come from the field alias, falling back to
the field name.
"""

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def _format_float(value: float) -> str:
    """
    Formats a float as its shortest round-trip decimal, switching to exponent
    form below 1e-4 and from 1e6 upward: 45.0 -> "45", 1e6 -> "1e+06".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    number = Decimal(repr(value)).normalize()
    sign, digits, exponent = number.as_tuple()
    point = len(digits) + exponent - 1
    if -4 <= point < 6:
        return format(number, "f")

    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(map(str, digits[1:]))
    prefix = "-" if sign else ""
    return f"{prefix}{mantissa}e{'-' if point < 0 else '+'}{abs(point):02d}"


def _format_value(value: Any) -> Optional[str]:
    """
    Converts a field value to its wire string, or None if it should be skipped.
    """
    # bool is an int subclass but is not a wire type
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return str(int(value.timestamp()))
    if isinstance(value, float):
        return _format_float(value) if value else None
    if isinstance(value, (str, int)):
        return str(value) if value else None
    return None


class APIParams(BaseModel):
    """Base class for all parameter objects."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    def to_wire_params(self) -> Dict[str, str]:
        """
        Returns the set fields of this object keyed by their wire names.
        """
        wire: Dict[str, str] = {}
        for name, field in type(self).model_fields.items():
            formatted = _format_value(getattr(self, name))
            if formatted is None:
                continue
            wire[field.alias or name] = formatted
        return wire


def marshal(params: APIParams) -> Dict[str, str]:
    """
    Marshals a parameter object into a mapping of wire name to string value.

    Raises:
        TypeError: If `params` is not an APIParams instance.
    """
    if not isinstance(params, APIParams):
        raise TypeError(
            f"marshal() expects an APIParams instance, got {type(params).__name__}"
        )
    return params.to_wire_params()


class PhotosSearchParams(APIParams):
    """Arguments of flickr.photos.search."""

    # "me" searches the calling user's photos on authenticated calls.
    user_id: str = ""
    tags: str = ""
    tag_mode: str = ""
    text: str = ""
    min_upload_date: Optional[datetime] = None
    max_upload_date: Optional[datetime] = None
    min_taken_date: Optional[datetime] = None
    max_taken_date: Optional[datetime] = None
    license: str = ""
    sort: str = ""
    # 1 public, 2 friends, 3 family, 4 friends & family, 5 private
    privacy_filter: int = 0
    bbox: str = ""
    accuracy: int = 0
    safe_search: int = 0
    content_type: int = 0
    machine_tags: str = ""
    machine_tag_mode: str = ""
    group_id: str = ""
    contacts: str = ""
    woe_id: str = ""
    place_id: str = ""
    media: str = ""
    has_geo: str = ""
    geo_context: str = ""
    lat: str = ""
    lon: str = ""
    radius: str = ""
    radius_units: str = ""
    is_commons: str = ""
    in_gallery: str = ""
    is_getty: str = ""
    extras: str = ""
    per_page: int = 0
    page: int = 0


class ContactsGetPublicListParams(APIParams):
    """Arguments of flickr.contacts.getPublicList."""

    user_id: str = ""
    per_page: int = 0
    page: int = 0


class PeopleGetInfoParams(APIParams):
    """Arguments of flickr.people.getInfo."""

    user_id: str = ""


class PhotosGetInfoParams(APIParams):
    """Arguments of flickr.photos.getInfo."""

    photo_id: str = ""
    # Skips the permission check when it matches the photo's secret.
    photo_secret: str = Field("", alias="secret")


class PhotosGetFavoritesParams(APIParams):
    """Arguments of flickr.photos.getFavorites."""

    photo_id: str = ""
    page: int = 0
    per_page: int = 0


class PushSubscribeParams(APIParams):
    """Arguments of flickr.push.subscribe."""

    topic: str = ""
    callback: str = ""
    verify: str = ""
    verify_token: str = ""
    lease_seconds: int = 0
    woe_ids: str = ""
    place_ids: str = ""
    lat: float = 0.0
    lon: float = 0.0
    radius: int = 0
    radius_units: str = ""
    accuracy: int = 0
    nsids: str = ""
    tags: str = ""
