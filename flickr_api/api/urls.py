"""
Builds Flickr request URLs from wire parameters.
"""

from typing import Dict, Mapping
from urllib.parse import urlencode

FORMAT_JSON = "json"


def rest_params(
    api_key: str, method: str, params: Mapping[str, str], fmt: str = FORMAT_JSON
) -> Dict[str, str]:
    """
    Adds the parameters every REST call carries: api_key, method and the
    response format selectors.
    """
    full = dict(params)
    full["api_key"] = api_key
    full["method"] = method
    full["format"] = fmt
    if fmt == FORMAT_JSON:
        # Plain JSON instead of a jsonFlickrApi(...) callback wrapper
        full["nojsoncallback"] = "1"
    return full


def build_url(endpoint: str, params: Mapping[str, str]) -> str:
    """
    Returns `endpoint` with `params` as a percent-encoded query string.

    Keys are emitted in sorted order so equal inputs give identical URLs.
    """
    if not params:
        return endpoint
    query = urlencode(sorted(params.items()))
    return f"{endpoint}?{query}"
