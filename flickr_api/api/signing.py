"""
Request signing for authenticated Flickr calls.

The signature is the lowercase hex MD5 of the shared secret followed by every
parameter as key immediately followed by value, in ascending key order.
See https://www.flickr.com/services/api/auth.spec.html
"""

import hashlib
from typing import Dict, Mapping, Tuple

SIGNATURE_KEY = "api_sig"


def compute_signature(secret: str, params: Mapping[str, str]) -> str:
    """Computes the api_sig value for a set of wire parameters."""
    parts = [secret]
    for key in sorted(params):
        parts.append(key)
        parts.append(params[key])
    return hashlib.md5("".join(parts).encode("utf-8")).hexdigest()  # noqa: S324


def sign_params(secret: str, params: Mapping[str, str]) -> Dict[str, str]:
    """Returns a copy of `params` with the api_sig entry added."""
    signed = dict(params)
    signed[SIGNATURE_KEY] = compute_signature(secret, params)
    return signed


def sign_request(
    secret: str, api_key: str, method: str, params: Mapping[str, str]
) -> Tuple[str, Dict[str, str]]:
    """
    Signs a REST method call.

    Args:
        secret: The application's shared secret.
        api_key: The application's API key.
        method: The API method name, e.g. 'flickr.photos.search'.
        params: Marshalled method parameters. Not modified.

    Returns:
        The signature and the full parameter set including api_key, method
        and api_sig.
    """
    full = dict(params)
    full["api_key"] = api_key
    full["method"] = method
    signed = sign_params(secret, full)
    return signed[SIGNATURE_KEY], signed
