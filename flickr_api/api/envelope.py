"""
Decodes the status envelope shared by every Flickr JSON response.

A successful response looks like {"stat": "ok", ...payload...}; a failed one
like {"stat": "fail", "code": 100, "message": "Invalid API Key"}.
"""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from flickr_api.exceptions import APIError, ParseError

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_envelope(body: bytes) -> Dict[str, Any]:
    """
    Decodes a raw response body and checks its status.

    Returns:
        The decoded response object when its status is "ok".

    Raises:
        ParseError: If the body is not a JSON object carrying a 'stat' field.
        APIError: If the status is anything other than "ok".
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(data, dict) or "stat" not in data:
        raise ParseError("Response body has no 'stat' field.")

    if data["stat"] != "ok":
        raise APIError(str(data.get("code", "")), str(data.get("message", "")))
    return data


def parse_payload(
    envelope: Dict[str, Any], model: Type[ModelT], key: Optional[str] = None
) -> ModelT:
    """
    Validates the payload of a successful envelope into `model`.

    Args:
        envelope: A decoded response with status "ok".
        model: The pydantic model describing the payload.
        key: The top-level key holding the payload, or None for the whole
            response object.

    Raises:
        ParseError: If the key is missing or the payload does not fit `model`.
    """
    if key is None:
        payload = envelope
    elif key in envelope:
        payload = envelope[key]
    else:
        raise ParseError(f"Response has no '{key}' element.")

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        log.debug(f"Payload validation failed for {model.__name__}: {e}")
        raise ParseError(f"Unexpected {model.__name__} payload: {e}") from e
