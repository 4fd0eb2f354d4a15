"""
Pydantic model for client configuration.
"""

from pydantic import BaseModel, field_validator

REST_ENDPOINT = "https://api.flickr.com/services/rest/"
AUTH_ENDPOINT = "https://www.flickr.com/services/auth/"

# Flickr allows 3600 calls per hour per key.
REQUEST_PERIOD = 1.0


class ClientConfig(BaseModel):
    """A validated configuration model for FlickrClient."""

    api_key: str
    secret: str
    auth_token: str = ""

    min_interval: float = REQUEST_PERIOD
    timeout: float = 60.0

    rest_endpoint: str = REST_ENDPOINT
    auth_endpoint: str = AUTH_ENDPOINT

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("api_key", "secret")
    @classmethod
    def validate_credentials(cls, v: str) -> str:
        """Ensures the API key and secret are present."""
        if not v:
            raise ValueError("API key and secret cannot be empty.")
        return v

    @field_validator("min_interval")
    @classmethod
    def validate_interval(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Minimum request interval cannot be negative.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be greater than zero.")
        return v

    @field_validator("rest_endpoint", "auth_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Ensures endpoints are absolute HTTP(S) URLs."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Endpoint must be an http(s) URL, but got: {v}")
        return v
