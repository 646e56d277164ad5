"""Credentials and request-target models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pybpi._constants import DEFAULT_SCHEME, TOKEN_ENDPOINT
from pybpi.config import BpiConfig


class Credentials(BaseModel):
    """Email/password pair captured by the login form.

    Both fields are stripped of leading and trailing whitespace on
    construction. The password is excluded from ``repr``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    email: str = ""
    password: str = Field(default="", repr=False)


class RequestTarget(BaseModel):
    """Token endpoint identity for a single exchange."""

    model_config = ConfigDict(frozen=True)

    host: str
    resource_id: str
    scheme: str = DEFAULT_SCHEME

    @classmethod
    def from_config(cls, config: BpiConfig) -> RequestTarget:
        return cls(
            host=config.api_host,
            resource_id=config.token_resource_id,
            scheme=config.scheme,
        )

    @property
    def endpoint(self) -> str:
        """Path component, e.g. ``/v1/users/token/<id>``."""
        return TOKEN_ENDPOINT.format(resource_id=self.resource_id)

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}{self.endpoint}"
