"""Client configuration for pybpi."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pybpi._constants import DEFAULT_SCHEME, DEFAULT_TOKEN_RESOURCE_ID, USER_AGENT
from pybpi.exceptions import BpiConfigError


@dataclasses.dataclass(frozen=True)
class BpiConfig:
    """Client configuration.

    Parameters
    ----------
    api_host : str
        Host (and optional port) of the BPI API, e.g. ``"localhost:3000"``.
        Must not include a scheme or path.
    scheme : str
        URL scheme used to reach the API. Defaults to ``"http"``.
    token_resource_id : str
        Identifier of the token resource requested from
        ``/v1/users/token/{id}``.
    user_agent : str
        User-Agent header sent with every request.
    """

    api_host: str
    scheme: str = DEFAULT_SCHEME
    token_resource_id: str = DEFAULT_TOKEN_RESOURCE_ID
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        host = (self.api_host or "").strip()
        if not host:
            raise BpiConfigError("api_host must be non-empty")
        if "://" in host or "/" in host:
            raise BpiConfigError(f"api_host must be a bare host[:port], got {host!r}")
        if self.scheme not in ("http", "https"):
            raise BpiConfigError(f"scheme must be http or https, got {self.scheme!r}")
        if not self.token_resource_id.strip():
            raise BpiConfigError("token_resource_id must be non-empty")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "api_host", host)

    @classmethod
    def from_env(cls, **overrides: Any) -> BpiConfig:
        """Create configuration from environment variables.

        Reads ``BPI_API_HOST`` and the optional ``BPI_SCHEME`` and
        ``BPI_TOKEN_RESOURCE_ID``. Explicit keyword arguments override
        environment values.

        Raises
        ------
        BpiConfigError
            If no API host is available.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BPI_API_HOST": "api_host",
            "BPI_SCHEME": "scheme",
            "BPI_TOKEN_RESOURCE_ID": "token_resource_id",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        config_kwargs.update(overrides)
        if "api_host" not in config_kwargs:
            raise BpiConfigError("BPI_API_HOST is not set")

        return cls(**config_kwargs)
