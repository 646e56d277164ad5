"""High-level async client for the BPI token endpoint."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pybpi._api.token import fetch_token
from pybpi._transport import HttpTransport, Transport
from pybpi.config import BpiConfig
from pybpi.exceptions import BpiError
from pybpi.models.credentials import Credentials
from pybpi.models.result import TokenResult, TokenSuccess

_logger = logging.getLogger(__name__)


class TokenClient:
    """Async client exchanging credentials for an access token.

    Usage::

        async with TokenClient(config) as client:
            result = await client.exchange(Credentials(email=..., password=...))
            if result.ok:
                print(result.token)
    """

    def __init__(
        self,
        config: BpiConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport = transport

    @property
    def config(self) -> BpiConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TokenClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session, user_agent=self._config.user_agent)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Token exchange
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise BpiError("Client not initialized. Use 'async with TokenClient(...) as client:'")
        return self._transport

    async def exchange(self, credentials: Credentials) -> TokenResult:
        """Exchange *credentials* for a token with a single GET request.

        Transport problems and non-2xx responses resolve to
        :class:`~pybpi.models.TokenFailure`; they are never raised.
        """
        transport = self._require_transport()
        result = await fetch_token(self._config, transport, credentials)
        if isinstance(result, TokenSuccess):
            _logger.info("Token exchange succeeded for %s (HTTP %s)", credentials.email, result.status_code)
        else:
            _logger.warning(
                "Token exchange failed for %s: status=%s message=%s",
                credentials.email,
                result.status_code,
                result.error.message,
            )
        return result
