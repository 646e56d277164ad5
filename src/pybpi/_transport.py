"""HTTP transport for authenticated GET requests."""

from __future__ import annotations

import dataclasses
import logging
from typing import Protocol

import aiohttp

from pybpi._constants import USER_AGENT
from pybpi._redact import redact_for_log
from pybpi.exceptions import BpiTransportError

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RawResponse:
    """Undecoded 2xx response as received from the server."""

    status: int
    headers: dict[str, str]
    text: str
    content_type: str = ""


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Test doubles only need to implement ``get_basic``; the production
    implementation is :class:`HttpTransport`.
    """

    async def get_basic(self, url: str, endpoint: str, auth: aiohttp.BasicAuth) -> RawResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport issuing one GET per call, without retries."""

    def __init__(self, http_session: aiohttp.ClientSession, *, user_agent: str = USER_AGENT) -> None:
        self._http = http_session
        self._user_agent = user_agent

    async def get_basic(self, url: str, endpoint: str, auth: aiohttp.BasicAuth) -> RawResponse:
        """GET *url* with HTTP Basic authentication.

        Raises
        ------
        BpiTransportError
            On any network-level error or a non-2xx status.
        """
        headers = {
            "accept": "application/json",
            "user-agent": self._user_agent,
        }
        _logger.debug("GET %s headers=%s", url, redact_for_log({**headers, "authorization": "<redacted>"}))

        try:
            async with self._http.get(url, headers=headers, auth=auth) as resp:
                # bytes outside the declared charset become U+FFFD
                body = await resp.read()
                text = body.decode(resp.get_encoding(), errors="replace")
                if not 200 <= resp.status < 300:
                    raise BpiTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                        body=text,
                    )
                return RawResponse(
                    status=resp.status,
                    headers={k: v for k, v in resp.headers.items()},
                    text=text,
                    content_type=resp.content_type or "",
                )
        except BpiTransportError:
            raise
        except (aiohttp.ClientError, OSError) as exc:
            raise BpiTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
