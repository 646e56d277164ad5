"""Token endpoint.

Endpoint:
  - GET /v1/users/token/{resource_id}

The caller's credentials travel only in the ``Authorization: Basic``
header. No request body and no query string are sent.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from pybpi._redact import redact_for_log
from pybpi._transport import RawResponse, Transport
from pybpi.config import BpiConfig
from pybpi.exceptions import BpiTransportError
from pybpi.models.credentials import Credentials, RequestTarget
from pybpi.models.result import ErrorInfo, TokenFailure, TokenResult, TokenSuccess

_logger = logging.getLogger(__name__)


def build_token_request(config: BpiConfig, credentials: Credentials) -> tuple[RequestTarget, aiohttp.BasicAuth]:
    """Resolve the request target and Basic auth for one exchange.

    Parameters
    ----------
    config : BpiConfig
        Client configuration; the host is read at call time.
    credentials : Credentials
        Trimmed email/password used as the Basic username/password.

    Returns
    -------
    tuple
        ``(target, auth)`` ready for :meth:`Transport.get_basic`.

    Raises
    ------
    ValueError
        If the email cannot be used as a Basic username (it contains ``:``).
    """
    target = RequestTarget.from_config(config)
    # RFC 7617 charset="UTF-8"; form fields are free-form text
    auth = aiohttp.BasicAuth(login=credentials.email, password=credentials.password, encoding="utf-8")
    return target, auth


def _decode_body(text: str, content_type: str = "") -> Any:
    """Decode a response body as JSON when possible, else return the text."""
    if not text:
        return None
    if content_type and "json" not in content_type and not text.lstrip().startswith(("{", "[")):
        return text
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def parse_token_response(raw: RawResponse) -> TokenSuccess:
    """Map a 2xx response to :class:`TokenSuccess`."""
    payload = _decode_body(raw.text, raw.content_type)
    _logger.debug("Token response status=%s payload=%s", raw.status, redact_for_log(payload))
    return TokenSuccess(payload=payload, status_code=raw.status, headers=raw.headers)


def failure_from_error(exc: BpiTransportError) -> TokenFailure:
    """Map a transport error to :class:`TokenFailure`.

    The BPI API reports errors as ``{"error": "..."}``; that text is kept
    in :attr:`ErrorInfo.detail` when present.
    """
    detail: str | None = None
    body = _decode_body(exc.body)
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        detail = body["error"]
    return TokenFailure(
        error=ErrorInfo(
            message=str(exc),
            status_code=exc.status_code,
            endpoint=exc.endpoint,
            detail=detail,
        )
    )


async def fetch_token(config: BpiConfig, transport: Transport, credentials: Credentials) -> TokenResult:
    """Perform a single token exchange and classify the outcome."""
    _logger.debug("Token exchange for %s", redact_for_log(credentials))
    try:
        target, auth = build_token_request(config, credentials)
    except ValueError as exc:
        return TokenFailure(
            error=ErrorInfo(
                message=f"Cannot build Basic credentials: {exc}",
                endpoint=RequestTarget.from_config(config).endpoint,
            )
        )
    try:
        raw = await transport.get_basic(target.url, target.endpoint, auth)
    except BpiTransportError as exc:
        return failure_from_error(exc)
    return parse_token_response(raw)
