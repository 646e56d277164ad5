from __future__ import annotations

import socket
from typing import Any

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

from pybpi._transport import RawResponse
from pybpi.client import TokenClient
from pybpi.config import BpiConfig
from pybpi.exceptions import BpiError
from pybpi.models import Credentials, TokenFailure, TokenSuccess

_RESOURCE_ID = "54bb2165-71e1-41a6-af3e-7da4a0e1e2c1"


def _make_app(seen: list[dict[str, Any]], *, status: int = 200) -> web.Application:
    async def token(request: web.Request) -> web.Response:
        auth = aiohttp.BasicAuth.decode(request.headers["Authorization"])
        seen.append(
            {
                "method": request.method,
                "kid": request.match_info["kid"],
                "login": auth.login,
                "password": auth.password,
                "query": dict(request.query),
                "body": await request.read(),
            }
        )
        if status == 200:
            return web.json_response({"token": "abc"})
        return web.json_response({"error": "authentication failed"}, status=status)

    app = web.Application()
    app.router.add_get("/v1/users/token/{kid}", token)
    return app


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])


@pytest.mark.asyncio
async def test_exchange_success_over_http() -> None:
    seen: list[dict[str, Any]] = []
    async with test_utils.TestServer(_make_app(seen)) as server:
        config = BpiConfig(api_host=f"{server.host}:{server.port}")
        async with TokenClient(config) as client:
            result = await client.exchange(Credentials(email=" user@bpi.test ", password="s3cret"))

    assert isinstance(result, TokenSuccess)
    assert result.payload == {"token": "abc"}
    assert result.status_code == 200
    assert seen == [
        {
            "method": "GET",
            "kid": _RESOURCE_ID,
            "login": "user@bpi.test",
            "password": "s3cret",
            "query": {},
            "body": b"",
        }
    ]


@pytest.mark.asyncio
async def test_exchange_never_uses_a_fixed_account() -> None:
    seen: list[dict[str, Any]] = []
    async with test_utils.TestServer(_make_app(seen)) as server:
        config = BpiConfig(api_host=f"{server.host}:{server.port}")
        async with TokenClient(config) as client:
            await client.exchange(Credentials(email="first@bpi.test", password="one"))
            await client.exchange(Credentials(email="second@bpi.test", password="two"))

    assert [(s["login"], s["password"]) for s in seen] == [
        ("first@bpi.test", "one"),
        ("second@bpi.test", "two"),
    ]


@pytest.mark.asyncio
async def test_exchange_401_resolves_to_failure() -> None:
    seen: list[dict[str, Any]] = []
    async with test_utils.TestServer(_make_app(seen, status=401)) as server:
        config = BpiConfig(api_host=f"{server.host}:{server.port}")
        async with TokenClient(config) as client:
            result = await client.exchange(Credentials(email="user@bpi.test", password="wrong"))

    assert isinstance(result, TokenFailure)
    assert result.status_code == 401
    assert result.error.detail == "authentication failed"
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_exchange_connection_refused_resolves_to_failure() -> None:
    config = BpiConfig(api_host=f"127.0.0.1:{_unused_port()}")
    async with TokenClient(config) as client:
        result = await client.exchange(Credentials(email="user@bpi.test", password="s3cret"))

    assert isinstance(result, TokenFailure)
    assert result.status_code is None
    assert result.error.endpoint == f"/v1/users/token/{_RESOURCE_ID}"


@pytest.mark.asyncio
async def test_external_session_is_not_closed() -> None:
    seen: list[dict[str, Any]] = []
    async with test_utils.TestServer(_make_app(seen)) as server:
        config = BpiConfig(api_host=f"{server.host}:{server.port}")
        async with aiohttp.ClientSession() as session:
            async with TokenClient(config, session=session) as client:
                await client.exchange(Credentials(email="user@bpi.test", password="s3cret"))
            assert not session.closed


@pytest.mark.asyncio
async def test_exchange_requires_context_manager() -> None:
    client = TokenClient(BpiConfig(api_host="localhost:3000"))
    with pytest.raises(BpiError):
        await client.exchange(Credentials(email="user@bpi.test", password="s3cret"))


class _StaticTransport:
    def __init__(self) -> None:
        self.urls: list[str] = []

    async def get_basic(self, url: str, endpoint: str, auth: aiohttp.BasicAuth) -> RawResponse:
        self.urls.append(url)
        return RawResponse(status=201, headers={}, text='{"token":"xyz"}', content_type="application/json")


@pytest.mark.asyncio
async def test_injected_transport_is_used() -> None:
    transport = _StaticTransport()
    async with TokenClient(BpiConfig(api_host="api.bpi.test"), transport=transport) as client:
        result = await client.exchange(Credentials(email="user@bpi.test", password="s3cret"))

    assert isinstance(result, TokenSuccess)
    assert result.token == "xyz"
    assert result.status_code == 201
    assert transport.urls == [f"http://api.bpi.test/v1/users/token/{_RESOURCE_ID}"]


def _canned_app(response: web.Response, seen: list[str] | None = None) -> web.Application:
    async def token(request: web.Request) -> web.Response:
        if seen is not None:
            seen.append(request.headers.get("Authorization", ""))
        return response

    app = web.Application()
    app.router.add_get("/v1/users/token/{kid}", token)
    return app


async def _exchange_against(app: web.Application, credentials: Credentials) -> TokenFailure | TokenSuccess:
    async with test_utils.TestServer(app) as server:
        config = BpiConfig(api_host=f"{server.host}:{server.port}")
        async with TokenClient(config) as client:
            return await client.exchange(credentials)


@pytest.mark.asyncio
async def test_non_ascii_password_sent_as_utf8() -> None:
    seen: list[str] = []
    app = _canned_app(web.json_response({"token": "abc"}), seen)

    result = await _exchange_against(app, Credentials(email="user@bpi.test", password="пароль"))

    assert isinstance(result, TokenSuccess)
    auth = aiohttp.BasicAuth.decode(seen[0], encoding="utf-8")
    assert (auth.login, auth.password) == ("user@bpi.test", "пароль")


@pytest.mark.asyncio
async def test_colon_in_email_fails_without_request() -> None:
    seen: list[str] = []
    app = _canned_app(web.json_response({"token": "abc"}), seen)

    result = await _exchange_against(app, Credentials(email="a:b@bpi.test", password="s3cret"))

    assert isinstance(result, TokenFailure)
    assert result.status_code is None
    assert result.error.endpoint == f"/v1/users/token/{_RESOURCE_ID}"
    assert seen == []


@pytest.mark.asyncio
async def test_undecodable_2xx_body_is_replaced_not_raised() -> None:
    app = _canned_app(web.Response(body=b"\xff\xfe\xfa", content_type="text/plain", charset="utf-8"))

    result = await _exchange_against(app, Credentials(email="user@bpi.test", password="s3cret"))

    assert isinstance(result, TokenSuccess)
    assert result.payload == "\ufffd" * 3
    assert result.token is None


@pytest.mark.asyncio
async def test_empty_2xx_body_has_no_payload() -> None:
    app = _canned_app(web.Response(status=204))

    result = await _exchange_against(app, Credentials(email="user@bpi.test", password="s3cret"))

    assert isinstance(result, TokenSuccess)
    assert result.status_code == 204
    assert result.payload is None


@pytest.mark.asyncio
async def test_non_json_error_body_has_no_detail() -> None:
    app = _canned_app(web.Response(status=502, text="<html>Bad Gateway</html>", content_type="text/html"))

    result = await _exchange_against(app, Credentials(email="user@bpi.test", password="s3cret"))

    assert isinstance(result, TokenFailure)
    assert result.status_code == 502
    assert result.error.detail is None
    assert "Bad Gateway" in result.error.message


@pytest.mark.asyncio
async def test_undecodable_error_body_still_fails_cleanly() -> None:
    app = _canned_app(web.Response(status=500, body=b"\x80oops", content_type="text/plain", charset="utf-8"))

    result = await _exchange_against(app, Credentials(email="user@bpi.test", password="s3cret"))

    assert isinstance(result, TokenFailure)
    assert result.status_code == 500
