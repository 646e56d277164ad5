#!/usr/bin/env python3
"""Live token exchange against a BPI API host.

Credential sourcing:
- BPI_EMAIL / BPI_PASSWORD (or --email / --password)
- BPI_API_HOST (or --host)

Drives the same path as the login form: fields are set on a
CredentialForm, validated, then submitted through a TokenClient.
Exit code is 0 on a successful exchange, 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybpi import BpiConfig, CredentialForm, TokenClient, TokenSuccess  # noqa: E402
from pybpi._redact import redact_for_log  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Exchange BPI credentials for an access token")
    parser.add_argument("--host", default=os.environ.get("BPI_API_HOST"), help="API host[:port]")
    parser.add_argument("--email", default=os.environ.get("BPI_EMAIL", ""))
    parser.add_argument("--password", default=os.environ.get("BPI_PASSWORD", ""))
    parser.add_argument("--resource-id", default=None, help="Token resource id override")
    parser.add_argument("--show-token", action="store_true", help="Print the token unredacted")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    overrides = {}
    if args.host:
        overrides["api_host"] = args.host
    if args.resource_id:
        overrides["token_resource_id"] = args.resource_id
    config = BpiConfig.from_env(**overrides)

    async with TokenClient(config) as client:
        form = CredentialForm(client)
        form.set_email(args.email)
        form.set_password(args.password)
        result = await form.submit()

    if result is None:
        print(f"Submit blocked: {'; '.join(form.errors)}")
        return 1
    if isinstance(result, TokenSuccess):
        payload = result.payload if args.show_token else redact_for_log(result.payload)
        print(f"HTTP {result.status_code}")
        print(json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True))
        return 0

    print(f"Exchange failed: {result.error.message}")
    if result.error.detail:
        print(f"Server said: {result.error.detail}")
    return 1


def main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
