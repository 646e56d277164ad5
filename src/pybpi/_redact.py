"""Redaction of credentials and issued tokens for debug logs.

Decoded token responses are plain JSON (dicts, lists, scalars); request
headers carry a Basic ``Authorization`` value; the form hands over
:class:`~pybpi.models.Credentials`. Only those shapes are handled here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pybpi.models.credentials import Credentials

REDACTED = "<redacted>"

_SECRET_KEYS: frozenset[str] = frozenset({"password", "token", "accesstoken", "refreshtoken"})
_MAX_STRING = 200


def redact_authorization(value: str) -> str:
    """Hide the credential part of an ``Authorization`` value, keeping the scheme."""
    scheme, _, credential = value.strip().partition(" ")
    if credential and scheme.isalpha():
        return f"{scheme} {REDACTED}"
    return REDACTED


def _redact_entry(key: str, value: Any, max_string: int) -> Any:
    lowered = key.lower()
    if lowered == "authorization" and isinstance(value, str):
        return redact_authorization(value)
    if lowered in _SECRET_KEYS:
        return REDACTED
    return redact_for_log(value, max_string=max_string)


def redact_for_log(value: Any, *, max_string: int = _MAX_STRING) -> Any:
    """Return a copy of *value* safe to pass to a DEBUG log call."""
    if isinstance(value, Credentials):
        return {"email": value.email, "password": REDACTED if value.password else ""}
    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated {len(value) - max_string} chars>"
        return value
    if isinstance(value, Mapping):
        return {str(k): _redact_entry(str(k), v, max_string) for k, v in value.items()}
    if isinstance(value, list):
        return [redact_for_log(v, max_string=max_string) for v in value]
    return value
