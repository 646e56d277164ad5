"""Outcome models for a token exchange.

Every call to :meth:`pybpi.client.TokenClient.exchange` resolves to exactly
one :data:`TokenResult`: a :class:`TokenSuccess` carrying the raw response
payload, or a :class:`TokenFailure` carrying whatever diagnostic
information the transport produced.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ErrorInfo(BaseModel):
    """Diagnostic details of a failed exchange.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    status_code : int or None
        HTTP status of the response, or ``None`` for network-level
        failures (connection refused, DNS, reset).
    endpoint : str
        Request path that failed.
    detail : str or None
        Server-supplied error text from an ``{"error": "..."}`` body.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    status_code: int | None = None
    endpoint: str = ""
    detail: str | None = None


class TokenSuccess(BaseModel):
    """A 2xx response from the token endpoint."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    payload: Any = None
    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True

    @property
    def token(self) -> str | None:
        """The issued token when the payload is ``{"token": "..."}``."""
        if isinstance(self.payload, dict):
            value = self.payload.get("token")
            if isinstance(value, str) and value:
                return value
        return None


class TokenFailure(BaseModel):
    """A transport failure or non-2xx response."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    error: ErrorInfo

    @property
    def ok(self) -> bool:
        return False

    @property
    def status_code(self) -> int | None:
        return self.error.status_code


TokenResult = TokenSuccess | TokenFailure
