"""Custom exception hierarchy for pybpi."""

from __future__ import annotations


class BpiError(Exception):
    """Base exception for all pybpi errors."""


class BpiConfigError(BpiError):
    """Invalid or missing configuration."""


class BpiTransportError(BpiError):
    """HTTP-level failure (network, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        body: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body
        super().__init__(message)
