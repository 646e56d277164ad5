"""Pydantic models for pybpi."""

from pybpi.models.credentials import Credentials, RequestTarget
from pybpi.models.result import ErrorInfo, TokenFailure, TokenResult, TokenSuccess

__all__ = [
    "Credentials",
    "ErrorInfo",
    "RequestTarget",
    "TokenFailure",
    "TokenResult",
    "TokenSuccess",
]
