"""pybpi - Async Python client for the BPI credential-to-token exchange."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybpi")
except PackageNotFoundError:
    __version__ = "0+local"
from pybpi.client import TokenClient
from pybpi.config import BpiConfig
from pybpi.exceptions import BpiConfigError, BpiError, BpiTransportError
from pybpi.form import CredentialForm, SubmitPolicy
from pybpi.models import (
    Credentials,
    ErrorInfo,
    RequestTarget,
    TokenFailure,
    TokenResult,
    TokenSuccess,
)
from pybpi.validation import is_valid, validate_credentials

__all__ = [
    "__version__",
    "BpiConfig",
    "BpiConfigError",
    "BpiError",
    "BpiTransportError",
    "CredentialForm",
    "Credentials",
    "ErrorInfo",
    "RequestTarget",
    "SubmitPolicy",
    "TokenClient",
    "TokenFailure",
    "TokenResult",
    "TokenSuccess",
    "is_valid",
    "validate_credentials",
]
