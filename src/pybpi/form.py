"""Login form state: captured credentials, validity gate and submit trigger."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Protocol

from pybpi.models.credentials import Credentials
from pybpi.models.result import TokenResult, TokenSuccess
from pybpi.validation import validate_credentials

_logger = logging.getLogger(__name__)


class SubmitPolicy(StrEnum):
    """What happens when ``submit()`` is called while an exchange is pending."""

    IGNORE_WHILE_PENDING = "ignore_while_pending"
    ALLOW_CONCURRENT = "allow_concurrent"


class TokenExchanger(Protocol):
    async def exchange(self, credentials: Credentials) -> TokenResult:
        ...


class SubmitEvent(Protocol):
    """UI submit event whose default navigation can be suppressed."""

    def prevent_default(self) -> None:
        ...


class CredentialForm:
    """Holds the email/password fields and gates submission on their validity.

    The validity flag starts out ``True`` and is recomputed on every field
    change and again at the moment of submission, so a request is only sent
    for credentials that pass :func:`pybpi.validation.validate_credentials`.

    Once an exchange succeeds the password is discarded; the email stays so
    the user can sign in again. After a failure both fields are kept and the
    form can be submitted again as is.
    """

    def __init__(
        self,
        client: TokenExchanger,
        *,
        policy: SubmitPolicy = SubmitPolicy.IGNORE_WHILE_PENDING,
        on_result: Callable[[TokenResult], None] | None = None,
    ) -> None:
        self._client = client
        self._policy = policy
        self._on_result = on_result
        self._email = ""
        self._password = ""
        self._is_valid = True
        self._errors: list[str] = []
        self._in_flight = 0
        self._submissions = 0

    # ------------------------------------------------------------------
    # Field state
    # ------------------------------------------------------------------

    @property
    def email(self) -> str:
        return self._email

    @property
    def password(self) -> str:
        return self._password

    @property
    def credentials(self) -> Credentials:
        """Current trimmed credentials."""
        return Credentials(email=self._email, password=self._password)

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    @property
    def pending(self) -> bool:
        """Whether at least one exchange is in flight."""
        return self._in_flight > 0

    @property
    def submissions(self) -> int:
        """Number of exchanges started by this form."""
        return self._submissions

    def set_email(self, value: str) -> None:
        self._email = value.strip()
        self._recompute_validity()

    def set_password(self, value: str) -> None:
        self._password = value.strip()
        self._recompute_validity()

    def clear(self) -> None:
        """Discard captured credentials."""
        self._email = ""
        self._password = ""
        self._is_valid = True
        self._errors = []

    def _recompute_validity(self) -> None:
        self._errors = validate_credentials(self.credentials)
        self._is_valid = not self._errors

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def handle_submit(self, event: SubmitEvent) -> TokenResult | None:
        """Entry point for the UI's submit action."""
        event.prevent_default()
        return await self.submit()

    async def submit(self) -> TokenResult | None:
        """Forward the current credentials to the token client.

        Returns the exchange result, or ``None`` when the submission was
        blocked (invalid fields, or a pending exchange under
        :attr:`SubmitPolicy.IGNORE_WHILE_PENDING`).
        """
        self._recompute_validity()
        if not self._is_valid:
            _logger.debug("Submit blocked by validation: %s", "; ".join(self._errors))
            return None
        if self._in_flight and self._policy is SubmitPolicy.IGNORE_WHILE_PENDING:
            _logger.debug("Submit ignored, exchange already pending")
            return None

        credentials = self.credentials
        self._submissions += 1
        self._in_flight += 1
        try:
            result = await self._client.exchange(credentials)
        finally:
            self._in_flight -= 1

        if isinstance(result, TokenSuccess):
            self._password = ""
            self._recompute_validity()

        if self._on_result is not None:
            try:
                self._on_result(result)
            except Exception:
                _logger.exception("on_result callback failed")
        return result
