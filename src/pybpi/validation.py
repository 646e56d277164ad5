"""Credential validation rules for the login form."""

from __future__ import annotations

import re

from pybpi.models.credentials import Credentials

# local@domain.tld with no whitespace and a single "@"
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")


def validate_credentials(credentials: Credentials) -> list[str]:
    """Return a list of problems with *credentials*; empty means valid."""
    problems: list[str] = []
    if not credentials.email:
        problems.append("email is required")
    elif ":" in credentials.email:
        # ":" separates user and password in a Basic credential
        problems.append("email must not contain ':'")
    elif not _EMAIL_RE.match(credentials.email):
        problems.append("email is not a valid address")
    if not credentials.password:
        problems.append("password is required")
    return problems


def is_valid(credentials: Credentials) -> bool:
    return not validate_credentials(credentials)
