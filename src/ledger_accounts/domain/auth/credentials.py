"""Shared normalization helpers for account credential inputs."""

from __future__ import annotations


class AccountValidationError(ValueError):
    """Raised when a required account input is missing or unusable."""


def normalize_account_email(*, email: str | None) -> str:
    """Normalize one account email and reject blank values."""

    normalized = (email or "").strip().lower()
    if not normalized:
        raise AccountValidationError("email is required")
    return normalized


def normalize_account_username(*, username: str | None) -> str:
    """Normalize one username and reject blank values."""

    normalized = (username or "").strip()
    if not normalized:
        raise AccountValidationError("username is required")
    return normalized


def require_password(*, password: str | None) -> str:
    """Return the plaintext password unchanged or reject an empty value."""

    if not password:
        raise AccountValidationError("password is required")
    return password

