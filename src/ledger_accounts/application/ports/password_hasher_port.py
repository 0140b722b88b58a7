"""Port for password hashing and verification."""

from __future__ import annotations

from typing import Protocol


class HashingError(RuntimeError):
    """Raised when hashing fails or a stored hash is structurally invalid."""


class PasswordHasherPort(Protocol):
    """Password hashing/verification contract."""

    def hash_password(self, password: str, *, cost_factor: int | None = None) -> str:
        """Hash plaintext password for storage."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify plaintext password against stored hash."""

    def is_well_formed(self, password_hash: object) -> bool:
        """Return whether a value matches the stored hash format."""
