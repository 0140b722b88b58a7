"""Bcrypt password hasher adapter."""

from __future__ import annotations

import re

import bcrypt

from ledger_accounts.application.ports.password_hasher_port import HashingError, PasswordHasherPort

DEFAULT_BCRYPT_ROUNDS = 10
BCRYPT_MAX_PASSWORD_BYTES = 72
BCRYPT_HASH_PATTERN = re.compile(r"\$2[aby]\$\d+\$.{53}")


def _bcrypt_input(password: str) -> bytes:
    """Encode a password the way stored hashes were produced: first 72 bytes only."""

    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt."""

    def __init__(self, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    def hash_password(self, password: str, *, cost_factor: int | None = None) -> str:
        rounds = self._rounds if cost_factor is None else cost_factor
        try:
            salt = bcrypt.gensalt(rounds=rounds)
            hashed = bcrypt.hashpw(_bcrypt_input(password), salt).decode("utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise HashingError("password hashing failed") from exc

        if not self.is_well_formed(hashed) or hashed == password:
            raise HashingError("password hashing produced an unexpected hash format")
        return hashed

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        if not self.is_well_formed(password_hash):
            raise HashingError("stored password hash is malformed")
        try:
            return bcrypt.checkpw(_bcrypt_input(password), password_hash.encode("utf-8"))
        except ValueError as exc:
            raise HashingError("password verification failed") from exc

    def is_well_formed(self, password_hash: object) -> bool:
        if not isinstance(password_hash, str):
            return False
        return BCRYPT_HASH_PATTERN.fullmatch(password_hash) is not None
