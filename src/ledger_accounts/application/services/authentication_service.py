"""Application authentication service for credential verification."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

from ledger_accounts.application.ports.account_repository_port import AccountRepositoryPort
from ledger_accounts.application.ports.password_hasher_port import (
    HashingError,
    PasswordHasherPort,
)
from ledger_accounts.domain.auth.credentials import normalize_account_email, require_password
from ledger_accounts.domain.auth.roles import Role

INVALID_CREDENTIALS_MESSAGE = "invalid email or password"

logger = logging.getLogger(__name__)


class AuthenticationError(PermissionError):
    """Raised for unknown accounts and wrong passwords alike."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


@dataclass(frozen=True)
class AccountLoginResult:
    """Sanitized projection of an authenticated account."""

    account_id: UUID
    email: str
    username: str
    role: Role
    is_verified: bool


class AuthenticationService:
    """Authenticate account credentials without persisting any state."""

    def __init__(
        self,
        *,
        accounts: AccountRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher

    async def login(self, *, email: str | None, password: str | None) -> AccountLoginResult:
        """Verify credentials and return the account projection or raise."""

        normalized_email = normalize_account_email(email=email)
        plaintext = require_password(password=password)

        account = await self._accounts.get_by_email(email=normalized_email)
        if account is None:
            logger.info("account_login_failed reason=unknown_account")
            raise AuthenticationError()

        try:
            is_valid = await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=plaintext,
                password_hash=account.password_hash,
            )
        except HashingError:
            if self._password_hasher.is_well_formed(account.password_hash):
                logger.warning(
                    "account_login_verify_failed account_id=%s hash_length=%s",
                    account.account_id,
                    len(account.password_hash),
                )
            else:
                logger.warning(
                    "account_login_hash_unusable account_id=%s hash_length=%s",
                    account.account_id,
                    len(account.password_hash),
                )
            raise AuthenticationError() from None

        if not is_valid:
            logger.info(
                "account_login_failed reason=invalid_password account_id=%s",
                account.account_id,
            )
            raise AuthenticationError()

        logger.info("account_login_success account_id=%s", account.account_id)
        return AccountLoginResult(
            account_id=account.account_id,
            email=account.email,
            username=account.username,
            role=account.role,
            is_verified=account.is_verified,
        )
