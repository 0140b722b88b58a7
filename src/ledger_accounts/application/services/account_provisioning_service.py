"""Application service for account signup."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from ledger_accounts.application.ports.account_repository_port import (
    AccountConflictError,
    AccountCreateInput,
    AccountRecord,
    AccountRepositoryPort,
    ConflictField,
)
from ledger_accounts.application.ports.password_hasher_port import PasswordHasherPort
from ledger_accounts.domain.accounts.ledger import (
    LEDGER_AMOUNT_DEFAULT,
    amount_or_default,
    default_transactions,
    missing_ledger_fields,
    transactions_or_default,
)
from ledger_accounts.domain.auth.credentials import (
    normalize_account_email,
    normalize_account_username,
    require_password,
)
from ledger_accounts.domain.auth.roles import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountSignupResult:
    """Sanitized projection of a newly created account."""

    account_id: UUID
    email: str
    username: str
    money: Decimal
    present_money: Decimal
    profit: Decimal
    transactions: list[dict[str, Any]]


class AccountProvisioningService:
    """Create accounts with hashed credentials and defaulted ledger fields."""

    def __init__(
        self,
        *,
        accounts: AccountRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher

    async def signup(
        self,
        *,
        username: str | None,
        email: str | None,
        password: str | None,
    ) -> AccountSignupResult:
        """Validate input, reject duplicates, then persist one new account."""

        normalized_username = normalize_account_username(username=username)
        normalized_email = normalize_account_email(email=email)
        plaintext = require_password(password=password)

        existing = await self._accounts.get_by_email_or_username(
            email=normalized_email,
            username=normalized_username,
        )
        if existing is not None:
            field: ConflictField = (
                "email" if existing.email.lower() == normalized_email else "username"
            )
            logger.info("account_signup_conflict field=%s", field)
            raise AccountConflictError(field=field)

        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, plaintext)
        logger.debug(
            "account_signup_password_hashed hash_length=%s well_formed=%s",
            len(password_hash),
            self._password_hasher.is_well_formed(password_hash),
        )

        created = await self._accounts.create_account(
            AccountCreateInput(
                account_id=uuid4(),
                username=normalized_username,
                email=normalized_email,
                password_hash=password_hash,
                role=Role.USER,
                is_verified=True,
                money=LEDGER_AMOUNT_DEFAULT,
                present_money=LEDGER_AMOUNT_DEFAULT,
                profit=LEDGER_AMOUNT_DEFAULT,
                transactions=default_transactions(),
            )
        )
        created = await self._ensure_ledger_defaults(created)

        logger.info("account_signup_created account_id=%s", created.account_id)
        return AccountSignupResult(
            account_id=created.account_id,
            email=created.email,
            username=created.username,
            money=amount_or_default(created.money),
            present_money=amount_or_default(created.present_money),
            profit=amount_or_default(created.profit),
            transactions=transactions_or_default(created.transactions),
        )

    async def _ensure_ledger_defaults(self, record: AccountRecord) -> AccountRecord:
        """Persist ledger defaults once when the store dropped any of them."""

        missing = missing_ledger_fields(record)
        if not missing:
            return record

        logger.warning(
            "account_signup_ledger_defaults_missing account_id=%s fields=%s",
            record.account_id,
            ",".join(missing),
        )
        refreshed = await self._accounts.fill_missing_ledger_defaults(
            account_id=record.account_id
        )
        return record if refreshed is None else refreshed
