"""Port for account persistence operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Protocol
from uuid import UUID

from ledger_accounts.domain.accounts.ledger import LEDGER_AMOUNT_DEFAULT, default_transactions
from ledger_accounts.domain.auth.roles import Role

ConflictField = Literal["email", "username"]


class AccountConflictError(ValueError):
    """Raised when an account with the same email or username already exists."""

    def __init__(self, *, field: ConflictField) -> None:
        super().__init__(f"{field} already exists")
        self.field = field


class StorageError(RuntimeError):
    """Raised when the account store is unreachable or rejects a write."""


@dataclass(frozen=True)
class AccountCreateInput:
    """Input payload for creating an account row."""

    account_id: UUID
    username: str
    email: str
    password_hash: str
    role: Role = Role.USER
    is_verified: bool = True
    money: Decimal = LEDGER_AMOUNT_DEFAULT
    present_money: Decimal = LEDGER_AMOUNT_DEFAULT
    profit: Decimal = LEDGER_AMOUNT_DEFAULT
    transactions: list[dict[str, Any]] = field(default_factory=default_transactions)


@dataclass(frozen=True)
class AccountRecord:
    """Account persistence model.

    Ledger fields are optional here because rows written outside the
    provisioning flow may lack them.
    """

    account_id: UUID
    username: str
    email: str
    password_hash: str
    role: Role
    is_verified: bool
    money: Decimal | None
    present_money: Decimal | None
    profit: Decimal | None
    transactions: list[dict[str, Any]] | None
    created_at: datetime
    updated_at: datetime


class AccountRepositoryPort(Protocol):
    """Account repository contract."""

    async def get_by_id(self, *, account_id: UUID) -> AccountRecord | None:
        """Return account by id or None."""

    async def get_by_email(self, *, email: str) -> AccountRecord | None:
        """Return account by normalized email or None."""

    async def get_by_email_or_username(
        self,
        *,
        email: str,
        username: str,
    ) -> AccountRecord | None:
        """Return one account matching either email or username, preferring email."""

    async def create_account(self, payload: AccountCreateInput) -> AccountRecord:
        """Insert an account or raise AccountConflictError on a uniqueness violation."""

    async def fill_missing_ledger_defaults(self, *, account_id: UUID) -> AccountRecord | None:
        """Default unset ledger columns in place and return the refreshed account."""
