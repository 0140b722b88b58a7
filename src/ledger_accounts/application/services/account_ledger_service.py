"""Application service exposing the read-only account ledger view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from ledger_accounts.application.ports.account_repository_port import AccountRepositoryPort
from ledger_accounts.domain.accounts.ledger import amount_or_default, transactions_or_default
from ledger_accounts.domain.auth.roles import Role


class AccountNotFoundError(LookupError):
    """Raised when a requested account id does not exist."""

    def __init__(self, *, account_id: UUID) -> None:
        super().__init__(f"account not found: {account_id}")
        self.account_id = account_id


@dataclass(frozen=True)
class AccountLedgerView:
    """Account profile and ledger fields, without credentials."""

    account_id: UUID
    email: str
    username: str
    role: Role
    is_verified: bool
    money: Decimal
    present_money: Decimal
    profit: Decimal
    transactions: list[dict[str, Any]]
    created_at: datetime


class AccountLedgerService:
    def __init__(self, *, accounts: AccountRepositoryPort) -> None:
        self._accounts = accounts

    async def get_ledger(self, *, account_id: UUID) -> AccountLedgerView:
        """Return ledger view for one account, reading unset fields as defaults."""

        account = await self._accounts.get_by_id(account_id=account_id)
        if account is None:
            raise AccountNotFoundError(account_id=account_id)

        return AccountLedgerView(
            account_id=account.account_id,
            email=account.email,
            username=account.username,
            role=account.role,
            is_verified=account.is_verified,
            money=amount_or_default(account.money),
            present_money=amount_or_default(account.present_money),
            profit=amount_or_default(account.profit),
            transactions=transactions_or_default(account.transactions),
            created_at=account.created_at,
        )
