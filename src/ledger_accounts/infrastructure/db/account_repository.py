"""SQLAlchemy adapter for account persistence."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, cast
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger_accounts.application.ports.account_repository_port import (
    AccountConflictError,
    AccountCreateInput,
    AccountRecord,
    AccountRepositoryPort,
    ConflictField,
    StorageError,
)
from ledger_accounts.domain.accounts.ledger import (
    LEDGER_AMOUNT_DEFAULT,
    LEDGER_AMOUNT_FIELDS,
    LEDGER_TRANSACTIONS_FIELD,
    default_transactions,
)
from ledger_accounts.domain.auth.roles import Role
from ledger_accounts.infrastructure.db.metadata import accounts

_ACCOUNT_COLUMNS = (
    accounts.c.id,
    accounts.c.username,
    accounts.c.email,
    accounts.c.password_hash,
    accounts.c.role,
    accounts.c.is_verified,
    accounts.c.money,
    accounts.c.present_money,
    accounts.c.profit,
    accounts.c.transactions,
    accounts.c.created_at,
    accounts.c.updated_at,
)


def _conflicting_field(error: IntegrityError) -> ConflictField | None:
    message = str(error.orig).lower()
    if "uq_accounts_email" in message or "accounts.email" in message:
        return "email"
    if "uq_accounts_username" in message or "accounts.username" in message:
        return "username"
    return None


def _email_matches(email: str) -> sa.ColumnElement[bool]:
    return sa.func.lower(accounts.c.email) == email.lower()


def _to_account_record(row: sa.RowMapping) -> AccountRecord:
    raw_account_id = row["id"]
    account_id = raw_account_id if isinstance(raw_account_id, UUID) else UUID(str(raw_account_id))
    return AccountRecord(
        account_id=account_id,
        username=cast(str, row["username"]),
        email=cast(str, row["email"]),
        password_hash=cast(str, row["password_hash"]),
        role=Role(cast(str, row["role"])),
        is_verified=bool(row["is_verified"]),
        money=cast("Decimal | None", row["money"]),
        present_money=cast("Decimal | None", row["present_money"]),
        profit=cast("Decimal | None", row["profit"]),
        transactions=cast("list[dict[str, Any]] | None", row["transactions"]),
        created_at=cast(datetime, row["created_at"]),
        updated_at=cast(datetime, row["updated_at"]),
    )


class SqlAlchemyAccountRepository(AccountRepositoryPort):
    """Account repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_id(self, *, account_id: UUID) -> AccountRecord | None:
        """Return account by id or None."""

        statement = sa.select(*_ACCOUNT_COLUMNS).where(accounts.c.id == account_id).limit(1)
        return await self._fetch_one(statement)

    async def get_by_email(self, *, email: str) -> AccountRecord | None:
        """Return account by email or None.

        Matching ignores case so rows stored before emails were lowercased
        are still found. An exact match wins over a case-folded one.
        """

        statement = (
            sa.select(*_ACCOUNT_COLUMNS)
            .where(_email_matches(email))
            .order_by(sa.case((accounts.c.email == email, 0), else_=1))
            .limit(1)
        )
        return await self._fetch_one(statement)

    async def get_by_email_or_username(
        self,
        *,
        email: str,
        username: str,
    ) -> AccountRecord | None:
        """Return one account matching either email or username, preferring email."""

        email_first = sa.case((_email_matches(email), 0), else_=1)
        statement = (
            sa.select(*_ACCOUNT_COLUMNS)
            .where(sa.or_(_email_matches(email), accounts.c.username == username))
            .order_by(email_first)
            .limit(1)
        )
        return await self._fetch_one(statement)

    async def create_account(self, payload: AccountCreateInput) -> AccountRecord:
        """Insert a new account row and return the created record."""

        statement = (
            sa.insert(accounts)
            .values(
                id=payload.account_id,
                username=payload.username,
                email=payload.email,
                password_hash=payload.password_hash,
                role=payload.role.value,
                is_verified=payload.is_verified,
                money=payload.money,
                present_money=payload.present_money,
                profit=payload.profit,
                transactions=list(payload.transactions),
            )
            .returning(*_ACCOUNT_COLUMNS)
        )

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                row = result.mappings().one()
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                field = _conflicting_field(error)
                if field is not None:
                    raise AccountConflictError(field=field) from error
                raise StorageError("account insert rejected") from error
            except SQLAlchemyError as error:
                await session.rollback()
                raise StorageError("account insert failed") from error

        return _to_account_record(row)

    async def fill_missing_ledger_defaults(self, *, account_id: UUID) -> AccountRecord | None:
        """Default unset ledger columns in place and return the refreshed account.

        Each column is only written while it is NULL, so present values
        (including non-zero balances) are left untouched and repeated calls
        converge on the same row.
        """

        defaults: dict[str, Any] = {name: LEDGER_AMOUNT_DEFAULT for name in LEDGER_AMOUNT_FIELDS}
        defaults[LEDGER_TRANSACTIONS_FIELD] = default_transactions()

        async with self._session_factory() as session:
            try:
                for column_name, default in defaults.items():
                    column = accounts.c[column_name]
                    await session.execute(
                        sa.update(accounts)
                        .where(accounts.c.id == account_id, column.is_(None))
                        .values({column_name: default, "updated_at": sa.func.now()})
                    )
                await session.commit()
            except SQLAlchemyError as error:
                await session.rollback()
                raise StorageError("account ledger normalization failed") from error

        return await self.get_by_id(account_id=account_id)

    async def _fetch_one(self, statement: sa.Select[Any]) -> AccountRecord | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
        except SQLAlchemyError as error:
            raise StorageError("account lookup failed") from error

        row = result.mappings().first()
        if row is None:
            return None
        return _to_account_record(row)
