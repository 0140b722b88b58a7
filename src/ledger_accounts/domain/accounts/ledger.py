"""Ledger field defaults applied to freshly provisioned accounts."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

LEDGER_AMOUNT_DEFAULT = Decimal("0")
LEDGER_AMOUNT_FIELDS = ("money", "present_money", "profit")
LEDGER_TRANSACTIONS_FIELD = "transactions"


def default_transactions() -> list[dict[str, Any]]:
    """Return a new empty transaction sequence."""

    return []


def missing_ledger_fields(record: Any) -> tuple[str, ...]:
    """Return names of ledger fields that are unset on the given record."""

    missing = [name for name in LEDGER_AMOUNT_FIELDS if getattr(record, name) is None]
    if not isinstance(getattr(record, LEDGER_TRANSACTIONS_FIELD), list):
        missing.append(LEDGER_TRANSACTIONS_FIELD)
    return tuple(missing)


def amount_or_default(value: Decimal | None) -> Decimal:
    """Read one ledger amount, treating an unset value as the default."""

    return LEDGER_AMOUNT_DEFAULT if value is None else value


def transactions_or_default(value: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    """Read the transaction sequence, treating an unset value as empty."""

    return list(value) if isinstance(value, list) else default_transactions()
