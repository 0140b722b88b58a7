"""SQLAlchemy metadata definitions for account tables."""

from __future__ import annotations

import sqlalchemy as sa

metadata = sa.MetaData()
ledger_amount = sa.Numeric(18, 2, asdecimal=True)

accounts = sa.Table(
    "accounts",
    metadata,
    sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
    sa.Column("username", sa.Text(), nullable=False),
    sa.Column("email", sa.Text(), nullable=False),
    sa.Column("password_hash", sa.Text(), nullable=False),
    sa.Column("role", sa.Text(), nullable=False, server_default=sa.text("'user'")),
    sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.true()),
    sa.Column("money", ledger_amount, nullable=True, server_default=sa.text("0")),
    sa.Column("present_money", ledger_amount, nullable=True, server_default=sa.text("0")),
    sa.Column("profit", ledger_amount, nullable=True, server_default=sa.text("0")),
    sa.Column(
        "transactions",
        sa.JSON(none_as_null=True),
        nullable=True,
        server_default=sa.text("'[]'"),
    ),
    sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    ),
    sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    ),
    sa.CheckConstraint("role IN ('user', 'admin')", name="ck_accounts_role"),
    sa.UniqueConstraint("email", name="uq_accounts_email"),
    sa.UniqueConstraint("username", name="uq_accounts_username"),
)
