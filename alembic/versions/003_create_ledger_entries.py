"""003: create ledger_entries table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_entries (
            id              VARCHAR(64) PRIMARY KEY,
            member_id       VARCHAR(64) NOT NULL REFERENCES members(id),
            entry_type      VARCHAR(30) NOT NULL,
            amount          INTEGER     NOT NULL,
            balance_after   INTEGER     NOT NULL,
            reference_id    VARCHAR(64),
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_ledger_balance_after_gte_0 CHECK (balance_after >= 0)
        );
    """)
    op.execute(
        "CREATE INDEX idx_ledger_member ON ledger_entries (member_id, created_at DESC);"
    )
    op.execute("COMMENT ON TABLE ledger_entries IS 'Append-only point history';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_entries CASCADE;")
