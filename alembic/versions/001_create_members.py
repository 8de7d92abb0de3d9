"""001: create members table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE members (
            id              VARCHAR(64) PRIMARY KEY,
            role            VARCHAR(10) NOT NULL DEFAULT 'MEMBER',
            points_balance  INTEGER     NOT NULL,
            listings_count  INTEGER     NOT NULL DEFAULT 0,
            total_swaps     INTEGER     NOT NULL DEFAULT 0,
            badges          JSONB       NOT NULL DEFAULT '[]'::jsonb,
            standing        VARCHAR(10) NOT NULL DEFAULT 'ACTIVE',
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ,
            CONSTRAINT ck_members_balance_gte_0   CHECK (points_balance >= 0),
            CONSTRAINT ck_members_listings_gte_0  CHECK (listings_count >= 0),
            CONSTRAINT ck_members_swaps_gte_0     CHECK (total_swaps >= 0),
            CONSTRAINT ck_members_role      CHECK (role IN ('MEMBER', 'ADMIN')),
            CONSTRAINT ck_members_standing  CHECK (standing IN ('ACTIVE', 'WARNED', 'BANNED'))
        );
    """)
    op.execute("COMMENT ON TABLE members IS 'Member ledger: point balances and counters';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS members CASCADE;")
