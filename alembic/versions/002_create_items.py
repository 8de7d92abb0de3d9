"""002: create items table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE items (
            id                  VARCHAR(64)  PRIMARY KEY,
            owner_id            VARCHAR(64)  NOT NULL REFERENCES members(id),
            title               VARCHAR(200) NOT NULL,
            description         TEXT         NOT NULL DEFAULT '',
            points              INTEGER      NOT NULL,
            category            VARCHAR(20)  NOT NULL,
            size                VARCHAR(20)  NOT NULL,
            condition           VARCHAR(20)  NOT NULL,
            tags                JSONB        NOT NULL DEFAULT '[]'::jsonb,
            images              JSONB        NOT NULL DEFAULT '[]'::jsonb,
            watcher_count       INTEGER      NOT NULL DEFAULT 0,
            exchange_state      VARCHAR(20)  NOT NULL DEFAULT 'AVAILABLE',
            under_review        BOOLEAN      NOT NULL DEFAULT FALSE,
            swap_requester_id   VARCHAR(64),
            swap_status         VARCHAR(20),
            swap_requested_at   TIMESTAMPTZ,
            created_at          TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ,
            CONSTRAINT ck_items_points_gt_0        CHECK (points > 0),
            CONSTRAINT ck_items_watchers_gte_0     CHECK (watcher_count >= 0),
            CONSTRAINT ck_items_category CHECK (
                category IN ('tops', 'bottoms', 'outerwear', 'footwear')),
            CONSTRAINT ck_items_condition CHECK (
                condition IN ('new', 'excellent', 'good', 'fair')),
            CONSTRAINT ck_items_exchange_state CHECK (
                exchange_state IN ('AVAILABLE', 'PENDING_SWAP', 'EXCHANGED', 'RESERVED')),
            CONSTRAINT ck_items_swap_status CHECK (
                swap_status IS NULL OR swap_status IN ('PENDING', 'ACCEPTED', 'REJECTED'))
        );
    """)
    op.execute("CREATE INDEX idx_items_owner ON items (owner_id);")
    op.execute("CREATE INDEX idx_items_category ON items (category, created_at DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS items CASCADE;")
