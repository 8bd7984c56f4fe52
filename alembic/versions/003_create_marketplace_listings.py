"""003: create marketplace_listings table

Revision ID: 003
Revises: 002
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE marketplace_listings (
            id                    VARCHAR(64) PRIMARY KEY,
            asset_id              VARCHAR(64) NOT NULL REFERENCES parking_assets(id),
            seller                VARCHAR(64) NOT NULL,
            listing_type          VARCHAR(20) NOT NULL,
            initial_token_amount  BIGINT      NOT NULL,
            token_amount          BIGINT      NOT NULL,
            price_per_token       BIGINT      NOT NULL,
            total_price           BIGINT      NOT NULL,
            payment_methods       TEXT[]      NOT NULL,
            minimum_purchase      BIGINT      NOT NULL DEFAULT 0,
            kyb_required          BOOLEAN     NOT NULL DEFAULT FALSE,
            status                VARCHAR(20) NOT NULL DEFAULT 'ACTIVE',
            created_at            BIGINT      NOT NULL,
            expires_at            BIGINT      NOT NULL,
            updated_at            TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_listings_type        CHECK (listing_type IN ('SALE', 'LEASE', 'REVENUE_SHARE')),
            CONSTRAINT ck_listings_status      CHECK (status IN ('ACTIVE', 'SOLD', 'CANCELLED', 'EXPIRED')),
            CONSTRAINT ck_listings_amount      CHECK (
                token_amount >= 0 AND token_amount <= initial_token_amount
            ),
            CONSTRAINT ck_listings_initial_gt_0 CHECK (initial_token_amount > 0),
            CONSTRAINT ck_listings_price_gt_0  CHECK (price_per_token > 0),
            CONSTRAINT ck_listings_methods     CHECK (
                cardinality(payment_methods) BETWEEN 1 AND 5
            ),
            CONSTRAINT ck_listings_sold        CHECK (status <> 'SOLD' OR token_amount = 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_marketplace_listings_updated_at
            BEFORE UPDATE ON marketplace_listings
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE INDEX idx_listings_active
            ON marketplace_listings (asset_id, expires_at)
            WHERE status = 'ACTIVE';
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS marketplace_listings CASCADE;")
