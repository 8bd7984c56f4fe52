"""004: create trades table

Revision ID: 004
Revises: 003
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE trades (
            id                    VARCHAR(64) PRIMARY KEY,
            listing_id            VARCHAR(64) NOT NULL REFERENCES marketplace_listings(id),
            asset_id              VARCHAR(64) NOT NULL REFERENCES parking_assets(id),
            buyer                 VARCHAR(64) NOT NULL,
            seller                VARCHAR(64) NOT NULL,
            token_amount          BIGINT      NOT NULL,
            price_paid            BIGINT      NOT NULL,
            platform_fee          BIGINT      NOT NULL DEFAULT 0,
            seller_proceeds       BIGINT      NOT NULL,
            payment_denomination  VARCHAR(64) NOT NULL,
            traded_at             BIGINT      NOT NULL,
            CONSTRAINT ck_trades_amount_gt_0 CHECK (token_amount > 0),
            CONSTRAINT ck_trades_fee_split   CHECK (
                platform_fee >= 0 AND seller_proceeds + platform_fee = price_paid
            )
        );
    """)
    op.execute("CREATE INDEX idx_trades_buyer ON trades (buyer, id DESC);")
    op.execute("CREATE INDEX idx_trades_seller ON trades (seller, id DESC);")
    op.execute("CREATE INDEX idx_trades_listing ON trades (listing_id);")
    op.execute("COMMENT ON TABLE trades IS 'Immutable record of every executed purchase';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS trades CASCADE;")
