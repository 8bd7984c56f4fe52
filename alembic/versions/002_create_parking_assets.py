"""002: create parking_assets table

Revision ID: 002
Revises: 001
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE parking_assets (
            id                      VARCHAR(64) PRIMARY KEY,
            token_denomination      VARCHAR(64) NOT NULL,
            asset_type              VARCHAR(20) NOT NULL,
            parking_lot_id          BIGINT      NOT NULL,
            spot_label              VARCHAR(32) NOT NULL,
            total_supply            BIGINT      NOT NULL,
            circulating_supply      BIGINT      NOT NULL,
            estimated_value         BIGINT      NOT NULL DEFAULT 0,
            annual_revenue          BIGINT      NOT NULL DEFAULT 0,
            revenue_share_bps       INTEGER     NOT NULL,
            institutional_operator  VARCHAR(64) NOT NULL,
            compliance_status       VARCHAR(20) NOT NULL DEFAULT 'PENDING',
            is_active               BOOLEAN     NOT NULL DEFAULT TRUE,
            is_tradeable            BOOLEAN     NOT NULL DEFAULT TRUE,
            created_at              BIGINT      NOT NULL,
            updated_at              TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_parking_assets_spot        UNIQUE (parking_lot_id, spot_label),
            CONSTRAINT uq_parking_assets_denom       UNIQUE (token_denomination),
            CONSTRAINT ck_parking_assets_type        CHECK (asset_type IN (
                'SINGLE_SPOT', 'REVENUE_SHARE', 'PARKING_LOT_BUNDLE'
            )),
            CONSTRAINT ck_parking_assets_compliance  CHECK (compliance_status IN (
                'PENDING', 'VERIFIED', 'COMPLIANT', 'NON_COMPLIANT'
            )),
            CONSTRAINT ck_parking_assets_supply_gt_0 CHECK (total_supply > 0),
            CONSTRAINT ck_parking_assets_circulating CHECK (
                circulating_supply >= 0 AND circulating_supply <= total_supply
            ),
            CONSTRAINT ck_parking_assets_share_bps   CHECK (revenue_share_bps BETWEEN 0 AND 10000),
            CONSTRAINT ck_parking_assets_value_gte_0 CHECK (
                estimated_value >= 0 AND annual_revenue >= 0
            )
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_parking_assets_updated_at
            BEFORE UPDATE ON parking_assets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE INDEX idx_parking_assets_operator
            ON parking_assets (institutional_operator);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS parking_assets CASCADE;")
