"""005: create revenue_distributions table

Revision ID: 005
Revises: 004
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE revenue_distributions (
            id                        VARCHAR(64) PRIMARY KEY,
            asset_id                  VARCHAR(64) NOT NULL REFERENCES parking_assets(id),
            period_start              BIGINT      NOT NULL,
            period_end                BIGINT      NOT NULL,
            total_revenue             BIGINT      NOT NULL,
            operating_costs           BIGINT      NOT NULL,
            net_revenue               BIGINT      NOT NULL,
            total_tokens_outstanding  BIGINT      NOT NULL,
            revenue_per_token         BIGINT      NOT NULL,
            total_distributed         BIGINT      NOT NULL DEFAULT 0,
            distribution_status       VARCHAR(20) NOT NULL DEFAULT 'PENDING',
            operator                  VARCHAR(64) NOT NULL,
            created_at                BIGINT      NOT NULL,
            completed_at              BIGINT,
            updated_at                TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_distributions_period  CHECK (period_start < period_end),
            CONSTRAINT ck_distributions_status  CHECK (distribution_status IN (
                'PENDING', 'PROCESSING', 'COMPLETED', 'FAILED'
            )),
            CONSTRAINT ck_distributions_net     CHECK (net_revenue >= 0),
            CONSTRAINT ck_distributions_paid    CHECK (
                total_distributed >= 0
                AND total_distributed <= revenue_per_token * total_tokens_outstanding
            )
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_revenue_distributions_updated_at
            BEFORE UPDATE ON revenue_distributions
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE INDEX idx_distributions_asset
            ON revenue_distributions (asset_id, id DESC);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS revenue_distributions CASCADE;")
