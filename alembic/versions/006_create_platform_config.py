"""006: create platform_config table

Revision ID: 006
Revises: 005
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE platform_config (
            key         VARCHAR(64) PRIMARY KEY,
            value       BIGINT      NOT NULL,
            updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_platform_config_updated_at
            BEFORE UPDATE ON platform_config
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        COMMENT ON TABLE platform_config IS
            'Marketplace-wide settings; a missing platform_fee_bps row means the configured default';
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS platform_config CASCADE;")
