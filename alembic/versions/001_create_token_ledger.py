"""001: create token ledger tables

Revision ID: 001
Revises: 
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE token_balances (
            id              BIGSERIAL   PRIMARY KEY,
            owner           VARCHAR(64) NOT NULL,
            denomination    VARCHAR(64) NOT NULL,
            balance         BIGINT      NOT NULL DEFAULT 0,
            version         BIGINT      NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_token_balances_owner_denom  UNIQUE (owner, denomination),
            CONSTRAINT ck_token_balances_balance_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_token_balances_updated_at
            BEFORE UPDATE ON token_balances
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE token_ledger_entries (
            id              BIGSERIAL   PRIMARY KEY,
            owner           VARCHAR(64) NOT NULL,
            denomination    VARCHAR(64) NOT NULL,
            entry_type      VARCHAR(20) NOT NULL,
            amount          BIGINT      NOT NULL,
            balance_after   BIGINT      NOT NULL,
            reference_type  VARCHAR(30),
            reference_id    VARCHAR(64),
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_token_ledger_entry_type CHECK (entry_type IN (
                'MINT', 'TRANSFER_OUT', 'TRANSFER_IN', 'FEE', 'FEE_REVENUE'
            )),
            CONSTRAINT ck_token_ledger_balance_after_gte_0 CHECK (balance_after >= 0)
        );
    """)
    op.execute("""
        CREATE INDEX idx_token_ledger_owner_id
            ON token_ledger_entries (owner, id DESC);
    """)
    op.execute("COMMENT ON TABLE token_ledger_entries IS 'Append-only journal of every mint and transfer';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS token_ledger_entries CASCADE;")
    op.execute("DROP TABLE IF EXISTS token_balances CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
