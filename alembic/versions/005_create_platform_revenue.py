"""005: create platform_revenue table

Revision ID: 005
Revises: 004
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE platform_revenue (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            fee_amount      NUMERIC(24, 9)  NOT NULL,
            bet_id          UUID            REFERENCES bets (id),
            market_id       UUID            REFERENCES markets (id),
            collected_at    TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_platform_revenue_fee_gt_0 CHECK (fee_amount > 0)
        );
    """)
    op.execute("CREATE INDEX idx_platform_revenue_market ON platform_revenue (market_id);")
    op.execute("""
        CREATE TRIGGER trg_platform_revenue_append_only
            BEFORE UPDATE OR DELETE ON platform_revenue
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)
    op.execute(
        "COMMENT ON TABLE platform_revenue IS 'Fee audit rows, append-only';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS platform_revenue CASCADE;")
