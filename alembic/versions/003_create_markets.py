"""003: create markets table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE markets (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            title               TEXT            NOT NULL,
            outcome_a           TEXT            NOT NULL,
            outcome_b           TEXT            NOT NULL,
            price_a             NUMERIC(12, 10) NOT NULL DEFAULT 0.5,
            price_b             NUMERIC(12, 10) NOT NULL DEFAULT 0.5,
            volume              NUMERIC(24, 9)  NOT NULL DEFAULT 0,
            status              VARCHAR(16)     NOT NULL DEFAULT 'Active',
            end_time            TIMESTAMPTZ     NOT NULL,
            winning_outcome     VARCHAR(1),
            platform_fee_rate   NUMERIC(5, 4),
            created_by          UUID            REFERENCES profiles (id),
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_markets_price_a_range CHECK (price_a >= 0.01 AND price_a <= 0.99),
            CONSTRAINT ck_markets_price_b_range CHECK (price_b >= 0.01 AND price_b <= 0.99),
            CONSTRAINT ck_markets_prices_sum_1  CHECK (price_a + price_b = 1),
            CONSTRAINT ck_markets_volume_gte_0  CHECK (volume >= 0),
            CONSTRAINT ck_markets_status CHECK (status IN ('Active', 'Closed', 'Settled')),
            CONSTRAINT ck_markets_winning_outcome CHECK (
                winning_outcome IS NULL OR winning_outcome IN ('A', 'B')
            ),
            CONSTRAINT ck_markets_fee_rate CHECK (
                platform_fee_rate IS NULL OR (platform_fee_rate >= 0 AND platform_fee_rate < 1)
            )
        );
    """)
    op.execute("CREATE INDEX idx_markets_status ON markets (status);")
    op.execute("""
        CREATE TRIGGER trg_markets_updated_at
            BEFORE UPDATE ON markets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute(
        "COMMENT ON TABLE markets IS 'Binary-outcome market — prices are implied probabilities summing to 1';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS markets CASCADE;")
