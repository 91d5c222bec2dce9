"""004: create bets table

Revision ID: 004
Revises: 003
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bets (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id             UUID            NOT NULL REFERENCES profiles (id),
            market_id           UUID            NOT NULL REFERENCES markets (id),
            outcome             VARCHAR(1)      NOT NULL,
            amount              NUMERIC(20, 9)  NOT NULL,
            price_at_bet        NUMERIC(12, 10) NOT NULL,
            potential_payout    NUMERIC(24, 9)  NOT NULL,
            platform_fee        NUMERIC(24, 9)  NOT NULL DEFAULT 0,
            settled             BOOLEAN         NOT NULL DEFAULT FALSE,
            won                 BOOLEAN,
            payout_amount       NUMERIC(24, 9),
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_bets_outcome          CHECK (outcome IN ('A', 'B')),
            CONSTRAINT ck_bets_amount_gt_0      CHECK (amount > 0),
            CONSTRAINT ck_bets_price_range      CHECK (price_at_bet > 0 AND price_at_bet < 1),
            CONSTRAINT ck_bets_fee_gte_0        CHECK (platform_fee >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_bets_user_time ON bets (user_id, created_at DESC);")
    op.execute("CREATE INDEX idx_bets_market ON bets (market_id);")
    # Economics are fixed at placement; resolution may only touch settled/won/payout_amount
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_bets_lock_economics()
        RETURNS TRIGGER AS $$
        BEGIN
            IF NEW.price_at_bet IS DISTINCT FROM OLD.price_at_bet
               OR NEW.potential_payout IS DISTINCT FROM OLD.potential_payout
               OR NEW.amount IS DISTINCT FROM OLD.amount
               OR NEW.outcome IS DISTINCT FROM OLD.outcome THEN
                RAISE EXCEPTION 'bet % economics are immutable', OLD.id;
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER trg_bets_lock_economics
            BEFORE UPDATE ON bets
            FOR EACH ROW EXECUTE FUNCTION fn_bets_lock_economics();
    """)
    op.execute("COMMENT ON TABLE bets IS 'Bet ledger — one row per placed bet, economics immutable';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_bets_lock_economics();")
