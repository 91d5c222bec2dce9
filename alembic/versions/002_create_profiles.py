"""002: create profiles table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE profiles (
            id              UUID            PRIMARY KEY,
            username        VARCHAR(64),
            sol_balance     NUMERIC(20, 9)  NOT NULL DEFAULT 0,
            total_bets      INT             NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_profiles_balance_gte_0    CHECK (sol_balance >= 0),
            CONSTRAINT ck_profiles_total_bets_gte_0 CHECK (total_bets >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_profiles_updated_at
            BEFORE UPDATE ON profiles
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute(
        "COMMENT ON TABLE profiles IS 'User balance record — id is the auth provider user id, amounts in SOL';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS profiles CASCADE;")
