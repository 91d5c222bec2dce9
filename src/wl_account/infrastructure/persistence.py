"""ProfileRepository — concrete implementation of ProfileRepositoryProtocol.

lock_profile takes a row lock (SELECT ... FOR UPDATE) held until the
surrounding transaction ends. debit_for_bet is a guarded atomic
UPDATE ... RETURNING: 0 rows means the balance would have gone negative.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.domain.models import Profile
from src.wl_common.ids import normalize_uuid

_PROFILE_COLUMNS = "id, username, sol_balance, total_bets, created_at, updated_at"

_GET_PROFILE_SQL = text(f"""
    SELECT {_PROFILE_COLUMNS}
    FROM profiles
    WHERE id = :user_id
""")

_LOCK_PROFILE_SQL = text(f"""
    SELECT {_PROFILE_COLUMNS}
    FROM profiles
    WHERE id = :user_id
    FOR UPDATE
""")

_DEBIT_FOR_BET_SQL = text(f"""
    UPDATE profiles
    SET sol_balance = sol_balance - :amount,
        total_bets  = total_bets + 1
    WHERE id = :user_id AND sol_balance >= :amount
    RETURNING {_PROFILE_COLUMNS}
""")


def _row_to_profile(row: object) -> Profile:
    return Profile(
        id=str(row.id),  # type: ignore[attr-defined]
        username=row.username,  # type: ignore[attr-defined]
        sol_balance=Decimal(row.sol_balance),  # type: ignore[attr-defined]
        total_bets=row.total_bets,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class ProfileRepository:
    """Concrete repository — all operations atomic at the SQL level."""

    async def get_profile(self, db: AsyncSession, user_id: str) -> Profile | None:
        user_id = normalize_uuid(user_id)
        if user_id is None:
            return None
        result = await db.execute(_GET_PROFILE_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_profile(row) if row else None

    async def lock_profile(self, db: AsyncSession, user_id: str) -> Profile | None:
        user_id = normalize_uuid(user_id)
        if user_id is None:
            return None
        result = await db.execute(_LOCK_PROFILE_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_profile(row) if row else None

    async def debit_for_bet(
        self, db: AsyncSession, user_id: str, amount: Decimal
    ) -> Profile | None:
        result = await db.execute(
            _DEBIT_FOR_BET_SQL, {"user_id": user_id, "amount": amount}
        )
        row = result.fetchone()
        return _row_to_profile(row) if row else None
