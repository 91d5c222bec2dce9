"""BetRepository — concrete implementation of BetRepositoryProtocol.

bets and platform_revenue are append targets here; this module never
updates a bet (resolution does that, and the economics columns are
guarded by a trigger anyway).

Transaction ownership: the CALLER (BetApplicationService) commits or rolls back.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_betting.domain.models import Bet, BetQuote, PlatformRevenue
from src.wl_common.errors import InternalError

_BET_COLUMNS = """
    id, user_id, market_id, outcome, amount, price_at_bet, potential_payout,
    platform_fee, settled, won, payout_amount, created_at
"""

_INSERT_BET_SQL = text(f"""
    INSERT INTO bets
        (user_id, market_id, outcome, amount,
         price_at_bet, potential_payout, platform_fee, settled)
    VALUES
        (:user_id, :market_id, :outcome, :amount,
         :price_at_bet, :potential_payout, :platform_fee, FALSE)
    RETURNING {_BET_COLUMNS}
""")

_INSERT_REVENUE_SQL = text("""
    INSERT INTO platform_revenue (fee_amount, bet_id, market_id)
    VALUES (:fee_amount, :bet_id, :market_id)
    RETURNING id, fee_amount, bet_id, market_id, collected_at
""")


def _opt_decimal(value: object) -> Decimal | None:
    return None if value is None else Decimal(value)  # type: ignore[arg-type]


def _row_to_bet(row: object) -> Bet:
    return Bet(
        id=str(row.id),  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        market_id=str(row.market_id),  # type: ignore[attr-defined]
        outcome=row.outcome,  # type: ignore[attr-defined]
        amount=Decimal(row.amount),  # type: ignore[attr-defined]
        price_at_bet=Decimal(row.price_at_bet),  # type: ignore[attr-defined]
        potential_payout=Decimal(row.potential_payout),  # type: ignore[attr-defined]
        platform_fee=Decimal(row.platform_fee),  # type: ignore[attr-defined]
        settled=row.settled,  # type: ignore[attr-defined]
        won=row.won,  # type: ignore[attr-defined]
        payout_amount=_opt_decimal(row.payout_amount),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _row_to_revenue(row: object) -> PlatformRevenue:
    return PlatformRevenue(
        id=str(row.id),  # type: ignore[attr-defined]
        fee_amount=Decimal(row.fee_amount),  # type: ignore[attr-defined]
        bet_id=str(row.bet_id),  # type: ignore[attr-defined]
        market_id=str(row.market_id),  # type: ignore[attr-defined]
        collected_at=row.collected_at,  # type: ignore[attr-defined]
    )


class BetRepository:
    async def set_transaction_timeouts(
        self, db: AsyncSession, lock_timeout_ms: int, statement_timeout_ms: int
    ) -> None:
        # SET takes no bind parameters; int() keeps the interpolation safe.
        # LOCAL scopes both to the current transaction only.
        await db.execute(text(f"SET LOCAL lock_timeout = {int(lock_timeout_ms)}"))
        await db.execute(text(f"SET LOCAL statement_timeout = {int(statement_timeout_ms)}"))

    async def insert_bet(
        self,
        db: AsyncSession,
        user_id: str,
        market_id: str,
        outcome: str,
        amount: Decimal,
        quote: BetQuote,
    ) -> Bet:
        result = await db.execute(
            _INSERT_BET_SQL,
            {
                "user_id": user_id,
                "market_id": market_id,
                "outcome": outcome,
                "amount": amount,
                "price_at_bet": quote.price_at_bet,
                "potential_payout": quote.gross_payout,
                "platform_fee": quote.platform_fee,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Bet insert returned no rows")
        return _row_to_bet(row)

    async def record_revenue(self, db: AsyncSession, bet: Bet) -> PlatformRevenue:
        result = await db.execute(
            _INSERT_REVENUE_SQL,
            {
                "fee_amount": bet.platform_fee,
                "bet_id": bet.id,
                "market_id": bet.market_id,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Revenue insert returned no rows")
        return _row_to_revenue(row)
