"""MarketRepository — concrete implementation of MarketRepositoryProtocol.

All queries use raw text() SQL (no ORM).
lock_market holds a row lock until the caller's transaction ends, so
price/volume read-modify-write never races another bet on the same market.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_common.ids import normalize_uuid
from src.wl_market.domain.models import Market, MarketPriceUpdate

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_MARKET_COLUMNS = """
    id, title, outcome_a, outcome_b, price_a, price_b, volume, status,
    end_time, winning_outcome, platform_fee_rate, created_by,
    created_at, updated_at
"""

_GET_MARKET_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    WHERE id = :market_id
""")

_LOCK_MARKET_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    WHERE id = :market_id
    FOR UPDATE
""")

_UPDATE_PRICES_SQL = text(f"""
    UPDATE markets
    SET price_a = :price_a,
        price_b = :price_b,
        volume  = :volume
    WHERE id = :market_id
    RETURNING {_MARKET_COLUMNS}
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _opt_decimal(value: object) -> Decimal | None:
    return None if value is None else Decimal(value)  # type: ignore[arg-type]


def _row_to_market(row: object) -> Market:
    created_by = row.created_by  # type: ignore[attr-defined]
    return Market(
        id=str(row.id),  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        outcome_a=row.outcome_a,  # type: ignore[attr-defined]
        outcome_b=row.outcome_b,  # type: ignore[attr-defined]
        price_a=Decimal(row.price_a),  # type: ignore[attr-defined]
        price_b=Decimal(row.price_b),  # type: ignore[attr-defined]
        volume=Decimal(row.volume),  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        end_time=row.end_time,  # type: ignore[attr-defined]
        winning_outcome=row.winning_outcome,  # type: ignore[attr-defined]
        platform_fee_rate=_opt_decimal(row.platform_fee_rate),  # type: ignore[attr-defined]
        created_by=str(created_by) if created_by is not None else None,
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class MarketRepository:
    async def get_market_by_id(self, db: AsyncSession, market_id: str) -> Market | None:
        market_id = normalize_uuid(market_id)
        if market_id is None:
            return None
        result = await db.execute(_GET_MARKET_SQL, {"market_id": market_id})
        row = result.fetchone()
        return _row_to_market(row) if row else None

    async def lock_market(self, db: AsyncSession, market_id: str) -> Market | None:
        market_id = normalize_uuid(market_id)
        if market_id is None:
            return None
        result = await db.execute(_LOCK_MARKET_SQL, {"market_id": market_id})
        row = result.fetchone()
        return _row_to_market(row) if row else None

    async def apply_price_update(
        self, db: AsyncSession, update: MarketPriceUpdate
    ) -> Market | None:
        result = await db.execute(
            _UPDATE_PRICES_SQL,
            {
                "market_id": update.market_id,
                "price_a": update.price_a,
                "price_b": update.price_b,
                "volume": update.volume,
            },
        )
        row = result.fetchone()
        return _row_to_market(row) if row else None
