"""ORM models must line up with the raw-SQL repositories and migrations."""

from src.wl_account.infrastructure.db_models import ProfileORM
from src.wl_betting.infrastructure.db_models import BetORM, PlatformRevenueORM
from src.wl_common.database import Base
from src.wl_market.infrastructure.db_models import MarketORM


def _columns(model: type) -> set[str]:
    return set(model.__table__.columns.keys())  # type: ignore[attr-defined]


def test_all_tables_registered() -> None:
    assert {"profiles", "markets", "bets", "platform_revenue"} <= set(Base.metadata.tables)


def test_profile_columns() -> None:
    assert _columns(ProfileORM) == {
        "id", "username", "sol_balance", "total_bets", "created_at", "updated_at",
    }


def test_market_columns() -> None:
    assert _columns(MarketORM) == {
        "id", "title", "outcome_a", "outcome_b", "price_a", "price_b", "volume",
        "status", "end_time", "winning_outcome", "platform_fee_rate", "created_by",
        "created_at", "updated_at",
    }


def test_bet_columns() -> None:
    assert _columns(BetORM) == {
        "id", "user_id", "market_id", "outcome", "amount", "price_at_bet",
        "potential_payout", "platform_fee", "settled", "won", "payout_amount",
        "created_at",
    }


def test_revenue_is_append_only() -> None:
    assert "updated_at" not in _columns(PlatformRevenueORM)


def test_money_scale_is_lamports() -> None:
    assert ProfileORM.__table__.c.sol_balance.type.scale == 9  # type: ignore[attr-defined]
    assert BetORM.__table__.c.amount.type.scale == 9  # type: ignore[attr-defined]
    assert MarketORM.__table__.c.price_a.type.scale == 10  # type: ignore[attr-defined]


def _foreign_keys(model: type) -> dict[str, str]:
    return {
        fk.parent.name: fk.target_fullname
        for fk in model.__table__.foreign_keys  # type: ignore[attr-defined]
    }


def test_foreign_keys_match_migrations() -> None:
    assert _foreign_keys(MarketORM) == {"created_by": "profiles.id"}
    assert _foreign_keys(BetORM) == {"user_id": "profiles.id", "market_id": "markets.id"}
    assert _foreign_keys(PlatformRevenueORM) == {"bet_id": "bets.id", "market_id": "markets.id"}
