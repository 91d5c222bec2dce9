"""Domain models for wl_market — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.wl_common.enums import Outcome


@dataclass
class Market:
    id: str
    title: str
    outcome_a: str
    outcome_b: str
    price_a: Decimal
    price_b: Decimal
    volume: Decimal
    status: str
    end_time: datetime | None
    winning_outcome: str | None
    platform_fee_rate: Decimal | None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def price_of(self, outcome: Outcome) -> Decimal:
        return self.price_a if outcome is Outcome.A else self.price_b


@dataclass
class MarketPriceUpdate:
    """New price/volume state written back by a bet."""

    market_id: str
    price_a: Decimal
    price_b: Decimal
    volume: Decimal
