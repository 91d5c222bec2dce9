"""Domain models for wl_betting — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.wl_account.domain.models import Profile
from src.wl_market.domain.models import Market


@dataclass(frozen=True)
class BetQuote:
    """Economics of a bet, locked at placement time."""

    price_at_bet: Decimal
    gross_payout: Decimal    # stake / price, returned if the outcome wins
    profit: Decimal          # gross_payout - stake
    platform_fee: Decimal    # fee on profit only
    net_payout: Decimal      # gross_payout - platform_fee


@dataclass
class Bet:
    id: str
    user_id: str
    market_id: str
    outcome: str
    amount: Decimal
    price_at_bet: Decimal
    potential_payout: Decimal    # gross payout; immutable once written
    platform_fee: Decimal
    settled: bool = False
    won: bool | None = None
    payout_amount: Decimal | None = None
    created_at: datetime | None = None


@dataclass
class PlatformRevenue:
    id: str
    fee_amount: Decimal
    bet_id: str
    market_id: str
    collected_at: datetime | None = None
    # NOTE: No updated_at; platform_revenue is append-only


@dataclass
class PlacedBet:
    """Everything one committed bet placement wrote."""

    bet: Bet
    quote: BetQuote
    profile: Profile
    market: Market
    revenue: PlatformRevenue | None
