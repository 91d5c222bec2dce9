"""Pydantic schemas for the bet placement API.

Request fields are loosely typed on purpose: presence, sign and the A/B
outcome are business checks made by the service in a fixed order, each
with its own error. Only structurally broken bodies fail in pydantic.
"""

from typing import Any

from src.wl_betting.domain.models import PlacedBet
from src.wl_common.response import CamelModel

SUCCESS_MESSAGE = "Bet placed successfully!"


class PlaceBetRequest(CamelModel):
    market_id: str | None = None
    outcome: Any = None         # any JSON value; anything but "A"/"B" is InvalidOutcome
    amount: float | None = None


class PlaceBetResponse(CamelModel):
    success: bool = True
    new_balance: float
    potential_payout: float     # net of fee: credited if the outcome wins
    platform_fee: float
    gross_payout: float
    message: str = SUCCESS_MESSAGE
    bet_id: str
    price_at_bet: float
    market_price_a: float
    market_price_b: float
    market_volume: float

    @classmethod
    def from_placed(cls, placed: PlacedBet) -> "PlaceBetResponse":
        return cls(
            new_balance=float(placed.profile.sol_balance),
            potential_payout=float(placed.quote.net_payout),
            platform_fee=float(placed.quote.platform_fee),
            gross_payout=float(placed.quote.gross_payout),
            bet_id=placed.bet.id,
            price_at_bet=float(placed.quote.price_at_bet),
            market_price_a=float(placed.market.price_a),
            market_price_b=float(placed.market.price_b),
            market_volume=float(placed.market.volume),
        )
