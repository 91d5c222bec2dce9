"""Pydantic schemas for wl_account API."""

from src.wl_account.domain.models import Profile
from src.wl_common.amounts import amount_to_display
from src.wl_common.response import CamelModel


class BalanceResponse(CamelModel):
    user_id: str
    username: str | None
    balance: float
    balance_display: str
    total_bets: int

    @classmethod
    def from_domain(cls, profile: Profile) -> "BalanceResponse":
        return cls(
            user_id=profile.id,
            username=profile.username,
            balance=float(profile.sol_balance),
            balance_display=amount_to_display(profile.sol_balance),
            total_bets=profile.total_bets,
        )
