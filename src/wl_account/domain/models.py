"""Domain models for wl_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Profile:
    id: str                  # auth provider user id
    username: str | None
    sol_balance: Decimal     # available balance, never negative
    total_bets: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
