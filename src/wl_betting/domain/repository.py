"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_betting.domain.models import Bet, BetQuote, PlatformRevenue


class BetRepositoryProtocol(Protocol):
    async def set_transaction_timeouts(
        self, db: AsyncSession, lock_timeout_ms: int, statement_timeout_ms: int
    ) -> None: ...

    async def insert_bet(
        self,
        db: AsyncSession,
        user_id: str,
        market_id: str,
        outcome: str,
        amount: Decimal,
        quote: BetQuote,
    ) -> Bet: ...

    async def record_revenue(self, db: AsyncSession, bet: Bet) -> PlatformRevenue: ...
