"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_market.domain.models import Market, MarketPriceUpdate


class MarketRepositoryProtocol(Protocol):
    async def get_market_by_id(self, db: AsyncSession, market_id: str) -> Market | None: ...

    async def lock_market(self, db: AsyncSession, market_id: str) -> Market | None: ...

    async def apply_price_update(
        self, db: AsyncSession, update: MarketPriceUpdate
    ) -> Market | None: ...
