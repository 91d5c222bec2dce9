"""MarketApplicationService — read-only; no commit/rollback needed."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_common.errors import MarketNotFoundError
from src.wl_market.application.schemas import MarketDetail
from src.wl_market.domain.repository import MarketRepositoryProtocol
from src.wl_market.infrastructure.persistence import MarketRepository


class MarketApplicationService:
    def __init__(self, repo: MarketRepositoryProtocol | None = None) -> None:
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()

    async def get_market(self, db: AsyncSession, market_id: str) -> MarketDetail:
        market = await self._repo.get_market_by_id(db, market_id)
        if market is None:
            raise MarketNotFoundError()
        return MarketDetail.from_domain(market)
