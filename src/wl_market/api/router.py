"""wl_market REST endpoints.

GET /markets/{market_id}   — current prices, volume and status
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_common.database import get_db_session
from src.wl_gateway.auth.dependencies import get_current_user_id
from src.wl_market.application.schemas import MarketDetail
from src.wl_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])

_service = MarketApplicationService()


@router.get("/{market_id}", response_model=MarketDetail)
async def get_market(
    market_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> MarketDetail:
    return await _service.get_market(db, market_id)
