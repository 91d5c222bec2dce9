"""wl_betting REST endpoints.

POST /bets   — place a bet; body {"marketId", "outcome", "amount"}

Identity is resolved leniently here so the service can report bad input
before a missing or invalid token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_betting.application.schemas import PlaceBetRequest, PlaceBetResponse
from src.wl_betting.application.service import BetApplicationService
from src.wl_common.database import get_db_session
from src.wl_gateway.auth.dependencies import get_optional_user_id
from src.wl_gateway.middleware.rate_limit import enforce_bet_rate_limit

router = APIRouter(prefix="/bets", tags=["bets"])

_service = BetApplicationService()


@router.post("", response_model=PlaceBetResponse)
async def place_bet(
    body: PlaceBetRequest,
    user_id: Annotated[str | None, Depends(get_optional_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> PlaceBetResponse:
    if user_id is not None:
        await enforce_bet_rate_limit(user_id)
    return await _service.place_bet(db, user_id, body)
