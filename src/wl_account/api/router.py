"""wl_account REST API — requires JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.application.schemas import BalanceResponse
from src.wl_account.application.service import AccountApplicationService
from src.wl_common.database import get_db_session
from src.wl_gateway.auth.dependencies import get_current_user_id

router = APIRouter(prefix="/account", tags=["account"])

_service = AccountApplicationService()


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> BalanceResponse:
    return await _service.get_balance(db, user_id)
