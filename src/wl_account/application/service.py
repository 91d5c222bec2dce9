"""AccountApplicationService — read-only view of the caller's profile."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.application.schemas import BalanceResponse
from src.wl_account.domain.repository import ProfileRepositoryProtocol
from src.wl_account.infrastructure.persistence import ProfileRepository
from src.wl_common.errors import ProfileNotFoundError


class AccountApplicationService:
    def __init__(self, repo: ProfileRepositoryProtocol | None = None) -> None:
        self._repo: ProfileRepositoryProtocol = repo or ProfileRepository()

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        profile = await self._repo.get_profile(db, user_id)
        if profile is None:
            raise ProfileNotFoundError()
        return BalanceResponse.from_domain(profile)
