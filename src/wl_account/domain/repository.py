"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.domain.models import Profile


class ProfileRepositoryProtocol(Protocol):
    async def get_profile(self, db: AsyncSession, user_id: str) -> Profile | None: ...

    async def lock_profile(self, db: AsyncSession, user_id: str) -> Profile | None: ...

    async def debit_for_bet(
        self, db: AsyncSession, user_id: str, amount: Decimal
    ) -> Profile | None: ...
