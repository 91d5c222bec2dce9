"""SQLAlchemy ORM model for the profiles table.

Used for type reference only — persistence.py uses raw text() SQL.
Alembic migration 002_create_profiles.py is the authoritative DDL source.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.wl_common.database import Base


class ProfileORM(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(PG_UUID(as_uuid=False), primary_key=True)
    username: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sol_balance: Mapped[Decimal] = mapped_column(Numeric(20, 9), nullable=False, default=0)
    total_bets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
