"""SQLAlchemy ORM model for the markets table.

Used for type reference only — persistence.py uses raw text() SQL.
Alembic migration 003_create_markets.py is the authoritative DDL source.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.wl_common.database import Base


class MarketORM(Base):
    __tablename__ = "markets"

    id: Mapped[str] = mapped_column(PG_UUID(as_uuid=False), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    outcome_a: Mapped[str] = mapped_column(Text, nullable=False)
    outcome_b: Mapped[str] = mapped_column(Text, nullable=False)
    price_a: Mapped[Decimal] = mapped_column(Numeric(12, 10), nullable=False)
    price_b: Mapped[Decimal] = mapped_column(Numeric(12, 10), nullable=False)
    volume: Mapped[Decimal] = mapped_column(Numeric(24, 9), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    winning_outcome: Mapped[str | None] = mapped_column(String(1))
    platform_fee_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 4))
    created_by: Mapped[str | None] = mapped_column(
        PG_UUID(as_uuid=False), ForeignKey("profiles.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
