"""SQLAlchemy ORM models for wl_betting.

These map to existing tables created by Alembic migrations.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.wl_common.database import Base


class BetORM(Base):
    __tablename__ = "bets"

    id: Mapped[str] = mapped_column(PG_UUID(as_uuid=False), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        PG_UUID(as_uuid=False), ForeignKey("profiles.id"), nullable=False
    )
    market_id: Mapped[str] = mapped_column(
        PG_UUID(as_uuid=False), ForeignKey("markets.id"), nullable=False
    )
    outcome: Mapped[str] = mapped_column(String(1), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(20, 9), nullable=False)
    price_at_bet: Mapped[Decimal] = mapped_column(Numeric(12, 10), nullable=False)
    potential_payout: Mapped[Decimal] = mapped_column(Numeric(24, 9), nullable=False)
    platform_fee: Mapped[Decimal] = mapped_column(Numeric(24, 9), nullable=False, default=0)
    settled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    won: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    payout_amount: Mapped[Decimal | None] = mapped_column(Numeric(24, 9), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class PlatformRevenueORM(Base):
    __tablename__ = "platform_revenue"

    id: Mapped[str] = mapped_column(PG_UUID(as_uuid=False), primary_key=True)
    fee_amount: Mapped[Decimal] = mapped_column(Numeric(24, 9), nullable=False)
    bet_id: Mapped[str | None] = mapped_column(
        PG_UUID(as_uuid=False), ForeignKey("bets.id"), nullable=True
    )
    market_id: Mapped[str | None] = mapped_column(
        PG_UUID(as_uuid=False), ForeignKey("markets.id"), nullable=True
    )
    collected_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    # NOTE: No updated_at; platform_revenue is append-only
