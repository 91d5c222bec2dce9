"""Pydantic schemas for wl_market API responses."""

from datetime import datetime

from src.wl_common.amounts import amount_to_display
from src.wl_common.response import CamelModel
from src.wl_market.domain.models import Market


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


class MarketDetail(CamelModel):
    id: str
    title: str
    outcome_a: str
    outcome_b: str
    price_a: float
    price_b: float
    volume: float
    volume_display: str
    status: str
    end_time: str | None
    winning_outcome: str | None
    platform_fee_rate: float | None

    @classmethod
    def from_domain(cls, m: Market) -> "MarketDetail":
        return cls(
            id=m.id,
            title=m.title,
            outcome_a=m.outcome_a,
            outcome_b=m.outcome_b,
            price_a=float(m.price_a),
            price_b=float(m.price_b),
            volume=float(m.volume),
            volume_display=amount_to_display(m.volume),
            status=m.status,
            end_time=_iso(m.end_time),
            winning_outcome=m.winning_outcome,
            platform_fee_rate=(
                float(m.platform_fee_rate) if m.platform_fee_rate is not None else None
            ),
        )
