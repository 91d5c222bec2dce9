"""Payout, fee and price-impact arithmetic for binary-outcome bets.

Pure functions over Decimal; no I/O.

  gross_payout = amount / price_at_bet
  platform_fee = (gross_payout - amount) * fee_rate     (0 when no profit)
  net_payout   = gross_payout - platform_fee
  impact       = min(0.02, amount / 10000)
  chosen'      = min(0.99, chosen + impact);  other' = 1 - chosen'

Rounding at lamport precision: payout rounds down, fee rounds up, so
the platform never pays out more or collects less than the exact figure.
"""

from decimal import Decimal

from src.wl_betting.domain.models import BetQuote
from src.wl_common.amounts import (
    MAX_PRICE,
    quantize_price,
    round_amount_down,
    round_amount_up,
    validate_price,
)
from src.wl_common.enums import Outcome

FEE_RATE = Decimal("0.05")
MAX_PRICE_IMPACT = Decimal("0.02")
PRICE_IMPACT_DIVISOR = Decimal("10000")

_ZERO = Decimal("0")
_ONE = Decimal("1")


def calc_gross_payout(amount: Decimal, price: Decimal) -> Decimal:
    """Stake divided by implied probability."""
    if price <= _ZERO:
        raise ValueError(f"Price must be positive, got {price}")
    return round_amount_down(amount / price)


def calc_platform_fee(gross_payout: Decimal, amount: Decimal, fee_rate: Decimal) -> Decimal:
    """Fee on profit only; never charged on principal, never negative."""
    profit = gross_payout - amount
    if profit <= _ZERO:
        return round_amount_up(_ZERO)
    return round_amount_up(profit * fee_rate)


def quote_bet(amount: Decimal, price_at_bet: Decimal, fee_rate: Decimal = FEE_RATE) -> BetQuote:
    validate_price(price_at_bet)
    gross = calc_gross_payout(amount, price_at_bet)
    fee = calc_platform_fee(gross, amount, fee_rate)
    return BetQuote(
        price_at_bet=price_at_bet,
        gross_payout=gross,
        profit=gross - amount,
        platform_fee=fee,
        net_payout=gross - fee,
    )


def calc_price_impact(amount: Decimal) -> Decimal:
    return min(MAX_PRICE_IMPACT, amount / PRICE_IMPACT_DIVISOR)


def apply_price_impact(
    price_a: Decimal, price_b: Decimal, outcome: Outcome, amount: Decimal
) -> tuple[Decimal, Decimal]:
    """Return (new_price_a, new_price_b) after a bet of `amount` on `outcome`.

    The chosen side gets dearer, capped at 0.99; the other side is always
    1 - chosen so the pair keeps summing to exactly 1.
    """
    chosen = price_a if outcome is Outcome.A else price_b
    new_chosen = min(MAX_PRICE, quantize_price(chosen + calc_price_impact(amount)))
    new_other = _ONE - new_chosen
    if outcome is Outcome.A:
        return new_chosen, new_other
    return new_other, new_chosen
