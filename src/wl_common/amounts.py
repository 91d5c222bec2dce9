"""Decimal arithmetic utilities for SOL-denominated balances and prices.

All amounts and prices are Decimal. No float arithmetic past the API boundary.
  - amounts: 9 decimal places (1 lamport = 0.000000001 SOL)
  - prices:  10 decimal places, bounded to [0.01, 0.99]
"""

import math
from decimal import (
    ROUND_DOWN,
    ROUND_HALF_EVEN,
    ROUND_UP,
    Decimal,
    InvalidOperation,
    localcontext,
)

AMOUNT_QUANTUM = Decimal("0.000000001")
PRICE_QUANTUM = Decimal("0.0000000001")

MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("0.99")


def to_amount(value: float | int | str | Decimal) -> Decimal:
    """Convert a wire number to a Decimal amount (banker's rounding to lamports).

    Goes through str() so 0.1 stays 0.1 rather than its binary expansion.
    Any finite magnitude is accepted; whether the caller can afford it is a
    balance check, not an input check.
    Raises ValueError for NaN, infinities and non-numeric input.
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Amount must be finite, got {value!r}")
    try:
        dec = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Amount must be a number, got {value!r}") from None
    if not dec.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    with localcontext() as ctx:
        # integer digits plus 9 fractional digits must fit the precision
        ctx.prec = max(ctx.prec, dec.adjusted() + 11)
        return dec.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_EVEN)


def round_amount_down(value: Decimal) -> Decimal:
    return value.quantize(AMOUNT_QUANTUM, rounding=ROUND_DOWN)


def round_amount_up(value: Decimal) -> Decimal:
    return value.quantize(AMOUNT_QUANTUM, rounding=ROUND_UP)


def quantize_price(value: Decimal) -> Decimal:
    return value.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_EVEN)


def validate_price(price: Decimal) -> None:
    """Validate that price is in the range [0.01, 0.99]."""
    if not (MIN_PRICE <= price <= MAX_PRICE):
        raise ValueError(f"Price must be between 0.01 and 0.99, got {price}")


def amount_to_display(amount: Decimal) -> str:
    """Convert an amount to a display string: 1234.5 -> '1,234.50 SOL'."""
    return f"{amount:,.2f} SOL"
