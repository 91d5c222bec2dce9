"""BetApplicationService — the bet placement transaction.

Input checks (amount, outcome, identity) run before any SQL. Everything
after that happens inside ONE database transaction on the caller's
session:

    lock profile row  -> ProfileNotFound / InsufficientBalance
    lock market row   -> MarketNotFound / MarketNotActive
    debit balance, insert bet, move prices + volume, append revenue
    commit

Lock order is always profile then market, so two bets can never wait on
each other in a cycle. Any error rolls the whole attempt back; nothing is
ever undone with a compensating write.
"""

import logging
from decimal import Decimal

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.wl_account.domain.repository import ProfileRepositoryProtocol
from src.wl_account.infrastructure.persistence import ProfileRepository
from src.wl_betting.application.schemas import PlaceBetRequest, PlaceBetResponse
from src.wl_betting.domain.models import PlacedBet
from src.wl_betting.domain.pricing import apply_price_impact, quote_bet
from src.wl_betting.domain.repository import BetRepositoryProtocol
from src.wl_betting.infrastructure.persistence import BetRepository
from src.wl_common.amounts import to_amount
from src.wl_common.enums import MarketStatus, Outcome
from src.wl_common.errors import (
    AppError,
    InsufficientBalanceError,
    InternalError,
    InvalidInputError,
    InvalidOutcomeError,
    MarketNotActiveError,
    MarketNotFoundError,
    ProfileNotFoundError,
    TransactionFailureError,
    UnauthorizedError,
)
from src.wl_market.domain.models import MarketPriceUpdate
from src.wl_market.domain.repository import MarketRepositoryProtocol
from src.wl_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger(__name__)


def validate_bet_input(req: PlaceBetRequest) -> tuple[str, Outcome, Decimal]:
    """Return (market_id, outcome, amount) or raise InvalidInput / InvalidOutcome."""
    if not req.market_id or req.outcome is None or req.outcome == "" or req.amount is None:
        raise InvalidInputError()
    try:
        amount = to_amount(req.amount)
    except ValueError:
        raise InvalidInputError() from None
    if amount <= 0:
        raise InvalidInputError()
    if not isinstance(req.outcome, str) or req.outcome not in (Outcome.A, Outcome.B):
        raise InvalidOutcomeError()
    return req.market_id, Outcome(req.outcome), amount


class BetApplicationService:
    def __init__(
        self,
        bet_repo: BetRepositoryProtocol | None = None,
        profile_repo: ProfileRepositoryProtocol | None = None,
        market_repo: MarketRepositoryProtocol | None = None,
        fee_rate: Decimal | None = None,
    ) -> None:
        self._bets: BetRepositoryProtocol = bet_repo or BetRepository()
        self._profiles: ProfileRepositoryProtocol = profile_repo or ProfileRepository()
        self._markets: MarketRepositoryProtocol = market_repo or MarketRepository()
        self._fee_rate = fee_rate if fee_rate is not None else settings.PLATFORM_FEE_RATE

    async def place_bet(
        self, db: AsyncSession, user_id: str | None, req: PlaceBetRequest
    ) -> PlaceBetResponse:
        market_id, outcome, amount = validate_bet_input(req)
        if user_id is None:
            raise UnauthorizedError()

        try:
            placed = await self._place_bet_tx(db, user_id, market_id, outcome, amount)
            await db.commit()
        except AppError:
            await db.rollback()
            raise
        except DBAPIError as exc:
            await db.rollback()
            logger.warning(
                "Bet transaction aborted: user=%s market=%s amount=%s: %s",
                user_id, market_id, amount, exc.orig,
            )
            raise TransactionFailureError() from exc
        except Exception as exc:
            await db.rollback()
            logger.exception(
                "Unexpected error placing bet: user=%s market=%s", user_id, market_id
            )
            raise InternalError() from exc

        logger.info(
            "Bet placed: %s SOL on outcome %s for market %s (bet=%s, fee=%s)",
            amount, outcome.value, placed.market.id, placed.bet.id, placed.quote.platform_fee,
        )
        return PlaceBetResponse.from_placed(placed)

    async def _place_bet_tx(
        self,
        db: AsyncSession,
        user_id: str,
        market_id: str,
        outcome: Outcome,
        amount: Decimal,
    ) -> PlacedBet:
        await self._bets.set_transaction_timeouts(
            db, settings.BET_LOCK_TIMEOUT_MS, settings.BET_STATEMENT_TIMEOUT_MS
        )

        profile = await self._profiles.lock_profile(db, user_id)
        if profile is None:
            raise ProfileNotFoundError()
        if profile.sol_balance < amount:
            raise InsufficientBalanceError()

        market = await self._markets.lock_market(db, market_id)
        if market is None:
            raise MarketNotFoundError()
        if market.status != MarketStatus.ACTIVE:
            raise MarketNotActiveError()

        fee_rate = (
            market.platform_fee_rate if market.platform_fee_rate is not None else self._fee_rate
        )
        quote = quote_bet(amount, market.price_of(outcome), fee_rate)

        debited = await self._profiles.debit_for_bet(db, profile.id, amount)
        if debited is None:
            # Row is locked, so only a concurrent non-locking writer gets here
            raise InsufficientBalanceError()

        bet = await self._bets.insert_bet(
            db, profile.id, market.id, outcome.value, amount, quote
        )

        new_price_a, new_price_b = apply_price_impact(
            market.price_a, market.price_b, outcome, amount
        )
        updated_market = await self._markets.apply_price_update(
            db,
            MarketPriceUpdate(
                market_id=market.id,
                price_a=new_price_a,
                price_b=new_price_b,
                volume=market.volume + amount,
            ),
        )
        if updated_market is None:
            raise TransactionFailureError()

        revenue = None
        if quote.platform_fee > 0:
            revenue = await self._bets.record_revenue(db, bet)

        return PlacedBet(
            bet=bet,
            quote=quote,
            profile=debited,
            market=updated_market,
            revenue=revenue,
        )
