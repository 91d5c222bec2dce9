"""Concurrency properties of bet placement against an in-memory row-locking store.

FakeStore mimics what PostgreSQL gives the real repositories:
  - lock_* takes a per-row lock held until commit/rollback (SELECT ... FOR UPDATE)
  - writes are staged per session and only become visible on commit
Each task gets its own FakeSession, like each request gets its own connection.
"""

import asyncio
import uuid
from collections import defaultdict
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from src.wl_account.domain.models import Profile
from src.wl_betting.application.schemas import PlaceBetRequest
from src.wl_betting.application.service import BetApplicationService
from src.wl_betting.domain.models import Bet, BetQuote, PlatformRevenue
from src.wl_common.errors import InsufficientBalanceError, TransactionFailureError
from src.wl_market.domain.models import Market, MarketPriceUpdate

D = Decimal
MKT = "mkt-1"


class FakeStore:
    def __init__(self) -> None:
        self.profiles: dict[str, Profile] = {}
        self.markets: dict[str, Market] = {}
        self.bets: list[Bet] = []
        self.revenue: list[PlatformRevenue] = []
        self.row_locks: dict[tuple[str, str], asyncio.Lock] = defaultdict(asyncio.Lock)


class FakeSession:
    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self._held: list[tuple[str, str]] = []
        self._profiles: dict[str, Profile] = {}
        self._markets: dict[str, Market] = {}
        self._bets: list[Bet] = []
        self._revenue: list[PlatformRevenue] = []
        self.commits = 0
        self.rollbacks = 0

    async def lock(self, key: tuple[str, str]) -> None:
        if key not in self._held:
            await self.store.row_locks[key].acquire()
            self._held.append(key)

    def profile(self, user_id: str) -> Profile | None:
        return self._profiles.get(user_id) or self.store.profiles.get(user_id)

    def market(self, market_id: str) -> Market | None:
        return self._markets.get(market_id) or self.store.markets.get(market_id)

    async def commit(self) -> None:
        self.store.profiles.update(self._profiles)
        self.store.markets.update(self._markets)
        self.store.bets.extend(self._bets)
        self.store.revenue.extend(self._revenue)
        self.commits += 1
        self._end()

    async def rollback(self) -> None:
        self.rollbacks += 1
        self._end()

    def _end(self) -> None:
        self._profiles, self._markets, self._bets, self._revenue = {}, {}, [], []
        for key in self._held:
            self.store.row_locks[key].release()
        self._held = []


class FakeProfileRepo:
    async def get_profile(self, db: FakeSession, user_id: str) -> Profile | None:
        return db.store.profiles.get(user_id)

    async def lock_profile(self, db: FakeSession, user_id: str) -> Profile | None:
        await db.lock(("profile", user_id))
        await asyncio.sleep(0)
        return db.profile(user_id)

    async def debit_for_bet(
        self, db: FakeSession, user_id: str, amount: Decimal
    ) -> Profile | None:
        await asyncio.sleep(0)
        current = db.profile(user_id)
        if current is None or current.sol_balance < amount:
            return None
        updated = replace(
            current, sol_balance=current.sol_balance - amount, total_bets=current.total_bets + 1
        )
        db._profiles[user_id] = updated
        return updated


class FakeMarketRepo:
    async def get_market_by_id(self, db: FakeSession, market_id: str) -> Market | None:
        return db.store.markets.get(market_id)

    async def lock_market(self, db: FakeSession, market_id: str) -> Market | None:
        await db.lock(("market", market_id))
        await asyncio.sleep(0)
        return db.market(market_id)

    async def apply_price_update(
        self, db: FakeSession, update: MarketPriceUpdate
    ) -> Market | None:
        await asyncio.sleep(0)
        current = db.market(update.market_id)
        if current is None:
            return None
        updated = replace(
            current, price_a=update.price_a, price_b=update.price_b, volume=update.volume
        )
        db._markets[update.market_id] = updated
        return updated


class FakeBetRepo:
    def __init__(self, fail_insert: bool = False) -> None:
        self.fail_insert = fail_insert

    async def set_transaction_timeouts(
        self, db: FakeSession, lock_timeout_ms: int, statement_timeout_ms: int
    ) -> None:
        return None

    async def insert_bet(
        self,
        db: FakeSession,
        user_id: str,
        market_id: str,
        outcome: str,
        amount: Decimal,
        quote: BetQuote,
    ) -> Bet:
        await asyncio.sleep(0)
        if self.fail_insert:
            raise OperationalError("INSERT INTO bets", {}, Exception("connection reset"))
        bet = Bet(
            id=str(uuid.uuid4()),
            user_id=user_id,
            market_id=market_id,
            outcome=outcome,
            amount=amount,
            price_at_bet=quote.price_at_bet,
            potential_payout=quote.gross_payout,
            platform_fee=quote.platform_fee,
        )
        db._bets.append(bet)
        return bet

    async def record_revenue(self, db: FakeSession, bet: Bet) -> PlatformRevenue:
        rev = PlatformRevenue(
            id=str(uuid.uuid4()), fee_amount=bet.platform_fee, bet_id=bet.id, market_id=bet.market_id
        )
        db._revenue.append(rev)
        return rev


def _seed(store: FakeStore, balances: dict[str, str], price_a: str = "0.5") -> None:
    for user_id, balance in balances.items():
        store.profiles[user_id] = Profile(
            id=user_id, username=user_id, sol_balance=D(balance), total_bets=0
        )
    store.markets[MKT] = Market(
        id=MKT,
        title="Test market",
        outcome_a="Yes",
        outcome_b="No",
        price_a=D(price_a),
        price_b=1 - D(price_a),
        volume=D("0"),
        status="Active",
        end_time=datetime.now(UTC),
        winning_outcome=None,
        platform_fee_rate=None,
    )


def _service(bet_repo: FakeBetRepo | None = None) -> BetApplicationService:
    return BetApplicationService(
        bet_repo=bet_repo or FakeBetRepo(),  # type: ignore[arg-type]
        profile_repo=FakeProfileRepo(),  # type: ignore[arg-type]
        market_repo=FakeMarketRepo(),  # type: ignore[arg-type]
        fee_rate=D("0.05"),
    )


def _bet(amount: float, outcome: str = "A") -> PlaceBetRequest:
    return PlaceBetRequest(market_id=MKT, outcome=outcome, amount=amount)


async def _attempt(svc: BetApplicationService, store: FakeStore, user_id: str, req: PlaceBetRequest):  # type: ignore[no-untyped-def]
    try:
        return await svc.place_bet(FakeSession(store), user_id, req)  # type: ignore[arg-type]
    except (InsufficientBalanceError, TransactionFailureError) as exc:
        return exc


class TestSameMarketConcurrency:
    async def test_two_max_impact_bets_both_apply(self) -> None:
        store = FakeStore()
        _seed(store, {"u1": "10000", "u2": "10000"})
        svc = _service()

        r1, r2 = await asyncio.gather(
            svc.place_bet(FakeSession(store), "u1", _bet(5000)),  # type: ignore[arg-type]
            svc.place_bet(FakeSession(store), "u2", _bet(5000)),  # type: ignore[arg-type]
        )

        market = store.markets[MKT]
        assert market.price_a == D("0.54")
        assert market.price_b == D("0.46")
        assert market.volume == D("10000")
        assert len(store.bets) == 2
        # one of them saw 0.50, the other 0.52
        assert sorted([r1.price_at_bet, r2.price_at_bet]) == [0.5, 0.52]

    async def test_many_bets_no_lost_updates(self) -> None:
        users = {f"u{i}": "100" for i in range(20)}
        store = FakeStore()
        _seed(store, users)
        svc = _service()

        await asyncio.gather(
            *(
                svc.place_bet(FakeSession(store), uid, _bet(10, "A" if i % 2 else "B"))  # type: ignore[arg-type]
                for i, uid in enumerate(users)
            )
        )

        market = store.markets[MKT]
        assert market.volume == D("200")
        assert market.price_a + market.price_b == 1
        assert len(store.bets) == 20
        assert len(store.revenue) == 20


class TestSameUserConcurrency:
    async def test_no_overdraft(self) -> None:
        store = FakeStore()
        _seed(store, {"u1": "100"})
        svc = _service()

        results = await asyncio.gather(*(_attempt(svc, store, "u1", _bet(30)) for _ in range(5)))

        ok = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, InsufficientBalanceError)]
        assert len(ok) == 3
        assert len(rejected) == 2
        profile = store.profiles["u1"]
        assert profile.sol_balance == D("10")
        assert profile.total_bets == 3
        assert store.markets[MKT].volume == D("90")

    async def test_balances_observed_never_negative(self) -> None:
        store = FakeStore()
        _seed(store, {"u1": "50"})
        svc = _service()

        results = await asyncio.gather(*(_attempt(svc, store, "u1", _bet(7)) for _ in range(10)))

        balances = [r.new_balance for r in results if not isinstance(r, Exception)]
        assert len(balances) == 7
        assert all(b >= 0 for b in balances)
        assert sorted(balances) == [1.0, 8.0, 15.0, 22.0, 29.0, 36.0, 43.0]
        assert store.profiles["u1"].sol_balance == D("1")


class TestNoIdempotence:
    async def test_identical_requests_both_succeed(self) -> None:
        store = FakeStore()
        _seed(store, {"u1": "100"})
        svc = _service()

        first = await svc.place_bet(FakeSession(store), "u1", _bet(10))  # type: ignore[arg-type]
        second = await svc.place_bet(FakeSession(store), "u1", _bet(10))  # type: ignore[arg-type]

        assert first.bet_id != second.bet_id
        assert first.new_balance == 90.0
        assert second.new_balance == 80.0
        assert len(store.bets) == 2
        assert store.profiles["u1"].total_bets == 2


class TestAtomicity:
    async def test_failed_insert_leaves_no_trace(self) -> None:
        store = FakeStore()
        _seed(store, {"u1": "100"})
        svc = _service(FakeBetRepo(fail_insert=True))
        session = FakeSession(store)

        with pytest.raises(TransactionFailureError):
            await svc.place_bet(session, "u1", _bet(10))  # type: ignore[arg-type]

        assert session.rollbacks == 1
        assert session.commits == 0
        assert store.profiles["u1"].sol_balance == D("100")
        assert store.profiles["u1"].total_bets == 0
        assert store.markets[MKT].price_a == D("0.5")
        assert store.markets[MKT].volume == D("0")
        assert store.bets == []
        assert store.revenue == []

    async def test_failure_releases_locks(self) -> None:
        store = FakeStore()
        _seed(store, {"u1": "100"})

        with pytest.raises(TransactionFailureError):
            await _service(FakeBetRepo(fail_insert=True)).place_bet(
                FakeSession(store), "u1", _bet(10)  # type: ignore[arg-type]
            )
        result = await asyncio.wait_for(
            _service().place_bet(FakeSession(store), "u1", _bet(10)),  # type: ignore[arg-type]
            timeout=1,
        )

        assert result.new_balance == 90.0
