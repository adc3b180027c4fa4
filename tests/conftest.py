"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from order_pacing.engine.pacing import PacingEngine
from order_pacing.models.order import OrderInput, OrderItem, OrderSource
from order_pacing.storage.base import Score, ScoredValue, TimeSeriesStore

# Tuesday 2023-11-14 22:13:20 UTC
NOW_SECONDS = 1_700_000_000
NOW = datetime.fromtimestamp(NOW_SECONDS, tz=timezone.utc)


def _score(value: Score) -> float:
    return float(value)


class InMemoryTimeSeriesStore(TimeSeriesStore):
    """Sorted-set semantics in memory: one score per member, ties by member."""

    def __init__(self):
        self.data: Dict[str, Dict[str, float]] = {}
        self.calls: List[tuple] = []

    def _sorted(self, key: str) -> List[ScoredValue]:
        members = self.data.get(key, {})
        return sorted(members.items(), key=lambda entry: (entry[1], entry[0]))

    async def add(self, key: str, score: int, value: str) -> None:
        self.calls.append(("add", key, score))
        self.data.setdefault(key, {})[value] = float(score)

    async def range_by_score(self, key: str, min_score: Score, max_score: Score) -> List[ScoredValue]:
        self.calls.append(("range_by_score", key, min_score, max_score))
        low, high = _score(min_score), _score(max_score)
        return [(value, score) for value, score in self._sorted(key) if low <= score <= high]

    async def range_all(self, key: str) -> List[ScoredValue]:
        self.calls.append(("range_all", key))
        return self._sorted(key)

    async def trim_by_score(self, key: str, min_score: Score, max_score: Score) -> None:
        self.calls.append(("trim_by_score", key, min_score, max_score))
        low, high = _score(min_score), _score(max_score)
        members = self.data.get(key, {})
        for value in [v for v, s in members.items() if low <= s <= high]:
            del members[value]

    async def health_check(self) -> bool:
        return True

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)


class FixedClock:
    """Callable clock returning a settable epoch time."""

    def __init__(self, now: float = NOW_SECONDS):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_order(
    order_id: str = "order-1",
    order_time: Optional[datetime] = None,
    items: Optional[List[OrderItem]] = None,
    total_amount_cents: float = 1000,
    source: OrderSource = OrderSource.OWN_CHANNEL,
) -> OrderInput:
    return OrderInput(
        order_id=order_id,
        order_time=order_time or NOW,
        items=items if items is not None else [OrderItem(item_id="item-1", category_id="burger", quantity=1, amount_cents=1000)],
        total_amount_cents=total_amount_cents,
        source=source,
    )


def minutes(value: float) -> timedelta:
    return timedelta(minutes=value)


@pytest.fixture
def store() -> InMemoryTimeSeriesStore:
    return InMemoryTimeSeriesStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def basic_rule() -> dict:
    return {
        "ruleId": "rush",
        "timeFrameMinutes": 15,
        "busyTimeMinutes": 10,
        "maxOrders": 2,
    }


@pytest.fixture
def make_engine(store, clock):
    """Factory building engines over the shared in-memory store and clock."""

    def _make(rules, **kwargs) -> PacingEngine:
        kwargs.setdefault("bucket", "store-1:loc-1")
        return PacingEngine(store=store, rules=rules, clock=clock, **kwargs)

    return _make
