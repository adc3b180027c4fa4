"""Busy-time pacing engine.

Ingests orders for one bucket, evaluates every applicable rule over its
time window and persists a busy period for each rule that fires.
"""

import time
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Union

from order_pacing.config.constants import (
    BUSY_TIMES_KEY_PREFIX,
    DEFAULT_TIMEZONE,
    ORDERS_KEY_PREFIX,
    ORDERS_RETENTION_SECONDS,
)
from order_pacing.core.errors import ConfigurationError
from order_pacing.core.logger import setup_logger
from order_pacing.core.timeutils import resolve_timezone, seconds_to_datetime, to_seconds
from order_pacing.engine.matcher import RuleMatcher
from order_pacing.engine.wait import calculate_wait_period
from order_pacing.engine.windows import calculate_time_window
from order_pacing.models.busy_time import (
    BusyPeriod,
    ThresholdMatch,
    TimeframeMode,
    TimeWindow,
    WaitPeriod,
)
from order_pacing.models.order import Order, OrderInput, OrderStat
from order_pacing.models.rule import Rule
from order_pacing.rules.ruleset import RuleSet
from order_pacing.storage.base import TimeSeriesStore
from order_pacing.storage.codec import (
    decode_busy_period,
    decode_order,
    encode_busy_period,
    encode_order,
)

logger = setup_logger(__name__)


def resolve_timeframe_mode(mode: Union[str, TimeframeMode]) -> TimeframeMode:
    try:
        return TimeframeMode(mode)
    except ValueError as e:
        valid = ", ".join(m.value for m in TimeframeMode)
        raise ConfigurationError(
            f"timeframe_mode must be one of {valid}, got: {mode!r}", field="timeframe_mode"
        ) from e


class PacingEngine:
    """Windowed threshold engine for a single bucket.

    Business Rules:
    - Orders are kept for 7 days, busy periods until their end time
    - Only own-channel orders count toward thresholds
    - One busy period per triggered rule per ingested order
    - Busy periods last their full duration from ingestion time

    Concurrent ``add`` calls on one bucket are not serialized; two orders
    ingested together may both miss or both trigger a busy period.
    """

    def __init__(
        self,
        store: TimeSeriesStore,
        bucket: str,
        rules: Union[RuleSet, Iterable[Any], None] = None,
        timeframe_mode: Union[str, TimeframeMode] = TimeframeMode.BEFORE_ONLY,
        timezone: str = DEFAULT_TIMEZONE,
        allow_empty_rules: bool = False,
        key_prefix: str = "",
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the engine.

        Args:
            store: Time series store holding both streams
            bucket: Opaque bucket identifier (e.g. "storeId:locationId")
            rules: RuleSet, or rules to validate into one
            timeframe_mode: Window positioning mode for every rule
            timezone: IANA timezone used for weekday/time-of-day scoping
            allow_empty_rules: Tolerate an empty rule list (warn on add)
            key_prefix: Optional namespace prepended to store keys
            clock: Returns "now" as epoch seconds
        """
        if not bucket:
            raise ConfigurationError("bucket must be a non-empty string", field="bucket")

        self.store = store
        self.bucket = bucket
        self.timeframe_mode = resolve_timeframe_mode(timeframe_mode)
        self.timezone = resolve_timezone(timezone)
        self.allow_empty_rules = allow_empty_rules
        self.orders_key = f"{key_prefix}{ORDERS_KEY_PREFIX}{bucket}"
        self.busy_times_key = f"{key_prefix}{BUSY_TIMES_KEY_PREFIX}{bucket}"
        self._clock = clock
        self._rule_set = self._as_rule_set(rules)

        logger.debug(
            f"Pacing engine initialized: bucket={bucket}, rules={len(self._rule_set)}, "
            f"mode={self.timeframe_mode.value}, timezone={timezone}",
            extra={"bucket": bucket},
        )

    def _as_rule_set(self, rules: Union[RuleSet, Iterable[Any], None]) -> RuleSet:
        if isinstance(rules, RuleSet):
            if not rules.has_rules() and not self.allow_empty_rules:
                raise ConfigurationError("At least one busy time rule must be provided", field="rules")
            return rules
        return RuleSet(rules, allow_empty=self.allow_empty_rules)

    @property
    def rules(self) -> RuleSet:
        return self._rule_set

    def set_rules(self, rules: Union[RuleSet, Iterable[Any]]) -> RuleSet:
        """Replace the whole rule set.

        The new rules are validated before the swap; on error the current
        rule set stays in place.
        """
        rule_set = self._as_rule_set(rules)
        self._rule_set = rule_set
        logger.info(f"Rules replaced: bucket={self.bucket}, rules={len(rule_set)}", extra={"bucket": self.bucket})
        return rule_set

    def _now_seconds(self) -> int:
        return to_seconds(self._clock())

    async def _clean_old_orders(self, current_time_seconds: int) -> None:
        retention_time_seconds = current_time_seconds - ORDERS_RETENTION_SECONDS
        # Scores strictly below the cutoff
        await self.store.trim_by_score(self.orders_key, "-inf", retention_time_seconds - 1)

    async def _clean_old_busy_times(self, current_time_seconds: int) -> None:
        await self.store.trim_by_score(self.busy_times_key, "-inf", current_time_seconds)

    async def _get_orders_in_window(self, time_window: TimeWindow) -> List[Order]:
        entries = await self.store.range_by_score(self.orders_key, time_window.start, time_window.end)
        return [decode_order(value) for value, _ in entries]

    @staticmethod
    def _build_busy_period(
        order: Order,
        rule: Rule,
        match: ThresholdMatch,
    ) -> BusyPeriod:
        busy_time_seconds = rule.busy_time_seconds
        # A busy period always lasts its full duration from ingestion time
        end_time_seconds = max(order.order_time_seconds, order.current_time_seconds + busy_time_seconds)
        start_time_seconds = end_time_seconds - busy_time_seconds

        return BusyPeriod(
            start_time=seconds_to_datetime(start_time_seconds),
            end_time=seconds_to_datetime(end_time_seconds),
            order_time_seconds=order.order_time_seconds,
            current_time_seconds=order.current_time_seconds,
            busy_time_seconds=busy_time_seconds,
            busy_time_context=match.context,
            threshold=match.threshold,
            rule_id=rule.rule_id,
        )

    async def add(self, order_input: OrderInput) -> List[BusyPeriod]:
        """Ingest an order and open busy periods for triggered rules.

        Steps:
        1. Prune expired orders and busy periods
        2. Store the order keyed by its order time
        3. For each applicable rule, query its window and evaluate thresholds
        4. Store a busy period for each rule that fires

        Args:
            order_input: Caller-supplied order

        Returns:
            Busy periods created by this call (possibly empty)
        """
        if not self._rule_set.has_rules():
            logger.warning("No busy time rules set, skipping order validation", extra={"bucket": self.bucket})

        current_time_seconds = self._now_seconds()

        await self._clean_old_orders(current_time_seconds)
        await self._clean_old_busy_times(current_time_seconds)

        order = Order.from_input(order_input, current_time_seconds)
        await self.store.add(self.orders_key, order.order_time_seconds, encode_order(order))

        logger.debug(
            f"Stored order {order.order_id} at {order.order_time_seconds} (source={order.source.value})",
            extra={"bucket": self.bucket},
        )

        windows_cache: Dict[TimeWindow, List[Order]] = {}
        created: List[BusyPeriod] = []

        for rule in self._rule_set:
            matcher = RuleMatcher(rule)

            if not matcher.applies(order.order_time, self.timezone):
                continue

            time_window = calculate_time_window(
                order.order_time_seconds,
                rule.time_frame_seconds,
                self.timeframe_mode,
            )

            if time_window not in windows_cache:
                orders_in_window = await self._get_orders_in_window(time_window)
                windows_cache[time_window] = [o for o in orders_in_window if o.is_own_channel]

            match = matcher.evaluate(windows_cache[time_window])
            if match is None:
                continue

            busy_period = self._build_busy_period(order, rule, match)
            await self.store.add(self.busy_times_key, busy_period.end_time_seconds, encode_busy_period(busy_period))
            created.append(busy_period)

            logger.info(
                f"Busy period opened by order {order.order_id}: rule={rule.rule_id or '-'}, "
                f"threshold={match.threshold.type.value} {match.threshold.value}/{match.threshold.limit}, "
                f"until={busy_period.end_time.isoformat()}",
                extra={"bucket": self.bucket},
            )

        return created

    async def get_orders(self) -> List[Order]:
        """Get all retained orders in score order."""
        await self._clean_old_orders(self._now_seconds())

        entries = await self.store.range_all(self.orders_key)
        return [decode_order(value) for value, _ in entries]

    async def get_busy_times(self) -> List[BusyPeriod]:
        """Get unexpired busy periods sorted by start time."""
        await self._clean_old_busy_times(self._now_seconds())

        entries = await self.store.range_all(self.busy_times_key)
        busy_periods = [decode_busy_period(value) for value, _ in entries]
        return sorted(busy_periods, key=lambda busy_period: busy_period.start_time_seconds)

    async def get_orders_stats(self, start_time: datetime, end_time: datetime) -> List[OrderStat]:
        """Get id, time and source of orders between two instants (inclusive).

        Args:
            start_time: Range start
            end_time: Range end

        Returns:
            OrderStat list sorted by order time
        """
        await self._clean_old_orders(self._now_seconds())

        entries = await self.store.range_by_score(self.orders_key, to_seconds(start_time), to_seconds(end_time))

        stats = []
        for value, _ in entries:
            order = decode_order(value)
            stats.append(OrderStat(order_id=order.order_id, order_time=order.order_time, source=order.source))

        return sorted(stats, key=lambda stat: stat.order_time)

    async def validate_order_time(self, order_time: Union[datetime, int, float, None] = None) -> WaitPeriod:
        """Compute the wait for an order placed at ``order_time``.

        Args:
            order_time: Candidate instant (datetime or epoch seconds);
                defaults to now

        Returns:
            WaitPeriod with the cumulative wait in seconds
        """
        order_time_seconds = self._now_seconds() if order_time is None else to_seconds(order_time)
        busy_periods = await self.get_busy_times()

        wait_period = calculate_wait_period(busy_periods, order_time_seconds)

        if wait_period.wait_period_seconds:
            logger.debug(
                f"Order time {order_time_seconds} must wait {wait_period.wait_period_seconds}s",
                extra={"bucket": self.bucket},
            )

        return wait_period
