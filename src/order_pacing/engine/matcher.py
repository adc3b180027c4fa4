"""Per-rule applicability and threshold evaluation."""

from datetime import datetime
from typing import Optional, Sequence, Union
from zoneinfo import ZoneInfo

from order_pacing.core.logger import setup_logger
from order_pacing.core.timeutils import ensure_aware, resolve_timezone
from order_pacing.models.busy_time import (
    BusyTimeContext,
    Threshold,
    ThresholdMatch,
    ThresholdType,
)
from order_pacing.models.order import Order
from order_pacing.models.rule import Rule

logger = setup_logger(__name__)


def local_week_day(value: datetime) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return value.isoweekday() % 7


class RuleMatcher:
    """Decides whether a rule covers an order and whether it fires.

    Threshold priority is fixed: orders, then items, then amount. Only the
    first threshold met is reported.
    """

    def __init__(self, rule: Rule):
        self.rule = rule

    def applies(self, order_time: datetime, timezone: Union[str, ZoneInfo]) -> bool:
        """Check weekday and time-of-day scoping in the bucket's timezone.

        Args:
            order_time: Order instant
            timezone: IANA timezone name or ZoneInfo

        Returns:
            False when the local weekday is excluded, or the local time of
            day (minutes) is before start_time or after end_time.
        """
        zone = timezone if isinstance(timezone, ZoneInfo) else resolve_timezone(timezone)
        local_time = ensure_aware(order_time).astimezone(zone)

        if self.rule.week_days and local_week_day(local_time) not in self.rule.week_days:
            return False

        order_minutes = local_time.hour * 60 + local_time.minute

        start_minutes = self.rule.start_minutes
        if start_minutes is not None and order_minutes < start_minutes:
            return False

        end_minutes = self.rule.end_minutes
        if end_minutes is not None and order_minutes > end_minutes:
            return False

        return True

    def evaluate(self, orders: Sequence[Order]) -> Optional[ThresholdMatch]:
        """Evaluate the rule's thresholds against the windowed orders.

        Args:
            orders: Orders in the rule's window (already source-filtered)

        Returns:
            ThresholdMatch with the first threshold met and the all-orders
            context, or None if no threshold is met
        """
        all_total_items = sum(item.quantity for order in orders for item in order.items)
        all_total_amount_cents = sum(order.total_amount_cents for order in orders)
        all_category_ids = sorted(
            {
                item.category_id
                for order in orders
                for item in order.items
                if item.category_id is not None
            }
        )

        context = BusyTimeContext(
            total_amount_cents=all_total_amount_cents,
            total_items=all_total_items,
            total_orders=len(orders),
            category_ids=all_category_ids,
        )

        if self.rule.category_ids:
            scoped = set(self.rule.category_ids)
            matched_category_ids = set()
            total_orders = 0
            total_items = 0
            total_amount_cents = 0.0

            for order in orders:
                matching_items = [item for item in order.items if item.category_id in scoped]
                if not matching_items:
                    continue

                total_orders += 1
                total_items += sum(item.quantity for item in matching_items)
                total_amount_cents += sum(item.amount_cents for item in matching_items)
                matched_category_ids.update(item.category_id for item in matching_items)

            category_ids = sorted(matched_category_ids)
        else:
            total_orders = len(orders)
            total_items = all_total_items
            total_amount_cents = all_total_amount_cents
            category_ids = all_category_ids

        checks = (
            (ThresholdType.ORDERS, total_orders, self.rule.max_orders),
            (ThresholdType.ITEMS, total_items, self.rule.max_items),
            (ThresholdType.AMOUNT, total_amount_cents, self.rule.max_amount_cents),
        )

        for threshold_type, value, limit in checks:
            if limit is not None and limit > 0 and value >= limit:
                return ThresholdMatch(
                    threshold=Threshold(
                        type=threshold_type,
                        value=value,
                        limit=limit,
                        category_ids=category_ids,
                    ),
                    context=context,
                )

        logger.debug(
            f"Rule {self.rule.rule_id or '-'} not exceeded: orders={total_orders}, "
            f"items={total_items}, amount={total_amount_cents}"
        )
        return None
