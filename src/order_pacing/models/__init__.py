"""Data models for orders, rules and busy periods."""

from order_pacing.models.busy_time import (
    BusyPeriod,
    BusyTimeContext,
    Threshold,
    ThresholdMatch,
    ThresholdType,
    TimeframeMode,
    TimeWindow,
    WaitPeriod,
)
from order_pacing.models.order import Order, OrderInput, OrderItem, OrderSource, OrderStat
from order_pacing.models.rule import Rule

__all__ = [
    "BusyPeriod",
    "BusyTimeContext",
    "Order",
    "OrderInput",
    "OrderItem",
    "OrderSource",
    "OrderStat",
    "Rule",
    "Threshold",
    "ThresholdMatch",
    "ThresholdType",
    "TimeframeMode",
    "TimeWindow",
    "WaitPeriod",
]
