"""Order pacing: windowed order-volume thresholds and busy-period wait times."""

from order_pacing.core.errors import ConfigurationError, PacingError
from order_pacing.engine.pacing import PacingEngine
from order_pacing.models import (
    BusyPeriod,
    BusyTimeContext,
    Order,
    OrderInput,
    OrderItem,
    OrderSource,
    OrderStat,
    Rule,
    Threshold,
    TimeframeMode,
    WaitPeriod,
)
from order_pacing.rules.ruleset import RuleSet

__version__ = "1.0.0"

__all__ = [
    "BusyPeriod",
    "BusyTimeContext",
    "ConfigurationError",
    "Order",
    "OrderInput",
    "OrderItem",
    "OrderSource",
    "OrderStat",
    "PacingEngine",
    "PacingError",
    "Rule",
    "RuleSet",
    "Threshold",
    "TimeframeMode",
    "WaitPeriod",
]
