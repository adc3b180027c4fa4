"""Pydantic models for windows, thresholds and busy periods."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from order_pacing.core.timeutils import ensure_aware, to_seconds


class TimeframeMode(str, Enum):
    """How a rule's window is positioned around an order's time."""

    BEFORE_ONLY = "before_only"
    AFTER_ONLY = "after_only"
    CENTERED = "centered"
    BEFORE_AND_AFTER = "before_and_after"


class ThresholdType(str, Enum):
    ORDERS = "orders"
    ITEMS = "items"
    AMOUNT = "amount"


class TimeWindow(BaseModel):
    """Inclusive window in epoch seconds."""

    start: int
    end: int

    class Config:
        frozen = True

    def contains(self, seconds: int) -> bool:
        return self.start <= seconds <= self.end


class Threshold(BaseModel):
    """Threshold a rule matched, with the observed value."""

    type: ThresholdType
    value: Union[int, float]
    limit: Union[int, float]
    category_ids: List[str] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class BusyTimeContext(BaseModel):
    """Aggregates over every order in the window at trigger time."""

    total_amount_cents: float = 0
    total_items: int = 0
    total_orders: int = 0
    category_ids: List[str] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class ThresholdMatch(BaseModel):
    """Result of a rule evaluation that exceeded a threshold."""

    threshold: Threshold
    context: BusyTimeContext

    class Config:
        frozen = True


class BusyPeriod(BaseModel):
    """Interval during which new orders are considered delayed."""

    start_time: datetime
    end_time: datetime
    order_time_seconds: int
    current_time_seconds: int
    busy_time_seconds: int
    busy_time_context: BusyTimeContext
    threshold: Threshold
    rule_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    @field_validator("start_time", "end_time")
    @classmethod
    def _times_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @property
    def start_time_seconds(self) -> int:
        return to_seconds(self.start_time)

    @property
    def end_time_seconds(self) -> int:
        return to_seconds(self.end_time)


class WaitPeriod(BaseModel):
    """Answer to "how long must an order placed now wait?"."""

    wait_period_seconds: int = 0
    # Never populated; kept for response compatibility.
    orders_in_window: int = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True
