"""Pydantic model for busy time rules.

Field checks live in ``order_pacing.rules.validators`` so that every
violation surfaces as a ``ConfigurationError`` naming the field.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from order_pacing.core.timeutils import minutes_to_seconds, time_string_to_minutes


class Rule(BaseModel):
    """A single busy time rule.

    A rule watches a window of ``time_frame_minutes`` around each order and,
    when the first configured threshold is met, opens a busy period of
    ``busy_time_minutes``. Scoping fields narrow which orders (categories)
    and which local days/times the rule covers.
    """

    rule_id: Optional[str] = None
    time_frame_minutes: Union[int, float]
    busy_time_minutes: Union[int, float]
    category_ids: List[str] = Field(default_factory=list)
    week_days: List[int] = Field(default_factory=list)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    max_orders: Optional[int] = None
    max_items: Optional[int] = None
    max_amount_cents: Optional[Union[int, float]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    @property
    def time_frame_seconds(self) -> int:
        return minutes_to_seconds(self.time_frame_minutes)

    @property
    def busy_time_seconds(self) -> int:
        return minutes_to_seconds(self.busy_time_minutes)

    @property
    def start_minutes(self) -> Optional[int]:
        if self.start_time is None:
            return None
        return time_string_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> Optional[int]:
        if self.end_time is None:
            return None
        return time_string_to_minutes(self.end_time)
