"""Pydantic models for order data."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from order_pacing.core.timeutils import ensure_aware, to_seconds


class OrderSource(str, Enum):
    """Channel an order was placed through.

    Only own-channel orders count toward opening busy periods.
    """

    OWN_CHANNEL = "own_channel"
    OTHER_CHANNEL = "other_channel"


class OrderItem(BaseModel):
    """Single line item of an order."""

    item_id: str
    category_id: Optional[str] = None
    quantity: int = Field(1, ge=0)
    amount_cents: float = Field(0, ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class OrderInput(BaseModel):
    """Order as supplied by the caller."""

    order_id: str
    items: List[OrderItem] = Field(default_factory=list)
    total_amount_cents: float = Field(0, ge=0)
    source: OrderSource = OrderSource.OWN_CHANNEL
    order_time: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    @field_validator("order_time")
    @classmethod
    def _order_time_aware(cls, value: datetime) -> datetime:
        """Naive order times are taken as UTC."""
        return ensure_aware(value)


class Order(OrderInput):
    """Order as stored, with the engine-derived time fields."""

    order_time_seconds: int
    current_time_seconds: int

    @classmethod
    def from_input(cls, order: OrderInput, current_time_seconds: int) -> "Order":
        """Derive a stored order from caller input and the ingestion instant."""
        return cls(
            order_id=order.order_id,
            items=order.items,
            total_amount_cents=order.total_amount_cents,
            source=order.source,
            order_time=order.order_time,
            order_time_seconds=to_seconds(order.order_time),
            current_time_seconds=current_time_seconds,
        )

    @property
    def is_own_channel(self) -> bool:
        return self.source == OrderSource.OWN_CHANNEL


class OrderStat(BaseModel):
    """Lightweight order view returned by stats queries."""

    order_id: str
    order_time: datetime
    source: OrderSource

    class Config:
        alias_generator = to_camel
        populate_by_name = True
