"""Storage module - Time series store and record codec."""

from order_pacing.storage.base import TimeSeriesStore
from order_pacing.storage.codec import (
    decode_busy_period,
    decode_order,
    encode_busy_period,
    encode_order,
)

__all__ = [
    "TimeSeriesStore",
    "decode_busy_period",
    "decode_order",
    "encode_busy_period",
    "encode_order",
]
