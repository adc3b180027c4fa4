"""JSON encoding of stored records.

Records carry their own ISO-8601 instants and integer second fields, so
decoding never depends on the store score.
"""

from typing import Union

from order_pacing.models.busy_time import BusyPeriod
from order_pacing.models.order import Order


def encode_order(order: Order) -> str:
    return order.model_dump_json()


def decode_order(value: Union[str, bytes]) -> Order:
    return Order.model_validate_json(value)


def encode_busy_period(busy_period: BusyPeriod) -> str:
    return busy_period.model_dump_json()


def decode_busy_period(value: Union[str, bytes]) -> BusyPeriod:
    return BusyPeriod.model_validate_json(value)
