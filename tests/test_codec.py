"""
Unit tests for stored record encoding.
"""
import json
from datetime import datetime, timezone

from conftest import NOW, NOW_SECONDS
from order_pacing.core.timeutils import seconds_to_datetime
from order_pacing.models.busy_time import BusyPeriod, BusyTimeContext, Threshold, ThresholdType
from order_pacing.models.order import Order, OrderItem, OrderSource
from order_pacing.storage.codec import (
    decode_busy_period,
    decode_order,
    encode_busy_period,
    encode_order,
)


def _order(**overrides) -> Order:
    fields = dict(
        order_id="A-100",
        items=[
            OrderItem(item_id="margherita", category_id="pizza", quantity=2, amount_cents=1799.5),
            OrderItem(item_id="water", quantity=1, amount_cents=0),
        ],
        total_amount_cents=1799.5,
        source=OrderSource.OTHER_CHANNEL,
        order_time=NOW,
        order_time_seconds=NOW_SECONDS,
        current_time_seconds=NOW_SECONDS + 3,
    )
    fields.update(overrides)
    return Order(**fields)


class TestOrderCodec:
    def test_round_trip(self):
        order = _order()
        assert decode_order(encode_order(order)) == order

    def test_empty_items_and_zero_values(self):
        order = _order(items=[], total_amount_cents=0)
        decoded = decode_order(encode_order(order))
        assert decoded == order
        assert decoded.items == []

    def test_encoding_is_stable(self):
        encoded = encode_order(_order())
        assert encode_order(decode_order(encoded)) == encoded

    def test_sub_second_order_time_survives(self):
        precise = datetime(2024, 3, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        order = _order(order_time=precise, order_time_seconds=int(precise.timestamp()))

        decoded = decode_order(encode_order(order))
        assert decoded.order_time == precise
        assert decoded.order_time.microsecond == 123456

    def test_decodes_bytes(self):
        order = _order()
        assert decode_order(encode_order(order).encode("utf-8")) == order

    def test_encoding_is_self_describing_json(self):
        payload = json.loads(encode_order(_order()))
        assert payload["order_id"] == "A-100"
        assert payload["source"] == "other_channel"
        assert payload["items"][0]["category_id"] == "pizza"


class TestBusyPeriodCodec:
    def test_round_trip(self):
        busy_period = BusyPeriod(
            start_time=seconds_to_datetime(NOW_SECONDS),
            end_time=seconds_to_datetime(NOW_SECONDS + 600),
            order_time_seconds=NOW_SECONDS,
            current_time_seconds=NOW_SECONDS,
            busy_time_seconds=600,
            busy_time_context=BusyTimeContext(
                total_amount_cents=2500.25, total_items=4, total_orders=2, category_ids=["pizza"]
            ),
            threshold=Threshold(type=ThresholdType.AMOUNT, value=2500.25, limit=2000, category_ids=["pizza"]),
            rule_id="evening",
        )

        decoded = decode_busy_period(encode_busy_period(busy_period))

        assert decoded == busy_period
        assert decoded.end_time_seconds == NOW_SECONDS + 600
        assert decoded.threshold.limit == 2000

    def test_zero_context(self):
        busy_period = BusyPeriod(
            start_time=seconds_to_datetime(0),
            end_time=seconds_to_datetime(0),
            order_time_seconds=0,
            current_time_seconds=0,
            busy_time_seconds=0,
            busy_time_context=BusyTimeContext(),
            threshold=Threshold(type=ThresholdType.ORDERS, value=0, limit=1),
        )
        assert decode_busy_period(encode_busy_period(busy_period)) == busy_period
