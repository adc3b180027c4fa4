"""Wait-time calculation over stored busy periods."""

from typing import Sequence

from order_pacing.config.constants import WAIT_END_OFFSET_SECONDS
from order_pacing.models.busy_time import BusyPeriod, WaitPeriod


def calculate_wait_period(busy_periods: Sequence[BusyPeriod], order_time_seconds: int) -> WaitPeriod:
    """Compute how long an order at ``order_time_seconds`` must wait.

    Single left-to-right sweep over periods sorted by start time. While the
    pushed-back order time lands inside a period, the wait is moved to one
    second past that period's end (measured from the requested instant).
    The sweep stops at the first period that does not contain it.

    Overlapping or out-of-order periods are not merged; an earlier break can
    under-report the wait in that case.

    Args:
        busy_periods: Unexpired busy periods, ascending by start time
        order_time_seconds: Candidate order instant in epoch seconds

    Returns:
        WaitPeriod with the cumulative wait in seconds
    """
    wait_period_seconds = 0

    for busy_period in busy_periods:
        probe = order_time_seconds + wait_period_seconds

        if busy_period.start_time_seconds <= probe <= busy_period.end_time_seconds:
            wait_period_seconds = (
                busy_period.end_time_seconds + WAIT_END_OFFSET_SECONDS - order_time_seconds
            )
            continue

        break

    return WaitPeriod(wait_period_seconds=wait_period_seconds, orders_in_window=0)
