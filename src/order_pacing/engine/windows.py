"""Time window construction around an order's time."""

from order_pacing.models.busy_time import TimeframeMode, TimeWindow


def calculate_time_window(
    order_time_seconds: int,
    time_frame_seconds: int,
    timeframe_mode: TimeframeMode = TimeframeMode.BEFORE_ONLY,
) -> TimeWindow:
    """Position a rule's window relative to an order.

    Args:
        order_time_seconds: Order time in epoch seconds (T)
        time_frame_seconds: Rule window width in seconds (F)
        timeframe_mode: Engine-wide positioning mode

    Returns:
        Inclusive TimeWindow:
            - before_only: [T-F, T]
            - after_only: [T, T+F]
            - centered: [T-F//2, T+F//2]
            - before_and_after: [T-F, T+F] (full width on each side)
    """
    mode = TimeframeMode(timeframe_mode)

    if mode == TimeframeMode.CENTERED:
        half = time_frame_seconds // 2
        return TimeWindow(start=order_time_seconds - half, end=order_time_seconds + half)

    if mode == TimeframeMode.AFTER_ONLY:
        return TimeWindow(start=order_time_seconds, end=order_time_seconds + time_frame_seconds)

    if mode == TimeframeMode.BEFORE_AND_AFTER:
        return TimeWindow(
            start=order_time_seconds - time_frame_seconds,
            end=order_time_seconds + time_frame_seconds,
        )

    return TimeWindow(start=order_time_seconds - time_frame_seconds, end=order_time_seconds)
