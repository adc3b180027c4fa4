"""Pacing engine - windows, rule matching and wait calculation."""

from order_pacing.engine.matcher import RuleMatcher
from order_pacing.engine.pacing import PacingEngine
from order_pacing.engine.wait import calculate_wait_period
from order_pacing.engine.windows import calculate_time_window

__all__ = ["PacingEngine", "RuleMatcher", "calculate_time_window", "calculate_wait_period"]
