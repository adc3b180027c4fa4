"""
Centralized application constants.

This file acts as the single point of truth for pacing constants
shared across the engine, the store and the HTTP service.
"""

# ==============================================================================
# RETENTION
# ==============================================================================

# Orders are kept for 7 days relative to "now" on every read and write
ORDERS_RETENTION_SECONDS = 604800

# ==============================================================================
# STORE KEYS
# ==============================================================================

# Sorted-set keys are "<prefix><bucket>", e.g. "orders:store-1:loc-7"
ORDERS_KEY_PREFIX = "orders:"
BUSY_TIMES_KEY_PREFIX = "busytimes:"

# ==============================================================================
# RULE SCOPING
# ==============================================================================

# Weekday numbering: 0 = Sunday ... 6 = Saturday
MIN_WEEK_DAY = 0
MAX_WEEK_DAY = 6

DEFAULT_TIMEZONE = "UTC"

# ==============================================================================
# WAIT CALCULATION
# ==============================================================================

# Seconds added past a busy period's end before the order can be accepted
WAIT_END_OFFSET_SECONDS = 1
