"""Exception types raised by the pacing engine.

Store failures are not wrapped: errors raised by the Redis client
(``redis.exceptions.RedisError`` and subclasses) reach the caller as-is.
"""

from typing import Optional


class PacingError(Exception):
    """Base class for pacing engine errors."""


class ConfigurationError(PacingError, ValueError):
    """Invalid engine or rule configuration.

    Raised synchronously while building a rule set or an engine, never
    during ingestion. Not retryable.

    Attributes:
        field: Name of the offending configuration field, when known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
