"""Core module - Logging, errors and time helpers."""

from order_pacing.core.errors import ConfigurationError, PacingError
from order_pacing.core.logger import setup_logger

__all__ = ["setup_logger", "ConfigurationError", "PacingError"]
