"""Services module - Engine registry."""

from order_pacing.services.engine_registry import EngineRegistry

__all__ = ["EngineRegistry"]
