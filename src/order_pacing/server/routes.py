"""Pacing API routes."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from redis.exceptions import RedisError

from order_pacing.core.errors import ConfigurationError
from order_pacing.core.logger import setup_logger
from order_pacing.engine.pacing import PacingEngine
from order_pacing.models.busy_time import BusyPeriod, WaitPeriod
from order_pacing.models.order import Order, OrderInput, OrderStat
from order_pacing.models.rule import Rule
from order_pacing.services.engine_registry import EngineRegistry

logger = setup_logger(__name__)
router = APIRouter()

# Global registry (initialized in app.py on startup)
engine_registry: Optional[EngineRegistry] = None


def set_engine_registry(registry: Optional[EngineRegistry]):
    """Set the global engine registry instance.

    Called by app.py during startup event.

    Args:
        registry: Initialized EngineRegistry instance
    """
    global engine_registry
    engine_registry = registry


def _get_engine(bucket: str) -> PacingEngine:
    if not engine_registry:
        logger.error("Engine registry not initialized")
        raise HTTPException(status_code=503, detail="Engine registry not initialized")
    return engine_registry.get_engine(bucket)


def _store_unavailable(bucket: str, e: RedisError) -> HTTPException:
    logger.error(f"Store error for bucket {bucket}: {e}", exc_info=True, extra={"bucket": bucket})
    return HTTPException(status_code=503, detail=f"Store error: {e}")


@router.post("/buckets/{bucket}/orders", response_model=List[BusyPeriod])
async def add_order(bucket: str, order: OrderInput) -> List[BusyPeriod]:
    """Ingest an order.

    Returns:
        Busy periods opened by this order (empty if no rule fired)
    """
    engine = _get_engine(bucket)
    try:
        return await engine.add(order)
    except RedisError as e:
        raise _store_unavailable(bucket, e)


@router.get("/buckets/{bucket}/orders", response_model=List[Order])
async def get_orders(bucket: str) -> List[Order]:
    engine = _get_engine(bucket)
    try:
        return await engine.get_orders()
    except RedisError as e:
        raise _store_unavailable(bucket, e)


@router.get("/buckets/{bucket}/orders/stats", response_model=List[OrderStat])
async def get_orders_stats(
    bucket: str,
    start: datetime = Query(..., description="Range start (inclusive)"),
    end: datetime = Query(..., description="Range end (inclusive)"),
) -> List[OrderStat]:
    engine = _get_engine(bucket)
    try:
        return await engine.get_orders_stats(start, end)
    except RedisError as e:
        raise _store_unavailable(bucket, e)


@router.get("/buckets/{bucket}/busy-times", response_model=List[BusyPeriod])
async def get_busy_times(bucket: str) -> List[BusyPeriod]:
    engine = _get_engine(bucket)
    try:
        return await engine.get_busy_times()
    except RedisError as e:
        raise _store_unavailable(bucket, e)


@router.get("/buckets/{bucket}/wait-time", response_model=WaitPeriod)
async def get_wait_time(
    bucket: str,
    order_time: Optional[datetime] = Query(None, description="Candidate order time (default now)"),
) -> WaitPeriod:
    """Wait before an order placed at ``order_time`` clears busy periods."""
    engine = _get_engine(bucket)
    try:
        return await engine.validate_order_time(order_time)
    except RedisError as e:
        raise _store_unavailable(bucket, e)


@router.put("/buckets/{bucket}/rules", response_model=List[Rule])
async def set_rules(bucket: str, rules: List[Dict[str, Any]]) -> List[Rule]:
    """Replace a bucket's rules wholesale.

    Returns:
        422 with the violated field if any rule is invalid
    """
    if not engine_registry:
        raise HTTPException(status_code=503, detail="Engine registry not initialized")

    try:
        rule_set = engine_registry.set_rules(bucket, rules)
    except ConfigurationError as e:
        logger.warning(f"Rejected rules for bucket {bucket}: {e}", extra={"bucket": bucket})
        raise HTTPException(status_code=422, detail={"field": e.field, "message": str(e)})

    return list(rule_set)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        {
            "status": "healthy|degraded|unhealthy",
            "service": "order-pacing",
            "store": "ok|error"
        }
    """
    if not engine_registry:
        return {
            "status": "unhealthy",
            "service": "order-pacing",
            "error": "Engine registry not initialized",
        }

    store_ok = await engine_registry.store.health_check()

    return {
        "status": "healthy" if store_ok else "degraded",
        "service": "order-pacing",
        "store": "ok" if store_ok else "error",
        "custom_rule_buckets": len(engine_registry.buckets()),
    }
