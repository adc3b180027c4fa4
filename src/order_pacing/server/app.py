"""Pacing FastAPI application."""

from typing import Optional

from fastapi import FastAPI

from order_pacing.config.settings import settings
from order_pacing.core.logger import setup_logger
from order_pacing.rules.loader import load_rules_file
from order_pacing.server.routes import router, set_engine_registry
from order_pacing.services.engine_registry import EngineRegistry
from order_pacing.storage.redis_store import RedisTimeSeriesStore

logger = setup_logger(__name__)


def create_app(registry: Optional[EngineRegistry] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        registry: Pre-built registry; when omitted one is built on startup
            from settings (Redis store + rules file)

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Order Pacing",
        description="Detects busy periods from order volume and reports wait times",
        version="1.0.0",
    )

    if registry is not None:
        set_engine_registry(registry)

    @app.on_event("startup")
    async def startup():
        """Initialize store and engine registry on startup.

        Steps:
        1. Load default rules from the rules file (if configured)
        2. Initialize Redis store
        3. Initialize engine registry (validates rules)
        4. Set global registry instance
        """
        if registry is not None:
            app.state.store = None
            return

        try:
            logger.info("=" * 60)
            logger.info("Starting Order Pacing service...")
            logger.info("=" * 60)

            default_rules = load_rules_file(settings.rules_file) if settings.rules_file else []

            store = RedisTimeSeriesStore()
            app.state.store = store
            logger.info("✓ Redis store initialized")

            set_engine_registry(
                EngineRegistry(
                    store=store,
                    default_rules=default_rules,
                    timeframe_mode=settings.timeframe_mode,
                    timezone=settings.timezone,
                    allow_empty_rules=settings.allow_empty_rules,
                    key_prefix=settings.key_prefix,
                )
            )
            logger.info("✓ Engine registry initialized")

            logger.info("=" * 60)
            logger.info("Order Pacing service started successfully!")
            logger.info(f"Timeframe mode: {settings.timeframe_mode.value}, timezone: {settings.timezone}")
            logger.info("=" * 60)

        except Exception as e:
            logger.error(f"Failed to start service: {e}", exc_info=True)
            raise

    @app.on_event("shutdown")
    async def shutdown():
        """Close the Redis store."""
        logger.info("Shutting down Order Pacing service...")

        store = getattr(app.state, "store", None)
        if store is not None:
            await store.close()
            logger.info("✓ Redis store closed")

        set_engine_registry(None)
        logger.info("Shutdown completed")

    # Include routes
    app.include_router(router)

    return app


# Create app instance
app = create_app()
