"""Pacing service entry point."""

import uvicorn

from order_pacing.config.settings import settings


def main():
    """Run the pacing service."""
    uvicorn.run(
        "order_pacing.server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
