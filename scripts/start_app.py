#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from outpost.config import Settings
from outpost.util.logging import setup_logging
from outpost.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    # Configure Logfire before the app factory instruments anything
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Outpost API",
            port=settings.port,
            environment=settings.environment,
            base_url=settings.api.base_url,
        )

        uvicorn.run(
            "outpost.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
