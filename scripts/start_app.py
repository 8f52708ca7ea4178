#!/usr/bin/env python3
"""Serve the API with uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from ubos.config import Settings
from ubos.util.logging import setup_logging
from ubos.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then hand over to uvicorn."""
    settings = Settings()

    # Before the app factory runs, so instrumentation has somewhere to report
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting UBOS API",
        environment=settings.environment,
        port=settings.port,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            "ubos.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_config=None,  # keep the root logger set up above
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
