#!/usr/bin/env python3
"""Expire overdue pending invitations.

Meant to run periodically (cron or a scheduled job). Acceptance checks
expiry on its own, so this only keeps stored statuses and quota counts
current.
"""

import asyncio
import sys

import logfire

from ubos.application.usecase.invitation import (
    ExpireInvitationsRequest,
    ExpireInvitationsUseCase,
)
from ubos.config import Settings
from ubos.util.di.container import create_container
from ubos.util.logging import setup_logging
from ubos.util.observability import configure_logfire


async def expire() -> int:
    """Run one expiry sweep inside a request-scoped unit of work."""
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ExpireInvitationsUseCase)
            response = await use_case.execute(ExpireInvitationsRequest())
        return response.expired
    finally:
        await container.close()


def main() -> int:
    """Run the sweep and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info("Starting invitation expiry sweep")
        count = asyncio.run(expire())
        logfire.info("Invitation expiry sweep completed", expired=count)
        return 0

    except Exception as e:
        logfire.error(
            "Invitation expiry sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
