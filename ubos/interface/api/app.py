"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ubos.config import Settings
from ubos.domain.service import EmailDispatcher
from ubos.interface.api.routes import health, invitations
from ubos.interface.error import register_error_handlers
from ubos.util.di.container import create_container, setup_di
from ubos.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the API around a DI container.

    Logfire is configured by the launching script, not here.

    Args:
        container: DI container, production container when omitted

    Returns:
        Configured application
    """
    settings = Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        # Let queued invitation emails finish before tearing down
        dispatcher = await container.get(EmailDispatcher)
        if dispatcher.in_flight:
            logfire.info("Draining invitation emails", pending=dispatcher.in_flight)
        await dispatcher.drain()
        await container.close()

    app_instance = FastAPI(
        title="UBOS API",
        description="Organization invitations and role onboarding",
        version="0.1.0",
        lifespan=lifespan,
    )
    instrument_fastapi(app_instance)

    # The web app sends the auth_token cookie cross-origin
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
        max_age=600,
    )

    setup_di(app_instance, container)
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(invitations.router)

    return app_instance
