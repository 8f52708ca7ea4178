"""Async engine, session factory and the per-request transaction."""

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ubos.config import Settings
from ubos.domain.error import DomainError


def create_engine(settings: Settings) -> AsyncEngine:
    """Engine for ``settings.database_url``, echoing SQL in debug mode."""
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories flush explicitly; returned entities are plain models
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


def should_commit(error: BaseException | None) -> bool:
    """Whether a unit of work that ended with ``error`` keeps its writes.

    Domain errors are business outcomes, such as an invitation found
    overdue and flipped to expired, so their writes persist. Anything
    else is a fault and rolls back.
    """
    return error is None or isinstance(error, DomainError)


async def finish_session(session: AsyncSession, error: BaseException | None) -> bool:
    """Commit or roll back ``session`` for a unit of work ending with ``error``.

    Returns:
        True when the transaction was committed
    """
    if should_commit(error):
        await session.commit()
        return True

    logfire.warn("Session rollback", error_type=type(error).__name__)
    await session.rollback()
    return False
