"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ubos.config import Settings
from ubos.domain.repository import (
    InvitationRepository,
    RoleAssignmentRepository,
    RoleRepository,
    UserRepository,
)
from ubos.domain.service import EmailOutbox
from ubos.persistence.database import (
    create_engine,
    create_session_factory,
    finish_session,
)
from ubos.persistence.repository import (
    PostgresInvitationRepository,
    PostgresRoleAssignmentRepository,
    PostgresRoleRepository,
    PostgresUserRepository,
)
from ubos.util.di.base import ProviderBase
from ubos.util.observability import instrument_sqlalchemy


async def _end_request(
    session: AsyncSession, error: BaseException | None, outbox: EmailOutbox
) -> None:
    try:
        committed = await finish_session(session, error)
    except Exception:
        outbox.discard()
        raise
    if not committed:
        outbox.discard()


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL repositories sharing one transaction per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        outbox: EmailOutbox,
    ) -> AsyncIterator[AsyncSession]:
        """Session committed or rolled back when the request scope closes.

        dishka sends the exception that closed the scope (or None) into the
        generator. Depending on the outbox makes it outlive the session, so
        queued emails are released only after the commit succeeds.
        """
        async with session_factory() as session:
            try:
                error = yield session
            except BaseException as e:
                await _end_request(session, e, outbox)
                raise
            await _end_request(session, error, outbox)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_role_repository(self, session: AsyncSession) -> RoleRepository:
        return PostgresRoleRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_role_assignment_repository(
        self, session: AsyncSession
    ) -> RoleAssignmentRepository:
        return PostgresRoleAssignmentRepository(session)
