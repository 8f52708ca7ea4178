"""Unit tests for the request session and email outbox lifecycle.

Drives the production session provider through a dishka container, with a
session factory that records commits and rollbacks instead of talking to
PostgreSQL.
"""

from uuid import uuid4

import pytest
from dishka import Provider, Scope, make_async_container, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ubos.domain.error import InvitationExpiredError
from ubos.domain.model import Invitation
from ubos.domain.service import EmailDispatcher, EmailOutbox, InvitationMailer
from ubos.domain.value import RoleId, UserId
from ubos.util.di import ProdConfigProvider, ProdDomainProvider, ProdPersistenceProvider
from tests.conftest import make_invitation, new_organization_id
from tests.di import MockCredentialProvider, MockEmailProvider


class RecordingSession:
    """Stands in for AsyncSession, noting how the transaction ended."""

    def __init__(self, events: list[str], fail_commit: bool = False) -> None:
        self.events = events
        self.fail_commit = fail_commit

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.events.append("close")

    async def commit(self) -> None:
        if self.fail_commit:
            raise ConnectionError("connection lost during commit")
        self.events.append("commit")

    async def rollback(self) -> None:
        self.events.append("rollback")


class RecordingDispatcher(EmailDispatcher):
    """Notes dispatches in the shared event log before delivering."""

    def __init__(self, mailer: InvitationMailer, events: list[str]) -> None:
        super().__init__(mailer)
        self.events = events

    def dispatch(self, invitation: Invitation) -> None:
        self.events.append("dispatch")
        super().dispatch(invitation)


class RecordingProvider(Provider):
    """Replaces the session factory and dispatcher with recording fakes."""

    def __init__(self, fail_commit: bool = False) -> None:
        super().__init__()
        self.events: list[str] = []
        self.fail_commit = fail_commit

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: RecordingSession(self.events, self.fail_commit)  # type: ignore[return-value]

    @provide(scope=Scope.APP)
    def get_email_dispatcher(self, mailer: InvitationMailer) -> EmailDispatcher:
        return RecordingDispatcher(mailer, self.events)


def _build(fail_commit: bool = False):
    recording = RecordingProvider(fail_commit)
    container = make_async_container(
        ProdConfigProvider(),
        ProdDomainProvider(),
        ProdPersistenceProvider(),
        MockEmailProvider(),
        MockCredentialProvider(),
        recording,
    )
    return container, recording.events


async def _close(container) -> None:
    await (await container.get(EmailDispatcher)).drain()
    await container.close()


async def _queue_email(request_container) -> None:
    """Open the session and hold one invitation email in the outbox."""
    await request_container.get(AsyncSession)
    outbox = await request_container.get(EmailOutbox)
    outbox.add(
        make_invitation(new_organization_id(), RoleId(uuid4()), UserId(uuid4()))
    )


class TestRequestSession:
    """Tests for how the request scope ends the transaction."""

    @pytest.mark.asyncio
    async def test_clean_exit_commits_then_sends(self):
        # Arrange
        container, events = _build()

        # Act
        async with container() as request_container:
            await _queue_email(request_container)
        await _close(container)

        # Assert
        assert events == ["commit", "close", "dispatch"]

    @pytest.mark.asyncio
    async def test_unexpected_error_rolls_back_and_drops_email(self):
        """A fault after writes must not leave them committed."""
        # Arrange
        container, events = _build()

        # Act
        with pytest.raises(RuntimeError, match="binder crashed"):
            async with container() as request_container:
                await _queue_email(request_container)
                raise RuntimeError("binder crashed")
        await _close(container)

        # Assert
        assert events == ["rollback", "close"]

    @pytest.mark.asyncio
    async def test_domain_error_keeps_writes(self):
        """Domain errors are outcomes, e.g. an overdue invitation marked expired."""
        # Arrange
        container, events = _build()

        # Act
        with pytest.raises(InvitationExpiredError):
            async with container() as request_container:
                await _queue_email(request_container)
                raise InvitationExpiredError()
        await _close(container)

        # Assert
        assert events == ["commit", "close", "dispatch"]

    @pytest.mark.asyncio
    async def test_failed_commit_drops_email(self):
        # Arrange
        container, events = _build(fail_commit=True)

        # Act
        with pytest.raises(Exception):
            async with container() as request_container:
                await _queue_email(request_container)
        await _close(container)

        # Assert
        assert "dispatch" not in events
        assert "commit" not in events
