"""Invitation email delivery.

Delivery is fire-and-forget from the lifecycle's point of view: sending
runs in a background task, and a failed send is logged, never raised to
the caller that created or resent the invitation.
"""

import asyncio
from datetime import datetime

import logfire

from ubos.domain.model import Invitation
from ubos.domain.value import EmailAddress, InvitationId, InvitationToken

from .base import Service


class InvitationMailer:
    """Email collaborator interface."""

    async def send(
        self,
        invitation_id: InvitationId,
        email: EmailAddress,
        token: InvitationToken,
        expires_at: datetime,
    ) -> None:
        """Deliver an invitation email carrying the accept link.

        Args:
            invitation_id: Invitation being announced
            email: Recipient
            token: Token to embed in the accept link
            expires_at: When the link stops working
        """
        raise NotImplementedError


class EmailDispatcher(Service):
    """Runs mailer calls in the background and keeps them alive until done."""

    def __init__(self, mailer: InvitationMailer) -> None:
        """Initialize email dispatcher.

        Args:
            mailer: Email collaborator
        """
        self.mailer = mailer
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        """Number of deliveries not yet finished."""
        return len(self._tasks)

    def dispatch(self, invitation: Invitation) -> None:
        """Schedule delivery of ``invitation`` without waiting for it.

        Args:
            invitation: Invitation whose current token should be emailed
        """
        task = asyncio.get_running_loop().create_task(self._deliver(invitation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for every in-flight delivery."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _deliver(self, invitation: Invitation) -> None:
        with logfire.span(
            "email_dispatcher.deliver", invitation_id=str(invitation.id)
        ):
            try:
                await self.mailer.send(
                    invitation.id,
                    invitation.email,
                    invitation.token,
                    invitation.expires_at,
                )
                logfire.info(
                    "Invitation email sent",
                    invitation_id=str(invitation.id),
                    token=invitation.token.masked,
                )
            except Exception as e:
                # Delivery failure never rolls back the invitation
                logfire.error(
                    "Invitation email delivery failed",
                    invitation_id=str(invitation.id),
                    error=str(e),
                    error_type=type(e).__name__,
                )


class EmailOutbox:
    """Invitation emails held back until the request's transaction commits.

    One outbox lives per request. ``flush`` hands everything to the
    dispatcher once the invitations are durable; ``discard`` drops them
    when the transaction rolls back, so no email carries a token that was
    never stored.
    """

    def __init__(self, dispatcher: EmailDispatcher) -> None:
        self.dispatcher = dispatcher
        self._pending: list[Invitation] = []

    @property
    def pending(self) -> list[Invitation]:
        return list(self._pending)

    def add(self, invitation: Invitation) -> None:
        self._pending.append(invitation)

    def flush(self) -> None:
        for invitation in self._pending:
            self.dispatcher.dispatch(invitation)
        self._pending.clear()

    def discard(self) -> None:
        if self._pending:
            logfire.warn(
                "Invitation emails dropped after rollback",
                invitation_ids=[str(i.id) for i in self._pending],
            )
        self._pending.clear()
