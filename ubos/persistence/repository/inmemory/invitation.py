"""In-memory invitation repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional

from ubos.domain.error import ConflictError
from ubos.domain.model import Invitation, InvitationStats
from ubos.domain.repository import InvitationRepository
from ubos.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    UserId,
)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    Enforces the same uniqueness rules as the database schema. Reads yield
    to the event loop so concurrent callers interleave the way they would
    against a real database.
    """

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(
        self, organization_id: OrganizationId, invitation_id: InvitationId
    ) -> Optional[Invitation]:
        """Find an invitation by ID within its organization."""
        await asyncio.sleep(0)
        invitation = self._invitations.get(invitation_id)
        if invitation and invitation.organization_id == organization_id:
            return invitation
        return None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        await asyncio.sleep(0)
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_pending_by_email(
        self, organization_id: OrganizationId, email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the pending invitation for an email, ignoring case."""
        await asyncio.sleep(0)
        return self._pending_for(organization_id, email)

    async def add(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Raises:
            ConflictError: If the token or the pending email is already taken
        """
        if self._token_taken(invitation.token):
            raise ConflictError("Invitation token already in use")
        if invitation.status is InvitationStatus.PENDING and self._pending_for(
            invitation.organization_id, invitation.email
        ):
            raise ConflictError("A pending invitation for this email already exists")

        self._invitations[invitation.id] = invitation
        return invitation

    async def replace_token(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        updated_at: datetime,
    ) -> Optional[Invitation]:
        """Swap in a new token and expiry while the invitation is pending."""
        invitation = self._invitations.get(invitation_id)
        if not invitation or invitation.status is not InvitationStatus.PENDING:
            return None
        if self._token_taken(token):
            raise ConflictError("Invitation token already in use")

        return self._store(
            invitation,
            token=token,
            expires_at=expires_at,
            updated_at=updated_at,
        )

    async def transition_status(
        self,
        invitation_id: InvitationId,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
        updated_at: datetime,
        valid_at: datetime | None = None,
        token: InvitationToken | None = None,
    ) -> Optional[Invitation]:
        """Compare-and-swap the status of one invitation."""
        invitation = self._invitations.get(invitation_id)
        if not invitation or invitation.status is not from_status:
            return None
        if valid_at is not None and invitation.expires_at <= valid_at:
            return None
        if token is not None and invitation.token != token:
            return None

        return self._store(invitation, status=to_status, updated_at=updated_at)

    async def record_acceptance(
        self,
        invitation_id: InvitationId,
        accepted_by_id: UserId,
        accepted_at: datetime,
    ) -> Invitation:
        """Record the accepting user on an invitation already claimed."""
        invitation = self._invitations[invitation_id]
        return self._store(
            invitation,
            accepted_by_id=accepted_by_id,
            accepted_at=accepted_at,
            updated_at=accepted_at,
        )

    async def expire_overdue(self, now: datetime) -> int:
        """Expire every pending invitation whose window has closed."""
        overdue = [
            invitation
            for invitation in self._invitations.values()
            if invitation.status is InvitationStatus.PENDING
            and invitation.expires_at <= now
        ]
        for invitation in overdue:
            self._store(invitation, status=InvitationStatus.EXPIRED, updated_at=now)
        return len(overdue)

    async def count_by_organization(
        self, organization_id: OrganizationId, status: InvitationStatus | None = None
    ) -> int:
        """Count invitations in an organization."""
        await asyncio.sleep(0)
        return len(self._filter(organization_id, status))

    async def find_by_organization(
        self,
        organization_id: OrganizationId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations in an organization, newest first."""
        invitations = sorted(
            self._filter(organization_id, status),
            key=lambda i: i.created_at,
            reverse=True,
        )
        return invitations[offset : offset + limit]

    async def stats_by_organization(
        self, organization_id: OrganizationId
    ) -> InvitationStats:
        """Count invitations per status for an organization."""
        invitations = self._filter(organization_id, None)
        return InvitationStats(
            pending=sum(i.status is InvitationStatus.PENDING for i in invitations),
            accepted=sum(i.status is InvitationStatus.ACCEPTED for i in invitations),
            expired=sum(i.status is InvitationStatus.EXPIRED for i in invitations),
        )

    def _store(self, invitation: Invitation, **changes) -> Invitation:
        updated = invitation.model_copy(update=changes)
        self._invitations[updated.id] = updated
        return updated

    def _filter(
        self, organization_id: OrganizationId, status: InvitationStatus | None
    ) -> list[Invitation]:
        return [
            invitation
            for invitation in self._invitations.values()
            if invitation.organization_id == organization_id
            and (status is None or invitation.status is status)
        ]

    def _pending_for(
        self, organization_id: OrganizationId, email: EmailAddress
    ) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if (
                invitation.organization_id == organization_id
                and invitation.status is InvitationStatus.PENDING
                and invitation.email.normalized == email.normalized
            ):
                return invitation
        return None

    def _token_taken(self, token: InvitationToken) -> bool:
        return any(i.token == token for i in self._invitations.values())
