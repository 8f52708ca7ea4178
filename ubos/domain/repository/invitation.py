"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from ubos.domain.model.invitation import Invitation, InvitationStats
from ubos.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    UserId,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Every status change goes through a conditional update so that
    concurrent callers cannot both observe and act on ``pending``.
    """

    @abstractmethod
    async def find_by_id(
        self, organization_id: OrganizationId, invitation_id: InvitationId
    ) -> Invitation | None:
        """Find an invitation by ID within its organization.

        Args:
            organization_id: Owning organization
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found in that organization, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token, across all organizations.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_email(
        self, organization_id: OrganizationId, email: EmailAddress
    ) -> Invitation | None:
        """Find the pending invitation for an email, compared case-insensitively.

        Args:
            organization_id: Owning organization
            email: Invitee email

        Returns:
            The pending invitation if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def add(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The stored invitation

        Raises:
            ConflictError: If the token is already used, or a pending
                invitation exists for the same organization/email
        """
        pass

    @abstractmethod
    async def replace_token(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        updated_at: datetime,
    ) -> Invitation | None:
        """Swap in a new token and expiry, only while the invitation is pending.

        Args:
            invitation_id: Invitation to refresh
            token: Freshly issued token
            expires_at: New expiry
            updated_at: Modification timestamp

        Returns:
            The refreshed invitation, or None if it was no longer pending

        Raises:
            ConflictError: If the token is already used
        """
        pass

    @abstractmethod
    async def transition_status(
        self,
        invitation_id: InvitationId,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
        updated_at: datetime,
        valid_at: datetime | None = None,
        token: InvitationToken | None = None,
    ) -> Invitation | None:
        """Compare-and-swap the status of one invitation.

        Args:
            invitation_id: Invitation to transition
            from_status: Status the invitation must currently have
            to_status: Status to set
            updated_at: Modification timestamp
            valid_at: When given, also require ``expires_at > valid_at``
            token: When given, also require the current token to match

        Returns:
            The updated invitation, or None if no row matched
        """
        pass

    @abstractmethod
    async def record_acceptance(
        self,
        invitation_id: InvitationId,
        accepted_by_id: UserId,
        accepted_at: datetime,
    ) -> Invitation:
        """Record who accepted an invitation already claimed as accepted.

        Args:
            invitation_id: Accepted invitation
            accepted_by_id: Resulting user
            accepted_at: Acceptance timestamp

        Returns:
            The updated invitation
        """
        pass

    @abstractmethod
    async def expire_overdue(self, now: datetime) -> int:
        """Flip every pending invitation with ``expires_at <= now`` to expired.

        Args:
            now: Reference time

        Returns:
            Number of invitations expired
        """
        pass

    @abstractmethod
    async def count_by_organization(
        self, organization_id: OrganizationId, status: InvitationStatus | None = None
    ) -> int:
        """Count invitations in an organization.

        Args:
            organization_id: Owning organization
            status: Optional status filter

        Returns:
            Number of invitations
        """
        pass

    @abstractmethod
    async def find_by_organization(
        self,
        organization_id: OrganizationId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations in an organization, newest first.

        Args:
            organization_id: Owning organization
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def stats_by_organization(
        self, organization_id: OrganizationId
    ) -> InvitationStats:
        """Count invitations per status for an organization."""
        pass
