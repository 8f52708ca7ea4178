"""Create invitation use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.domain.model import InvitationSummary
from ubos.domain.service import InvitationService
from ubos.domain.value import InvitationStatus, OrganizationId, RoleId, UserId


class InvitationItem(BaseModel):
    """Invitation as shown to organization admins. Never carries the token."""

    id: str
    organization_id: str
    email: str
    role_id: str
    status: InvitationStatus
    invited_by_id: str
    accepted_by_id: str | None = None
    accepted_at: datetime | None = None
    expires_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_summary(cls, summary: InvitationSummary) -> "InvitationItem":
        return cls(
            id=str(summary.id),
            organization_id=str(summary.organization_id),
            email=summary.email.root,
            role_id=str(summary.role_id),
            status=summary.status,
            invited_by_id=str(summary.invited_by_id),
            accepted_by_id=str(summary.accepted_by_id)
            if summary.accepted_by_id
            else None,
            accepted_at=summary.accepted_at,
            expires_at=summary.expires_at,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )


class CreateInvitationRequest(BaseModel):
    """Request to invite one person."""

    organization_id: UUID
    invited_by_id: UUID
    email: str
    role_id: UUID


class CreateInvitationUseCase(BaseUseCase):
    """Use case for inviting a single email address into an organization."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    @internal_errors("create_invitation")
    async def execute(self, request: CreateInvitationRequest) -> InvitationItem:
        """Execute create invitation use case.

        Args:
            request: Create invitation request

        Returns:
            The created invitation, without its token

        Raises:
            ValidationError: If the email or role is invalid
            ConflictError: If a pending invitation already exists
            QuotaExceededError: If the organization is at its ceiling
        """
        invitation = await self.invitation_service.create(
            OrganizationId(request.organization_id),
            request.email,
            RoleId(request.role_id),
            UserId(request.invited_by_id),
        )
        return InvitationItem.from_summary(invitation.summary())
