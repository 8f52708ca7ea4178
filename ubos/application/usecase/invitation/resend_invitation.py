"""Resend invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.application.usecase.invitation.create_invitation import InvitationItem
from ubos.domain.service import InvitationService
from ubos.domain.value import InvitationId, OrganizationId


class ResendInvitationRequest(BaseModel):
    """Resend invitation request."""

    organization_id: UUID
    invitation_id: UUID


class ResendInvitationResponse(BaseModel):
    """Resend invitation response."""

    message: str
    invitation: InvitationItem


class ResendInvitationUseCase(BaseUseCase):
    """Use case for re-issuing a pending invitation's token and email."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    @internal_errors("resend_invitation")
    async def execute(
        self, request: ResendInvitationRequest
    ) -> ResendInvitationResponse:
        """Execute resend invitation use case.

        Args:
            request: Resend request

        Returns:
            Confirmation with the renewed invitation

        Raises:
            NotFoundError: If the invitation is not in the organization
            CannotResendError: If the invitation is no longer pending
        """
        invitation = await self.invitation_service.resend(
            OrganizationId(request.organization_id),
            InvitationId(request.invitation_id),
        )
        return ResendInvitationResponse(
            message="Invitation resent successfully",
            invitation=InvitationItem.from_summary(invitation.summary()),
        )
