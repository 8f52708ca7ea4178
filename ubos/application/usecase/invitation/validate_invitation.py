"""Validate invitation use case."""

from datetime import datetime

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.domain.service import InvitationService


class ValidateInvitationRequest(BaseModel):
    """Validate invitation request."""

    token: str


class ValidateInvitationResponse(BaseModel):
    """What the invitee sees before accepting."""

    valid: bool
    email: str
    organization_id: str
    role_id: str
    role_name: str
    invited_by_name: str | None = None
    expires_at: datetime


class ValidateInvitationUseCase(BaseUseCase):
    """Use case for checking an invitation token without consuming it."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    @internal_errors("validate_invitation")
    async def execute(
        self, request: ValidateInvitationRequest
    ) -> ValidateInvitationResponse:
        """Execute validate invitation use case.

        Args:
            request: Validate request

        Returns:
            Invitation preview

        Raises:
            InvalidInvitationError: If the token is unknown or the role is gone
            InvitationAlreadyAcceptedError: If the invitation was already used
            InvitationExpiredError: If the acceptance window has closed
        """
        preview = await self.invitation_service.preview(request.token)
        return ValidateInvitationResponse(
            valid=True,
            email=preview.email.root,
            organization_id=str(preview.organization_id),
            role_id=str(preview.role_id),
            role_name=preview.role_name,
            invited_by_name=preview.invited_by_name,
            expires_at=preview.expires_at,
        )
