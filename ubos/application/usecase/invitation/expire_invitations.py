"""Expire overdue invitations use case."""

from datetime import datetime

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.domain.service import InvitationService


class ExpireInvitationsRequest(BaseModel):
    """Expire invitations request."""

    now: datetime | None = None


class ExpireInvitationsResponse(BaseModel):
    """Expire invitations response."""

    expired: int


class ExpireInvitationsUseCase(BaseUseCase):
    """Use case for the periodic expiry sweep."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    @internal_errors("expire_invitations")
    async def execute(
        self, request: ExpireInvitationsRequest
    ) -> ExpireInvitationsResponse:
        count = await self.invitation_service.expire_overdue(request.now)
        return ExpireInvitationsResponse(expired=count)
