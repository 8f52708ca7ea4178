"""Get invitation stats use case."""

from uuid import UUID

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.domain.service import InvitationService
from ubos.domain.value import OrganizationId


class GetInvitationStatsRequest(BaseModel):
    """Get invitation stats request."""

    organization_id: UUID


class GetInvitationStatsResponse(BaseModel):
    """Per-status invitation counts."""

    pending: int
    accepted: int
    expired: int
    total: int


class GetInvitationStatsUseCase(BaseUseCase):
    """Use case for summarizing an organization's invitations."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    @internal_errors("get_invitation_stats")
    async def execute(
        self, request: GetInvitationStatsRequest
    ) -> GetInvitationStatsResponse:
        stats = await self.invitation_service.get_stats(
            OrganizationId(request.organization_id)
        )
        return GetInvitationStatsResponse(
            pending=stats.pending,
            accepted=stats.accepted,
            expired=stats.expired,
            total=stats.total,
        )
