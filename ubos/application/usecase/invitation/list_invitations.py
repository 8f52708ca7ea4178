"""List invitations use case."""

from uuid import UUID

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.application.usecase.invitation.create_invitation import InvitationItem
from ubos.domain.service import InvitationService
from ubos.domain.value import InvitationStatus, OrganizationId, PageMeta


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    organization_id: UUID
    status: InvitationStatus | None = None
    limit: int = 50
    offset: int = 0


class ListInvitationsResponse(BaseModel):
    """A page of invitations."""

    invitations: list[InvitationItem]
    pagination: PageMeta


class ListInvitationsUseCase(BaseUseCase):
    """Use case for listing an organization's invitations."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    @internal_errors("list_invitations")
    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        """Execute list invitations use case.

        Args:
            request: List request with optional status filter and paging

        Returns:
            Invitations (newest first) with pagination metadata
        """
        summaries, page = await self.invitation_service.list_invitations(
            OrganizationId(request.organization_id),
            status=request.status,
            limit=request.limit,
            offset=request.offset,
        )
        return ListInvitationsResponse(
            invitations=[InvitationItem.from_summary(s) for s in summaries],
            pagination=page,
        )
