"""Bulk create invitations use case."""

from uuid import UUID

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.application.usecase.invitation.create_invitation import InvitationItem
from ubos.domain.service import BulkInvitationCoordinator, BulkInvitationItem
from ubos.domain.value import OrganizationId, RoleId, UserId


class InviteeInfo(BaseModel):
    """One row of a bulk invitation request."""

    email: str
    role_id: UUID


class BulkCreateInvitationsRequest(BaseModel):
    """Request to invite many people at once."""

    organization_id: UUID
    invited_by_id: UUID
    invitations: list[InviteeInfo]


class FailedInvitation(BaseModel):
    """A row that was not invited, with the reason."""

    email: str
    error: str


class BulkCreateInvitationsResponse(BaseModel):
    """Outcome of a bulk invitation request."""

    created: int
    failed: int
    invitations: list[InvitationItem]
    errors: list[FailedInvitation]


class BulkCreateInvitationsUseCase(BaseUseCase):
    """Use case for inviting a batch of email addresses."""

    def __init__(self, coordinator: BulkInvitationCoordinator) -> None:
        """Initialize use case.

        Args:
            coordinator: Bulk invitation coordinator
        """
        self.coordinator = coordinator

    @internal_errors("bulk_create_invitations")
    async def execute(
        self, request: BulkCreateInvitationsRequest
    ) -> BulkCreateInvitationsResponse:
        """Execute bulk create invitations use case.

        Args:
            request: Bulk create request

        Returns:
            Counts, created invitations and per-row failures

        Raises:
            ValidationError: If the batch is empty or too large
            QuotaExceededError: If the batch does not fit under the ceiling
        """
        result = await self.coordinator.create_many(
            OrganizationId(request.organization_id),
            [
                BulkInvitationItem(email=row.email, role_id=RoleId(row.role_id))
                for row in request.invitations
            ],
            UserId(request.invited_by_id),
        )
        return BulkCreateInvitationsResponse(
            created=len(result.created),
            failed=len(result.failed),
            invitations=[
                InvitationItem.from_summary(invitation.summary())
                for invitation in result.created
            ],
            errors=[
                FailedInvitation(email=failure.email, error=failure.error)
                for failure in result.failed
            ],
        )
