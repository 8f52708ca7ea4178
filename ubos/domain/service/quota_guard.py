"""Pending-invitation quota enforcement."""

import logfire

from ubos.domain.error import QuotaExceededError, ValidationError
from ubos.domain.repository import InvitationRepository
from ubos.domain.value import InvitationStatus, OrganizationId

from .base import Service


class QuotaGuard(Service):
    """Caps simultaneously pending invitations per organization.

    The check is read-then-act, so two concurrent creations can both pass
    at the boundary. The ceiling bounds abuse and cost, it is not a
    correctness invariant.
    """

    def __init__(
        self, invitation_repository: InvitationRepository, max_pending: int = 50
    ) -> None:
        """Initialize quota guard.

        Args:
            invitation_repository: Invitation repository
            max_pending: Ceiling on pending invitations per organization
        """
        self.invitation_repository = invitation_repository
        self.max_pending = max_pending

    async def check_capacity(
        self, organization_id: OrganizationId, pending_count_delta: int = 1
    ) -> int:
        """Check that ``pending_count_delta`` more invitations fit under the ceiling.

        Args:
            organization_id: Organization being invited into
            pending_count_delta: Number of pending invitations about to be added

        Returns:
            Capacity left once the delta is applied

        Raises:
            ValidationError: If the delta is not positive
            QuotaExceededError: If current + delta exceeds the ceiling
        """
        if pending_count_delta < 1:
            raise ValidationError("Pending count delta must be at least 1")

        with logfire.span(
            "quota_guard.check_capacity",
            organization_id=str(organization_id),
            delta=pending_count_delta,
        ):
            current = await self.invitation_repository.count_by_organization(
                organization_id, InvitationStatus.PENDING
            )
            if current + pending_count_delta > self.max_pending:
                logfire.warn(
                    "Invitation quota exceeded",
                    organization_id=str(organization_id),
                    current=current,
                    requested=pending_count_delta,
                    limit=self.max_pending,
                )
                raise QuotaExceededError(
                    current=current,
                    requested=pending_count_delta,
                    limit=self.max_pending,
                )
            return self.max_pending - current - pending_count_delta
