"""Batch invitation creation."""

import logfire
from pydantic import Field

from ubos.domain.error import DomainError, ValidationError
from ubos.domain.model import Invitation
from ubos.domain.model.common import DomainModel
from ubos.domain.value import OrganizationId, RoleId, UserId

from .base import Service
from .invitation_service import InvitationService
from .quota_guard import QuotaGuard


class BulkInvitationItem(DomainModel):
    """One row of a batch: who to invite and with which role."""

    email: str
    role_id: RoleId


class BulkInvitationFailure(DomainModel):
    """A batch row that did not produce an invitation."""

    email: str
    error: str


class BulkInvitationResult(DomainModel):
    """Outcome of a batch: every item lands in exactly one list."""

    created: list[Invitation] = Field(default_factory=list)
    failed: list[BulkInvitationFailure] = Field(default_factory=list)


class BulkInvitationCoordinator(Service):
    """Creates many invitations under a single up-front quota check.

    Items are independent: one failing item never aborts the others, and
    no per-item error escapes as an exception.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        quota_guard: QuotaGuard,
        max_batch_size: int = 100,
    ) -> None:
        """Initialize bulk invitation coordinator.

        Args:
            invitation_service: Creates each individual invitation
            quota_guard: Pending-invitation ceiling
            max_batch_size: Largest accepted batch
        """
        self.invitation_service = invitation_service
        self.quota_guard = quota_guard
        self.max_batch_size = max_batch_size

    async def create_many(
        self,
        organization_id: OrganizationId,
        items: list[BulkInvitationItem],
        invited_by_id: UserId,
    ) -> BulkInvitationResult:
        """Create an invitation for every item that passes its own checks.

        Args:
            organization_id: Organization being invited into
            items: Batch rows, processed in order
            invited_by_id: Inviting user

        Returns:
            Created invitations and per-item failures

        Raises:
            ValidationError: If the batch is empty or too large
            QuotaExceededError: If the whole batch does not fit under the
                ceiling; nothing is created
        """
        if not items:
            raise ValidationError("At least one invitation is required")
        if len(items) > self.max_batch_size:
            raise ValidationError(
                f"Cannot send more than {self.max_batch_size} invitations at once"
            )

        with logfire.span(
            "bulk_invitation.create_many",
            organization_id=str(organization_id),
            size=len(items),
        ):
            await self.quota_guard.check_capacity(
                organization_id, pending_count_delta=len(items)
            )

            created: list[Invitation] = []
            failed: list[BulkInvitationFailure] = []
            for item in items:
                try:
                    invitation = await self.invitation_service.create(
                        organization_id,
                        item.email,
                        item.role_id,
                        invited_by_id,
                        enforce_quota=False,
                    )
                    created.append(invitation)
                except DomainError as e:
                    failed.append(
                        BulkInvitationFailure(email=item.email, error=e.message)
                    )
                except Exception as e:
                    logfire.error(
                        "Bulk invitation item failed",
                        organization_id=str(organization_id),
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    failed.append(
                        BulkInvitationFailure(
                            email=item.email, error="Failed to create invitation"
                        )
                    )

            logfire.info(
                "Bulk invitations processed",
                organization_id=str(organization_id),
                created=len(created),
                failed=len(failed),
            )
            return BulkInvitationResult(created=created, failed=failed)
