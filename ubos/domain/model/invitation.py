"""Invitation entity.

An invitation lets an organization admin bring a person in by email.
The emailed token is the sole capability that matures the invitation
into a user account bound to the invited role.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ubos.domain.model.common import DomainModel, utcnow
from ubos.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    RoleId,
    UserId,
)


class InvitationSummary(DomainModel):
    """Listing projection of an invitation.

    Carries every field except the token, which is a capability and not
    a display field.
    """

    id: InvitationId
    organization_id: OrganizationId
    email: EmailAddress
    role_id: RoleId
    status: InvitationStatus
    invited_by_id: UserId
    accepted_by_id: Optional[UserId] = None
    accepted_at: Optional[datetime] = None
    expires_at: datetime
    created_at: datetime
    updated_at: datetime


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - One pending invitation per organization/email (case-insensitive)
    - Token is unique system-wide and replaced on every resend
    - Status only moves pending -> accepted or pending -> expired
    - Acceptable only while now < expires_at
    """

    id: InvitationId
    organization_id: OrganizationId
    email: EmailAddress
    role_id: RoleId
    token: InvitationToken
    status: InvitationStatus = InvitationStatus.PENDING
    invited_by_id: UserId
    accepted_by_id: Optional[UserId] = None
    accepted_at: Optional[datetime] = None
    expires_at: datetime
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_overdue(self, now: datetime) -> bool:
        """Whether the acceptance window has closed at ``now``."""
        return now >= self.expires_at

    def summary(self) -> InvitationSummary:
        """Project to the token-free listing shape."""
        return InvitationSummary(**self.model_dump(exclude={"token"}))


class InvitationStats(DomainModel):
    """Per-status invitation counts for one organization."""

    pending: int = 0
    accepted: int = 0
    expired: int = 0

    @property
    def total(self) -> int:
        """Count across every status."""
        return self.pending + self.accepted + self.expired


class InvitationPreview(DomainModel):
    """What an invitee may see about a pending invitation before accepting."""

    email: EmailAddress
    organization_id: OrganizationId
    role_id: RoleId
    role_name: str
    invited_by_name: Optional[str] = None
    expires_at: datetime
