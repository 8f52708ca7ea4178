"""Domain value objects for UBOS."""

from ubos.domain.value.identifiers import (
    InvitationId,
    OrganizationId,
    RoleId,
    UserId,
)
from ubos.domain.value.types import (
    EmailAddress,
    InvitationStatus,
    InvitationToken,
    PageMeta,
    PersonName,
)

__all__ = [
    # Identifiers
    "OrganizationId",
    "UserId",
    "RoleId",
    "InvitationId",
    # Types
    "EmailAddress",
    "InvitationStatus",
    "InvitationToken",
    "PageMeta",
    "PersonName",
]
