"""Domain model entities for UBOS."""

from ubos.domain.model.invitation import (
    Invitation,
    InvitationPreview,
    InvitationStats,
    InvitationSummary,
)
from ubos.domain.model.role import Role, RoleAssignment
from ubos.domain.model.user import User

__all__ = [
    "Invitation",
    "InvitationPreview",
    "InvitationStats",
    "InvitationSummary",
    "Role",
    "RoleAssignment",
    "User",
]
