"""Role entity and role binding.

Roles belong to exactly one organization. A role assignment binds a
user to a role inside that organization.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ubos.domain.model.common import DomainModel, utcnow
from ubos.domain.value import OrganizationId, RoleId, UserId


class Role(DomainModel):
    """Role scoped to an organization."""

    id: RoleId
    organization_id: OrganizationId
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class RoleAssignment(DomainModel):
    """Durable user-role-organization binding.

    Unique on (user_id, role_id, organization_id).
    """

    user_id: UserId
    role_id: RoleId
    organization_id: OrganizationId
    assigned_by_id: Optional[UserId] = None
    assigned_at: datetime = Field(default_factory=utcnow)

    @property
    def key(self) -> tuple[UserId, RoleId, OrganizationId]:
        """Identity of the binding."""
        return (self.user_id, self.role_id, self.organization_id)
