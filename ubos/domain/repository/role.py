"""Role and role assignment repository interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from ubos.domain.model.role import Role, RoleAssignment
from ubos.domain.value import OrganizationId, RoleId, UserId


class RoleRepository(ABC):
    """Repository for organization-scoped roles."""

    @abstractmethod
    async def find_by_id(
        self, organization_id: OrganizationId, role_id: RoleId
    ) -> Optional[Role]:
        """Find a role inside an organization.

        Args:
            organization_id: Owning organization
            role_id: The role's identifier

        Returns:
            The role if it exists in that organization, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, role: Role) -> Role:
        """Save a role (create or update)."""
        pass


class RoleAssignmentRepository(ABC):
    """Repository for user-role-organization bindings."""

    @abstractmethod
    async def upsert(self, assignment: RoleAssignment) -> tuple[RoleAssignment, bool]:
        """Insert a binding unless one already exists for its key.

        Args:
            assignment: Binding keyed by (user_id, role_id, organization_id)

        Returns:
            Tuple of (stored binding, whether it was newly created)
        """
        pass

    @abstractmethod
    async def find_by_user(
        self, user_id: UserId, organization_id: OrganizationId | None = None
    ) -> list[RoleAssignment]:
        """List bindings held by a user, optionally within one organization."""
        pass
