"""In-memory role and role assignment repositories for testing."""

from typing import Optional

from ubos.domain.model import Role, RoleAssignment
from ubos.domain.repository import RoleAssignmentRepository, RoleRepository
from ubos.domain.value import OrganizationId, RoleId, UserId


class InMemoryRoleRepository(RoleRepository):
    """In-memory implementation of RoleRepository for testing."""

    def __init__(self) -> None:
        self._roles: dict[RoleId, Role] = {}

    async def find_by_id(
        self, organization_id: OrganizationId, role_id: RoleId
    ) -> Optional[Role]:
        """Find a role inside an organization."""
        role = self._roles.get(role_id)
        if role and role.organization_id == organization_id:
            return role
        return None

    async def save(self, role: Role) -> Role:
        """Save or update a role."""
        self._roles[role.id] = role
        return role

    async def delete(self, role_id: RoleId) -> None:
        """Remove a role, as an admin would between invite and accept."""
        self._roles.pop(role_id, None)


class InMemoryRoleAssignmentRepository(RoleAssignmentRepository):
    """In-memory implementation of RoleAssignmentRepository for testing."""

    def __init__(self) -> None:
        self._assignments: dict[tuple[UserId, RoleId, OrganizationId], RoleAssignment] = {}

    async def upsert(self, assignment: RoleAssignment) -> tuple[RoleAssignment, bool]:
        """Insert a binding unless one already exists for its key."""
        existing = self._assignments.get(assignment.key)
        if existing:
            return existing, False
        self._assignments[assignment.key] = assignment
        return assignment, True

    async def find_by_user(
        self, user_id: UserId, organization_id: OrganizationId | None = None
    ) -> list[RoleAssignment]:
        """List bindings held by a user, optionally within one organization."""
        return [
            assignment
            for assignment in self._assignments.values()
            if assignment.user_id == user_id
            and (organization_id is None or assignment.organization_id == organization_id)
        ]
