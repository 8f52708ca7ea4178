"""PostgreSQL implementations of Role and RoleAssignment repositories."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ubos.domain.model import Role, RoleAssignment
from ubos.domain.repository import RoleAssignmentRepository, RoleRepository
from ubos.domain.value import OrganizationId, RoleId, UserId
from ubos.persistence.mappers import (
    role_assignment_to_dict,
    role_to_dict,
    row_to_role,
    row_to_role_assignment,
)
from ubos.persistence.tables import roles_table, user_roles_table


class PostgresRoleRepository(RoleRepository):
    """PostgreSQL implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, organization_id: OrganizationId, role_id: RoleId
    ) -> Optional[Role]:
        """Find a role inside an organization."""
        stmt = select(roles_table).where(
            and_(
                roles_table.c.id == role_id,
                roles_table.c.organization_id == organization_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_role(dict(row)) if row else None

    async def save(self, role: Role) -> Role:
        """Save a role (create or update)."""
        role_dict = role_to_dict(role)

        existing = await self.find_by_id(role.organization_id, role.id)
        if existing:
            stmt = (
                update(roles_table)
                .where(roles_table.c.id == role.id)
                .values(**role_dict)
            )
        else:
            stmt = insert(roles_table).values(**role_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return role


class PostgresRoleAssignmentRepository(RoleAssignmentRepository):
    """PostgreSQL implementation of RoleAssignmentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert(self, assignment: RoleAssignment) -> tuple[RoleAssignment, bool]:
        """Insert a binding unless one already exists for its key.

        ON CONFLICT DO NOTHING keeps concurrent binders from duplicating
        the row; the existing binding is read back when nothing was inserted.
        """
        stmt = (
            pg_insert(user_roles_table)
            .values(**role_assignment_to_dict(assignment))
            .on_conflict_do_nothing(constraint="uq_user_roles_binding")
            .returning(user_roles_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row:
            return row_to_role_assignment(dict(row)), True

        stmt = select(user_roles_table).where(
            and_(
                user_roles_table.c.user_id == assignment.user_id,
                user_roles_table.c.role_id == assignment.role_id,
                user_roles_table.c.organization_id == assignment.organization_id,
            )
        )
        result = await self.session.execute(stmt)
        return row_to_role_assignment(dict(result.mappings().one())), False

    async def find_by_user(
        self, user_id: UserId, organization_id: OrganizationId | None = None
    ) -> list[RoleAssignment]:
        """List bindings held by a user, optionally within one organization."""
        stmt = select(user_roles_table).where(user_roles_table.c.user_id == user_id)
        if organization_id:
            stmt = stmt.where(user_roles_table.c.organization_id == organization_id)

        stmt = stmt.order_by(user_roles_table.c.assigned_at)
        result = await self.session.execute(stmt)
        return [row_to_role_assignment(dict(row)) for row in result.mappings()]
