"""PostgreSQL repository implementations."""

from ubos.persistence.repository.invitation import PostgresInvitationRepository
from ubos.persistence.repository.role import (
    PostgresRoleAssignmentRepository,
    PostgresRoleRepository,
)
from ubos.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresInvitationRepository",
    "PostgresRoleAssignmentRepository",
    "PostgresRoleRepository",
    "PostgresUserRepository",
]
