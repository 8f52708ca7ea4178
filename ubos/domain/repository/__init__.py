"""Repository interfaces for UBOS domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from ubos.domain.repository.invitation import InvitationRepository
from ubos.domain.repository.role import RoleAssignmentRepository, RoleRepository
from ubos.domain.repository.user import UserRepository

__all__ = [
    "InvitationRepository",
    "RoleAssignmentRepository",
    "RoleRepository",
    "UserRepository",
]
