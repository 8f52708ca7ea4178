"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationRepository
from .role import InMemoryRoleAssignmentRepository, InMemoryRoleRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryInvitationRepository",
    "InMemoryRoleAssignmentRepository",
    "InMemoryRoleRepository",
    "InMemoryUserRepository",
]
