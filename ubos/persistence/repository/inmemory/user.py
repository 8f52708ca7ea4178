"""In-memory user repository for testing."""

from typing import Optional

from ubos.domain.error import ConflictError
from ubos.domain.model import User
from ubos.domain.repository import UserRepository
from ubos.domain.value import EmailAddress, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """Find a user by their email, ignoring case."""
        for user in self._users.values():
            if user.email.normalized == email.normalized:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user.

        Raises:
            ConflictError: If another user already has the email
        """
        for other in self._users.values():
            if other.id != user.id and other.email.normalized == user.email.normalized:
                raise ConflictError("Email address is already in use")
        self._users[user.id] = user
        return user
