"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ubos.domain.model.user import User
from ubos.domain.value import EmailAddress, UserId


class UserRepository(ABC):
    """Accounts that invitations resolve to on acceptance."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """Look a user up by email, compared case-insensitively."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert ``user``, or overwrite the row with the same id.

        Raises:
            ConflictError: If another user already owns the email
        """
        pass
