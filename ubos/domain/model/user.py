"""User aggregate root.

Users join organizations by accepting invitations; one user may hold
roles in several organizations.
"""

from datetime import datetime

from pydantic import Field

from ubos.domain.model.common import DomainModel, utcnow
from ubos.domain.value import EmailAddress, UserId


class User(DomainModel):
    """User aggregate root.

    Email is unique across the system (compared case-insensitively).
    Credentials live with the credential store, never on this model.
    """

    id: UserId
    email: EmailAddress
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(default="", max_length=255)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def display_name(self) -> str:
        """First and last name joined, without trailing blanks."""
        return f"{self.first_name} {self.last_name}".strip()
