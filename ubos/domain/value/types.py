"""Domain value objects for UBOS.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import math
import re
from enum import Enum

from pydantic import field_validator

from ubos.domain.value.common import RootValueObject, ValueObject

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvitationStatus(str, Enum):
    """Status of an invitation.

    ``accepted`` and ``expired`` are terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self is not InvitationStatus.PENDING


class EmailAddress(RootValueObject[str]):
    """Email address of an invitee or user.

    Stored exactly as supplied (surrounding whitespace trimmed);
    comparisons go through ``normalized``.
    """

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email shape and length."""
        v = v.strip()
        if len(v) > 254:
            raise ValueError("Email must be at most 254 characters")
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    @property
    def normalized(self) -> str:
        """Case-folded form used for uniqueness checks."""
        return self.root.lower()


class InvitationToken(RootValueObject[str]):
    """URL-safe invitation token.

    The token is a bearer capability: it must never appear in listings
    or in logs beyond ``masked``.
    """

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    @property
    def masked(self) -> str:
        """Prefix safe to put in log records."""
        return self.root[:8] + "..."


class PersonName(RootValueObject[str]):
    """Full name supplied when accepting an invitation."""

    @field_validator("root")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Collapse whitespace and enforce length limits."""
        v = " ".join(v.split())
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        if len(v) > 255:
            raise ValueError("Name must be at most 255 characters")
        return v

    @property
    def first_name(self) -> str:
        """First whitespace-separated part."""
        return self.root.split(" ")[0]

    @property
    def last_name(self) -> str:
        """Everything after the first part, or an empty string."""
        return " ".join(self.root.split(" ")[1:])


class PageMeta(ValueObject):
    """Offset/limit pagination metadata."""

    page: int
    limit: int
    offset: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, total: int, limit: int, offset: int) -> "PageMeta":
        """Derive page numbers from a total count and an offset window."""
        page = offset // limit + 1
        total_pages = math.ceil(total / limit) if total else 0
        return cls(
            page=page,
            limit=limit,
            offset=offset,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
