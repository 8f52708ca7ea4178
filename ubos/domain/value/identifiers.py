"""Strongly typed identifiers for UBOS domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Tenancy
OrganizationId = NewType("OrganizationId", UUID)

# Identity and access
UserId = NewType("UserId", UUID)
RoleId = NewType("RoleId", UUID)

# Onboarding
InvitationId = NewType("InvitationId", UUID)
