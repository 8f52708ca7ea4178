"""Test configuration and fixtures."""

from datetime import timedelta
from uuid import uuid4

from dishka import AsyncContainer

from ubos.domain.model import Invitation, Role, User
from ubos.domain.model.common import utcnow
from ubos.domain.repository import RoleRepository, UserRepository
from ubos.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    RoleId,
    UserId,
)

# Satisfies the default password policy
STRONG_PASSWORD = "Str0ng!Passw0rd"


def new_organization_id() -> OrganizationId:
    """Fresh organization ID for a test."""
    return OrganizationId(uuid4())


async def seed_role(
    env: AsyncContainer,
    organization_id: OrganizationId,
    name: str = "Member",
) -> Role:
    """Helper to create a role inside an organization."""
    role_repo = await env.get(RoleRepository)
    return await role_repo.save(
        Role(id=RoleId(uuid4()), organization_id=organization_id, name=name)
    )


async def seed_user(
    env: AsyncContainer,
    email: str = "admin@example.com",
    first_name: str = "Ada",
    last_name: str = "Admin",
) -> User:
    """Helper to create a user, e.g. the inviting admin."""
    user_repo = await env.get(UserRepository)
    return await user_repo.save(
        User(
            id=UserId(uuid4()),
            email=EmailAddress(email),
            first_name=first_name,
            last_name=last_name,
        )
    )


def make_invitation(
    organization_id: OrganizationId,
    role_id: RoleId,
    invited_by_id: UserId,
    email: str = "invitee@example.com",
    status: InvitationStatus = InvitationStatus.PENDING,
    expires_in: timedelta = timedelta(days=7),
) -> Invitation:
    """Build an invitation directly, bypassing the lifecycle service.

    Args:
        organization_id: Owning organization
        role_id: Invited role
        invited_by_id: Inviting user
        email: Invitee email
        status: Initial status
        expires_in: Offset of ``expires_at`` from now (negative for overdue)

    Returns:
        Unsaved invitation with a unique token
    """
    now = utcnow()
    return Invitation(
        id=InvitationId(uuid4()),
        organization_id=organization_id,
        email=EmailAddress(email),
        role_id=role_id,
        token=InvitationToken(uuid4().hex + uuid4().hex),
        status=status,
        invited_by_id=invited_by_id,
        expires_at=now + expires_in,
        created_at=now,
        updated_at=now,
    )
