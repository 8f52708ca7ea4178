"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from ubos.domain.model import Invitation, Role, RoleAssignment, User
from ubos.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    RoleId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=EmailAddress(row["email"]),
        first_name=row["first_name"],
        last_name=row.get("last_name") or "",
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "email": user.email.root,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_role(row: Dict[str, Any]) -> Role:
    """Convert database row to Role domain model."""
    return Role(
        id=RoleId(_uuid(row["id"])),
        organization_id=OrganizationId(_uuid(row["organization_id"])),
        name=row["name"],
        description=row.get("description"),
        created_at=row["created_at"],
    )


def role_to_dict(role: Role) -> Dict[str, Any]:
    """Convert Role domain model to database dict."""
    return role.model_dump()


def row_to_role_assignment(row: Dict[str, Any]) -> RoleAssignment:
    """Convert database row to RoleAssignment domain model."""
    assigned_by_id = row.get("assigned_by_id")
    return RoleAssignment(
        user_id=UserId(_uuid(row["user_id"])),
        role_id=RoleId(_uuid(row["role_id"])),
        organization_id=OrganizationId(_uuid(row["organization_id"])),
        assigned_by_id=UserId(_uuid(assigned_by_id)) if assigned_by_id else None,
        assigned_at=row["assigned_at"],
    )


def role_assignment_to_dict(assignment: RoleAssignment) -> Dict[str, Any]:
    """Convert RoleAssignment domain model to database dict."""
    return assignment.model_dump()


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    accepted_by_id = row.get("accepted_by_id")
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        organization_id=OrganizationId(_uuid(row["organization_id"])),
        email=EmailAddress(row["email"]),
        role_id=RoleId(_uuid(row["role_id"])),
        token=InvitationToken(row["token"]),
        status=InvitationStatus(row["status"]),
        invited_by_id=UserId(_uuid(row["invited_by_id"])),
        accepted_by_id=UserId(_uuid(accepted_by_id)) if accepted_by_id else None,
        accepted_at=row.get("accepted_at"),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Args:
        invitation: Invitation domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": invitation.id,
        "organization_id": invitation.organization_id,
        "email": invitation.email.root,
        "role_id": invitation.role_id,
        "token": invitation.token.root,
        "status": invitation.status.value,
        "invited_by_id": invitation.invited_by_id,
        "accepted_by_id": invitation.accepted_by_id,
        "accepted_at": invitation.accepted_at,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
        "updated_at": invitation.updated_at,
    }
