"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ubos.domain.error import ConflictError
from ubos.domain.model import Invitation, InvitationStats
from ubos.domain.repository import InvitationRepository
from ubos.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    UserId,
)
from ubos.persistence.mappers import invitation_to_dict, row_to_invitation
from ubos.persistence.tables import invitations_table

_CONFLICTS = {
    "uq_invitations_token": "Invitation token already in use",
    "uq_invitations_pending_email": (
        "A pending invitation for this email already exists"
    ),
}


def _conflict_from(error: IntegrityError) -> ConflictError | None:
    """Translate a unique violation on a known constraint into a ConflictError."""
    detail = str(error.orig)
    for constraint, message in _CONFLICTS.items():
        if constraint in detail:
            return ConflictError(message)
    return None


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository.

    Writes that can hit a unique constraint run inside a savepoint, so a
    conflict leaves the surrounding transaction usable (bulk creation keeps
    going after a failed row).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, organization_id: OrganizationId, invitation_id: InvitationId
    ) -> Optional[Invitation]:
        """Find an invitation by ID within its organization.

        Args:
            organization_id: Owning organization
            invitation_id: Invitation ID to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.id == invitation_id,
                invitations_table.c.organization_id == organization_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token.

        Args:
            token: Invitation token to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_pending_by_email(
        self, organization_id: OrganizationId, email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the pending invitation for an email (case-insensitive).

        Served by the partial unique index on (organization_id, lower(email)).
        """
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.organization_id == organization_id,
                func.lower(invitations_table.c.email) == email.normalized,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def add(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: Invitation to insert

        Returns:
            Inserted invitation

        Raises:
            ConflictError: If the token or the pending email is already taken
        """
        stmt = insert(invitations_table).values(**invitation_to_dict(invitation))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            conflict = _conflict_from(e)
            if conflict is None:
                raise
            raise conflict from e
        return invitation

    async def replace_token(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        updated_at: datetime,
    ) -> Optional[Invitation]:
        """Swap in a new token and expiry while the invitation is pending."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                )
            )
            .values(token=token.root, expires_at=expires_at, updated_at=updated_at)
            .returning(invitations_table)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        except IntegrityError as e:
            conflict = _conflict_from(e)
            if conflict is None:
                raise
            raise conflict from e
        return row_to_invitation(dict(row)) if row else None

    async def transition_status(
        self,
        invitation_id: InvitationId,
        from_status: InvitationStatus,
        to_status: InvitationStatus,
        updated_at: datetime,
        valid_at: datetime | None = None,
        token: InvitationToken | None = None,
    ) -> Optional[Invitation]:
        """Compare-and-swap the status of one invitation.

        The row lock taken by UPDATE serializes concurrent callers; the
        loser re-evaluates the WHERE clause and matches nothing.
        """
        conditions = [
            invitations_table.c.id == invitation_id,
            invitations_table.c.status == from_status.value,
        ]
        if valid_at is not None:
            conditions.append(invitations_table.c.expires_at > valid_at)
        if token is not None:
            conditions.append(invitations_table.c.token == token.root)

        stmt = (
            update(invitations_table)
            .where(and_(*conditions))
            .values(status=to_status.value, updated_at=updated_at)
            .returning(invitations_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def record_acceptance(
        self,
        invitation_id: InvitationId,
        accepted_by_id: UserId,
        accepted_at: datetime,
    ) -> Invitation:
        """Record the accepting user on an invitation already claimed."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == InvitationStatus.ACCEPTED.value,
                )
            )
            .values(
                accepted_by_id=accepted_by_id,
                accepted_at=accepted_at,
                updated_at=accepted_at,
            )
            .returning(invitations_table)
        )
        result = await self.session.execute(stmt)
        return row_to_invitation(dict(result.mappings().one()))

    async def expire_overdue(self, now: datetime) -> int:
        """Expire every pending invitation whose window has closed."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                    invitations_table.c.expires_at <= now,
                )
            )
            .values(status=InvitationStatus.EXPIRED.value, updated_at=now)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def count_by_organization(
        self, organization_id: OrganizationId, status: InvitationStatus | None = None
    ) -> int:
        """Count invitations in an organization.

        Args:
            organization_id: Owning organization
            status: Optional filter by status

        Returns:
            Number of invitations
        """
        stmt = (
            select(func.count())
            .select_from(invitations_table)
            .where(invitations_table.c.organization_id == organization_id)
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_by_organization(
        self,
        organization_id: OrganizationId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations in an organization, newest first.

        Args:
            organization_id: Owning organization
            status: Optional filter by status
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        stmt = select(invitations_table).where(
            invitations_table.c.organization_id == organization_id
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)

        stmt = (
            stmt.order_by(
                invitations_table.c.created_at.desc(), invitations_table.c.id.desc()
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings()]

    async def stats_by_organization(
        self, organization_id: OrganizationId
    ) -> InvitationStats:
        """Count invitations per status for an organization."""
        stmt = (
            select(invitations_table.c.status, func.count())
            .where(invitations_table.c.organization_id == organization_id)
            .group_by(invitations_table.c.status)
        )
        result = await self.session.execute(stmt)
        counts = {status: count for status, count in result.all()}
        return InvitationStats(
            pending=counts.get(InvitationStatus.PENDING.value, 0),
            accepted=counts.get(InvitationStatus.ACCEPTED.value, 0),
            expired=counts.get(InvitationStatus.EXPIRED.value, 0),
        )
