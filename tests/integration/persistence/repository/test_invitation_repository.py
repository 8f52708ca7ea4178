"""Integration tests for PostgresInvitationRepository.

Run against a migrated PostgreSQL database (``alembic upgrade head``),
configured through ``DATABASE__URL``.
"""

import os
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from ubos.domain.error import ConflictError
from ubos.domain.model import RoleAssignment
from ubos.domain.model.common import utcnow
from ubos.domain.repository import InvitationRepository, RoleAssignmentRepository
from ubos.domain.value import InvitationStatus, InvitationToken, OrganizationId
from ubos.persistence.tables import organizations_table
from tests.conftest import make_invitation, seed_role, seed_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="PostgreSQL not configured"
)

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})


async def _seed(env):
    """Organization, role and inviting admin with unique names."""
    session = await env.get(AsyncSession)
    organization_id = OrganizationId(uuid4())
    await session.execute(
        insert(organizations_table).values(id=organization_id, name="Acme")
    )
    role = await seed_role(env, organization_id)
    admin = await seed_user(env, email=f"admin-{uuid4().hex[:8]}@example.com")
    return organization_id, role, admin


class TestInvitationRepositoryIntegration:
    """Integration tests for PostgresInvitationRepository."""

    @pytest.mark.asyncio
    async def test_add_and_find_by_token(self, integration_env):
        # Arrange
        repo = await integration_env.get(InvitationRepository)
        organization_id, role, admin = await _seed(integration_env)
        invitation = make_invitation(organization_id, role.id, admin.id)

        # Act
        await repo.add(invitation)
        found = await repo.find_by_token(invitation.token)

        # Assert
        assert found is not None
        assert found.id == invitation.id
        assert found.token == invitation.token
        assert found.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_pending_email_is_unique_ignoring_case(self, integration_env):
        repo = await integration_env.get(InvitationRepository)
        organization_id, role, admin = await _seed(integration_env)
        await repo.add(
            make_invitation(organization_id, role.id, admin.id, email="a@example.com")
        )

        with pytest.raises(ConflictError):
            await repo.add(
                make_invitation(
                    organization_id, role.id, admin.id, email="A@Example.com"
                )
            )

        # The savepoint keeps the session usable
        assert await repo.count_by_organization(organization_id) == 1

    @pytest.mark.asyncio
    async def test_claim_is_exclusive(self, integration_env):
        """Only the first conditional update should win."""
        repo = await integration_env.get(InvitationRepository)
        organization_id, role, admin = await _seed(integration_env)
        invitation = await repo.add(make_invitation(organization_id, role.id, admin.id))
        now = utcnow()

        first = await repo.transition_status(
            invitation.id,
            InvitationStatus.PENDING,
            InvitationStatus.ACCEPTED,
            updated_at=now,
            valid_at=now,
            token=invitation.token,
        )
        second = await repo.transition_status(
            invitation.id,
            InvitationStatus.PENDING,
            InvitationStatus.ACCEPTED,
            updated_at=now,
            valid_at=now,
            token=invitation.token,
        )

        assert first is not None
        assert second is None

    @pytest.mark.asyncio
    async def test_replace_token_invalidates_old(self, integration_env):
        repo = await integration_env.get(InvitationRepository)
        organization_id, role, admin = await _seed(integration_env)
        invitation = await repo.add(make_invitation(organization_id, role.id, admin.id))
        now = utcnow()
        new_token = InvitationToken(uuid4().hex + uuid4().hex)

        refreshed = await repo.replace_token(
            invitation.id, new_token, expires_at=now + timedelta(days=7), updated_at=now
        )

        assert refreshed.token == new_token
        assert await repo.find_by_token(invitation.token) is None

    @pytest.mark.asyncio
    async def test_expire_overdue_and_stats(self, integration_env):
        repo = await integration_env.get(InvitationRepository)
        organization_id, role, admin = await _seed(integration_env)
        await repo.add(
            make_invitation(
                organization_id,
                role.id,
                admin.id,
                email="late@example.com",
                expires_in=timedelta(minutes=-5),
            )
        )
        await repo.add(
            make_invitation(organization_id, role.id, admin.id, email="ok@example.com")
        )

        expired = await repo.expire_overdue(utcnow())
        stats = await repo.stats_by_organization(organization_id)

        assert expired >= 1
        assert (stats.pending, stats.expired) == (1, 1)

    @pytest.mark.asyncio
    async def test_role_binding_upsert_is_idempotent(self, integration_env):
        bindings = await integration_env.get(RoleAssignmentRepository)
        organization_id, role, admin = await _seed(integration_env)
        assignment = RoleAssignment(
            user_id=admin.id, role_id=role.id, organization_id=organization_id
        )

        _, created = await bindings.upsert(assignment)
        _, created_again = await bindings.upsert(assignment)

        assert created is True
        assert created_again is False
