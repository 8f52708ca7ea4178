"""Unit tests for QuotaGuard."""

from datetime import timedelta
from uuid import uuid4

import pytest

from ubos.domain.error import QuotaExceededError, ValidationError
from ubos.domain.repository import InvitationRepository
from ubos.domain.service import QuotaGuard
from ubos.domain.value import InvitationStatus, RoleId, UserId
from tests.conftest import make_invitation, new_organization_id
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _fill(repo, organization_id, count, status=InvitationStatus.PENDING):
    role_id, inviter_id = RoleId(uuid4()), UserId(uuid4())
    for i in range(count):
        await repo.add(
            make_invitation(
                organization_id,
                role_id,
                inviter_id,
                email=f"user{i}-{status.value}@example.com",
                status=status,
            )
        )


class TestQuotaGuard:
    """Tests for the pending-invitation ceiling."""

    @pytest.mark.asyncio
    async def test_under_ceiling_returns_remaining(self, unit_env):
        """Capacity left should account for the delta."""
        # Arrange
        guard = await unit_env.get(QuotaGuard)
        repo = await unit_env.get(InvitationRepository)
        organization_id = new_organization_id()
        await _fill(repo, organization_id, 10)

        # Act
        remaining = await guard.check_capacity(organization_id, pending_count_delta=5)

        # Assert
        assert remaining == 35

    @pytest.mark.asyncio
    async def test_exactly_at_ceiling_is_allowed(self, unit_env):
        """Reaching exactly 50 pending should pass."""
        guard = await unit_env.get(QuotaGuard)
        repo = await unit_env.get(InvitationRepository)
        organization_id = new_organization_id()
        await _fill(repo, organization_id, 49)

        assert await guard.check_capacity(organization_id) == 0

    @pytest.mark.asyncio
    async def test_over_ceiling_raises(self, unit_env):
        """The 51st pending invitation should be refused."""
        guard = await unit_env.get(QuotaGuard)
        repo = await unit_env.get(InvitationRepository)
        organization_id = new_organization_id()
        await _fill(repo, organization_id, 50)

        with pytest.raises(QuotaExceededError) as exc_info:
            await guard.check_capacity(organization_id)

        assert exc_info.value.current == 50
        assert exc_info.value.requested == 1
        assert exc_info.value.limit == 50

    @pytest.mark.asyncio
    async def test_only_pending_counts(self, unit_env):
        """Accepted and expired invitations should not use quota."""
        guard = await unit_env.get(QuotaGuard)
        repo = await unit_env.get(InvitationRepository)
        organization_id = new_organization_id()
        await _fill(repo, organization_id, 30, InvitationStatus.ACCEPTED)
        await _fill(repo, organization_id, 30, InvitationStatus.EXPIRED)

        assert await guard.check_capacity(organization_id, 50) == 0

    @pytest.mark.asyncio
    async def test_quota_is_per_organization(self, unit_env):
        guard = await unit_env.get(QuotaGuard)
        repo = await unit_env.get(InvitationRepository)
        full_org = new_organization_id()
        await _fill(repo, full_org, 50)

        assert await guard.check_capacity(new_organization_id()) == 49

    @pytest.mark.asyncio
    async def test_rejects_non_positive_delta(self, unit_env):
        guard = await unit_env.get(QuotaGuard)

        with pytest.raises(ValidationError):
            await guard.check_capacity(new_organization_id(), pending_count_delta=0)

    @pytest.mark.asyncio
    async def test_overdue_pending_still_counts(self, unit_env):
        """Pending invitations past expiry count until they are expired."""
        guard = QuotaGuard(await unit_env.get(InvitationRepository), max_pending=2)
        repo = await unit_env.get(InvitationRepository)
        organization_id = new_organization_id()
        await repo.add(
            make_invitation(
                organization_id,
                RoleId(uuid4()),
                UserId(uuid4()),
                expires_in=timedelta(days=-1),
            )
        )

        with pytest.raises(QuotaExceededError):
            await guard.check_capacity(organization_id, 2)
