"""Unit tests for BulkInvitationCoordinator."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from ubos.domain.error import QuotaExceededError, ValidationError
from ubos.domain.repository import InvitationRepository
from ubos.domain.service import (
    BulkInvitationCoordinator,
    BulkInvitationItem,
    InvitationService,
)
from ubos.domain.value import InvitationStatus, RoleId
from tests.conftest import new_organization_id, seed_role, seed_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


def _items(role_id, count, prefix="user"):
    return [
        BulkInvitationItem(email=f"{prefix}{i}@example.com", role_id=role_id)
        for i in range(count)
    ]


class TestBulkInvitationCoordinator:
    """Tests for create_many."""

    @pytest.mark.asyncio
    async def test_creates_every_valid_item(self, unit_env):
        # Arrange
        coordinator = await unit_env.get(BulkInvitationCoordinator)
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)

        # Act
        result = await coordinator.create_many(
            organization_id, _items(role.id, 10), admin.id
        )

        # Assert
        assert len(result.created) == 10
        assert result.failed == []

    @pytest.mark.asyncio
    async def test_batch_over_remaining_quota_creates_nothing(self, unit_env):
        """45 pending plus a batch of 10 should be refused as a whole."""
        # Arrange
        coordinator = await unit_env.get(BulkInvitationCoordinator)
        service = await unit_env.get(InvitationService)
        repo = await unit_env.get(InvitationRepository)
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)
        for i in range(45):
            await service.create(
                organization_id, f"existing{i}@example.com", role.id, admin.id
            )

        # Act
        with pytest.raises(QuotaExceededError):
            await coordinator.create_many(
                organization_id, _items(role.id, 10), admin.id
            )

        # Assert
        assert (
            await repo.count_by_organization(organization_id, InvitationStatus.PENDING)
            == 45
        )

    @pytest.mark.asyncio
    async def test_batch_filling_quota_exactly_is_allowed(self, unit_env):
        coordinator = await unit_env.get(BulkInvitationCoordinator)
        service = await unit_env.get(InvitationService)
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)
        for i in range(45):
            await service.create(
                organization_id, f"existing{i}@example.com", role.id, admin.id
            )

        result = await coordinator.create_many(
            organization_id, _items(role.id, 5), admin.id
        )

        assert len(result.created) == 5

    @pytest.mark.asyncio
    async def test_item_failures_are_isolated(self, unit_env):
        """Bad rows should be reported while good rows are created."""
        # Arrange
        coordinator = await unit_env.get(BulkInvitationCoordinator)
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)
        items = [
            BulkInvitationItem(email="alice@example.com", role_id=role.id),
            BulkInvitationItem(email="not-an-email", role_id=role.id),
            BulkInvitationItem(email="ALICE@example.com", role_id=role.id),
            BulkInvitationItem(email="bob@example.com", role_id=RoleId(uuid4())),
            BulkInvitationItem(email="carol@example.com", role_id=role.id),
        ]

        # Act
        result = await coordinator.create_many(organization_id, items, admin.id)

        # Assert
        assert [i.email.root for i in result.created] == [
            "alice@example.com",
            "carol@example.com",
        ]
        failures = {f.email: f.error for f in result.failed}
        assert failures == {
            "not-an-email": "Invalid email address",
            "ALICE@example.com": "A pending invitation for this email already exists",
            "bob@example.com": "The specified role does not exist in this organization",
        }

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_generic_failure(self, unit_env):
        """Internal faults on one row should not leak or abort the batch."""
        coordinator = await unit_env.get(BulkInvitationCoordinator)
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)
        real_create = coordinator.invitation_service.create

        async def flaky_create(organization_id, email, *args, **kwargs):
            if email == "boom@example.com":
                raise RuntimeError("connection reset by peer at 10.0.0.3")
            return await real_create(organization_id, email, *args, **kwargs)

        with patch.object(
            coordinator.invitation_service,
            "create",
            AsyncMock(side_effect=flaky_create),
        ):
            result = await coordinator.create_many(
                organization_id,
                [
                    BulkInvitationItem(email="boom@example.com", role_id=role.id),
                    BulkInvitationItem(email="fine@example.com", role_id=role.id),
                ],
                admin.id,
            )

        assert len(result.created) == 1
        assert result.failed[0].email == "boom@example.com"
        assert result.failed[0].error == "Failed to create invitation"

    @pytest.mark.asyncio
    async def test_empty_batch_is_rejected(self, unit_env):
        coordinator = await unit_env.get(BulkInvitationCoordinator)

        with pytest.raises(ValidationError, match="At least one"):
            await coordinator.create_many(new_organization_id(), [], uuid4())

    @pytest.mark.asyncio
    async def test_oversized_batch_is_rejected(self, unit_env):
        """More than 100 rows should be refused before any work."""
        coordinator = await unit_env.get(BulkInvitationCoordinator)
        repo = await unit_env.get(InvitationRepository)
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)

        with pytest.raises(ValidationError, match="more than 100"):
            await coordinator.create_many(
                organization_id, _items(role.id, 101), uuid4()
            )

        assert await repo.count_by_organization(organization_id) == 0
