"""Unit tests for invitation use cases."""

from unittest.mock import AsyncMock, patch
from uuid import UUID, uuid4

import pytest

from ubos.application.error import InternalError
from ubos.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
    BulkCreateInvitationsRequest,
    BulkCreateInvitationsUseCase,
    CreateInvitationRequest,
    CreateInvitationUseCase,
    ExpireInvitationsRequest,
    ExpireInvitationsUseCase,
    GetInvitationStatsRequest,
    GetInvitationStatsUseCase,
    InviteeInfo,
    ListInvitationsRequest,
    ListInvitationsUseCase,
    ResendInvitationRequest,
    ResendInvitationUseCase,
    ValidateInvitationRequest,
    ValidateInvitationUseCase,
)
from ubos.domain.error import ConflictError, InvalidInvitationError
from ubos.domain.repository import InvitationRepository
from ubos.domain.value import InvitationStatus
from tests.conftest import STRONG_PASSWORD, new_organization_id, seed_role, seed_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _create(env, organization_id, role_id, admin_id, email="alice@example.com"):
    use_case = await env.get(CreateInvitationUseCase)
    return await use_case.execute(
        CreateInvitationRequest(
            organization_id=organization_id,
            invited_by_id=admin_id,
            email=email,
            role_id=role_id,
        )
    )


class TestInvitationUseCases:
    """Tests for the invitation use cases end to end over in-memory storage."""

    @pytest.mark.asyncio
    async def test_create_returns_item_without_token(self, unit_env):
        # Arrange
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)

        # Act
        item = await _create(unit_env, organization_id, role.id, admin.id)

        # Assert
        assert item.email == "alice@example.com"
        assert item.status == InvitationStatus.PENDING
        assert item.invited_by_id == str(admin.id)
        assert "token" not in item.model_dump()

    @pytest.mark.asyncio
    async def test_validate_then_accept(self, unit_env):
        """The invitee previews, then accepts with their name and password."""
        # Arrange
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id, name="Engineer")
        admin = await seed_user(unit_env)
        item = await _create(unit_env, organization_id, role.id, admin.id)
        repo = await unit_env.get(InvitationRepository)
        invitation = await repo.find_by_id(organization_id, UUID(item.id))

        validate = await unit_env.get(ValidateInvitationUseCase)
        accept = await unit_env.get(AcceptInvitationUseCase)

        # Act
        preview = await validate.execute(
            ValidateInvitationRequest(token=invitation.token.root)
        )
        response = await accept.execute(
            AcceptInvitationRequest(
                token=invitation.token.root,
                name="Alice Smith",
                password=STRONG_PASSWORD,
            )
        )

        # Assert
        assert preview.valid is True
        assert preview.role_name == "Engineer"
        assert preview.invited_by_name == "Ada Admin"
        assert response.message == "Invitation accepted successfully"
        assert response.user.first_name == "Alice"
        assert response.user.last_name == "Smith"
        assert response.organization_id == str(organization_id)
        assert response.role_id == str(role.id)

    @pytest.mark.asyncio
    async def test_bulk_reports_counts(self, unit_env):
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)
        use_case = await unit_env.get(BulkCreateInvitationsUseCase)

        response = await use_case.execute(
            BulkCreateInvitationsRequest(
                organization_id=organization_id,
                invited_by_id=admin.id,
                invitations=[
                    InviteeInfo(email="a@example.com", role_id=role.id),
                    InviteeInfo(email="bad", role_id=role.id),
                ],
            )
        )

        assert response.created == 1
        assert response.failed == 1
        assert response.invitations[0].email == "a@example.com"
        assert response.errors[0].email == "bad"

    @pytest.mark.asyncio
    async def test_list_stats_resend_and_expire(self, unit_env):
        # Arrange
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)
        first = await _create(unit_env, organization_id, role.id, admin.id)
        await _create(
            unit_env, organization_id, role.id, admin.id, email="bob@example.com"
        )

        list_use_case = await unit_env.get(ListInvitationsUseCase)
        stats_use_case = await unit_env.get(GetInvitationStatsUseCase)
        resend_use_case = await unit_env.get(ResendInvitationUseCase)
        expire_use_case = await unit_env.get(ExpireInvitationsUseCase)

        # Act
        listing = await list_use_case.execute(
            ListInvitationsRequest(organization_id=organization_id, limit=1)
        )
        stats = await stats_use_case.execute(
            GetInvitationStatsRequest(organization_id=organization_id)
        )
        resent = await resend_use_case.execute(
            ResendInvitationRequest(
                organization_id=organization_id, invitation_id=first.id
            )
        )
        expired = await expire_use_case.execute(ExpireInvitationsRequest())

        # Assert
        assert len(listing.invitations) == 1
        assert listing.pagination.total == 2
        assert listing.pagination.has_next is True
        assert (stats.pending, stats.total) == (2, 2)
        assert resent.message == "Invitation resent successfully"
        assert resent.invitation.expires_at >= first.expires_at
        assert expired.expired == 0

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self, unit_env):
        organization_id = new_organization_id()
        role = await seed_role(unit_env, organization_id)
        admin = await seed_user(unit_env)
        await _create(unit_env, organization_id, role.id, admin.id)

        with pytest.raises(ConflictError):
            await _create(unit_env, organization_id, role.id, admin.id)

    @pytest.mark.asyncio
    async def test_unexpected_errors_become_internal(self, unit_env):
        """Infrastructure faults should not leak their details."""
        # Arrange
        use_case = await unit_env.get(GetInvitationStatsUseCase)

        # Act
        with patch.object(
            use_case.invitation_service,
            "get_stats",
            AsyncMock(side_effect=RuntimeError("relation invitations does not exist")),
        ):
            with pytest.raises(InternalError) as exc_info:
                await use_case.execute(
                    GetInvitationStatsRequest(organization_id=new_organization_id())
                )

        # Assert
        assert str(exc_info.value) == "Internal error during get_invitation_stats"
        assert "relation" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_accept_unknown_token_is_domain_error(self, unit_env):
        accept = await unit_env.get(AcceptInvitationUseCase)

        with pytest.raises(InvalidInvitationError):
            await accept.execute(
                AcceptInvitationRequest(
                    token=str(uuid4()), name="Alice Smith", password=STRONG_PASSWORD
                )
            )
