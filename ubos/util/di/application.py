"""Application layer DI providers."""

from dishka import Scope, provide

from ubos.application.usecase.invitation import (
    AcceptInvitationUseCase,
    BulkCreateInvitationsUseCase,
    CreateInvitationUseCase,
    ExpireInvitationsUseCase,
    GetInvitationStatsUseCase,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
    ValidateInvitationUseCase,
)
from ubos.domain.service import BulkInvitationCoordinator, InvitationService
from ubos.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invitation management (organization admins)
    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_bulk_create_invitations_use_case(
        self, coordinator: BulkInvitationCoordinator
    ) -> BulkCreateInvitationsUseCase:
        """Provide bulk create invitations use case."""
        return BulkCreateInvitationsUseCase(coordinator=coordinator)

    @provide(scope=Scope.REQUEST)
    def get_list_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_resend_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ResendInvitationUseCase:
        """Provide resend invitation use case."""
        return ResendInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_invitation_stats_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationStatsUseCase:
        """Provide invitation stats use case."""
        return GetInvitationStatsUseCase(invitation_service=invitation_service)

    # Invitee-facing use cases
    @provide(scope=Scope.REQUEST)
    def get_validate_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ValidateInvitationUseCase:
        """Provide validate invitation use case."""
        return ValidateInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(invitation_service=invitation_service)

    # Maintenance
    @provide(scope=Scope.REQUEST)
    def get_expire_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ExpireInvitationsUseCase:
        """Provide expire invitations use case."""
        return ExpireInvitationsUseCase(invitation_service=invitation_service)
