"""Domain layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from ubos.config import AuthSettings, InvitationSettings, PasswordPolicySettings
from ubos.domain.repository import (
    InvitationRepository,
    RoleAssignmentRepository,
    RoleRepository,
    UserRepository,
)
from ubos.domain.service import (
    AcceptanceBinder,
    BulkInvitationCoordinator,
    CredentialStore,
    EmailDispatcher,
    EmailOutbox,
    InvitationMailer,
    InvitationService,
    JWTService,
    PasswordPolicy,
    QuotaGuard,
    TokenIssuer,
)
from ubos.persistence.database import should_commit
from ubos.util.di.base import ProviderBase


def _settle_outbox(outbox: EmailOutbox, error: BaseException | None) -> None:
    if should_commit(error):
        outbox.flush()
    else:
        outbox.discard()


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_token_issuer(self, invitation_settings: InvitationSettings) -> TokenIssuer:
        """Provide invitation token issuer."""
        return TokenIssuer(token_bytes=invitation_settings.token_bytes)

    @provide(scope=Scope.APP)
    def get_password_policy(
        self, password_policy_settings: PasswordPolicySettings
    ) -> PasswordPolicy:
        """Provide password policy."""
        return PasswordPolicy(settings=password_policy_settings)

    @provide(scope=Scope.APP)
    def get_email_dispatcher(self, mailer: InvitationMailer) -> EmailDispatcher:
        """Provide background email dispatcher.

        APP-scoped so in-flight deliveries outlive the request that queued them.
        """
        return EmailDispatcher(mailer=mailer)

    @provide
    async def get_email_outbox(
        self, dispatcher: EmailDispatcher
    ) -> AsyncIterator[EmailOutbox]:
        """Provide the request's email outbox.

        Emails are released when the request ends in a committed state and
        dropped otherwise. A database session depends on the outbox, so it
        commits before this runs.
        """
        outbox = EmailOutbox(dispatcher)
        try:
            error = yield outbox
        except BaseException as e:
            _settle_outbox(outbox, e)
            raise
        _settle_outbox(outbox, error)

    @provide
    def get_quota_guard(
        self,
        invitation_repository: InvitationRepository,
        invitation_settings: InvitationSettings,
    ) -> QuotaGuard:
        """Provide pending-invitation quota guard."""
        return QuotaGuard(
            invitation_repository=invitation_repository,
            max_pending=invitation_settings.max_pending_per_organization,
        )

    @provide
    def get_acceptance_binder(
        self,
        user_repository: UserRepository,
        role_assignment_repository: RoleAssignmentRepository,
        credential_store: CredentialStore,
    ) -> AcceptanceBinder:
        """Provide acceptance binder."""
        return AcceptanceBinder(
            user_repository=user_repository,
            role_assignment_repository=role_assignment_repository,
            credential_store=credential_store,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        role_repository: RoleRepository,
        user_repository: UserRepository,
        quota_guard: QuotaGuard,
        token_issuer: TokenIssuer,
        password_policy: PasswordPolicy,
        acceptance_binder: AcceptanceBinder,
        email_outbox: EmailOutbox,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation lifecycle domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            role_repository=role_repository,
            user_repository=user_repository,
            quota_guard=quota_guard,
            token_issuer=token_issuer,
            password_policy=password_policy,
            acceptance_binder=acceptance_binder,
            email_outbox=email_outbox,
            expiry_days=invitation_settings.expiry_days,
        )

    @provide
    def get_bulk_invitation_coordinator(
        self,
        invitation_service: InvitationService,
        quota_guard: QuotaGuard,
        invitation_settings: InvitationSettings,
    ) -> BulkInvitationCoordinator:
        """Provide bulk invitation coordinator."""
        return BulkInvitationCoordinator(
            invitation_service=invitation_service,
            quota_guard=quota_guard,
            max_batch_size=invitation_settings.max_bulk_size,
        )
