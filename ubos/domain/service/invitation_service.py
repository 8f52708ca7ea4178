"""Invitation lifecycle domain service."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire
import pydantic

from ubos.domain.error import (
    CannotResendError,
    ConflictError,
    InvalidInvitationError,
    InvitationAlreadyAcceptedError,
    InvitationExpiredError,
    NotFoundError,
    ValidationError,
)
from ubos.domain.model import (
    Invitation,
    InvitationPreview,
    InvitationStats,
    InvitationSummary,
    User,
)
from ubos.domain.model.common import utcnow
from ubos.domain.repository import (
    InvitationRepository,
    RoleRepository,
    UserRepository,
)
from ubos.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    PageMeta,
    PersonName,
    RoleId,
    UserId,
)

from .acceptance_binder import AcceptanceBinder
from .base import Service
from .notification import EmailOutbox
from .password_policy import PasswordPolicy
from .quota_guard import QuotaGuard
from .token_issuer import TokenIssuer

MAX_PAGE_SIZE = 100


class InvitationService(Service):
    """Domain service for the invitation lifecycle.

    Creation, resend, acceptance and listing of invitations. Every status
    change is a conditional update on the repository, so concurrent
    accepts or an accept racing a resend resolve to exactly one winner.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        role_repository: RoleRepository,
        user_repository: UserRepository,
        quota_guard: QuotaGuard,
        token_issuer: TokenIssuer,
        password_policy: PasswordPolicy,
        acceptance_binder: AcceptanceBinder,
        email_outbox: EmailOutbox,
        expiry_days: int = 7,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            role_repository: Role repository
            user_repository: User repository
            quota_guard: Pending-invitation ceiling
            token_issuer: Token generator
            password_policy: Password strength rules
            acceptance_binder: Materializes user and role binding on accept
            email_outbox: Emails released once the request commits
            expiry_days: Acceptance window length
        """
        self.invitation_repository = invitation_repository
        self.role_repository = role_repository
        self.user_repository = user_repository
        self.quota_guard = quota_guard
        self.token_issuer = token_issuer
        self.password_policy = password_policy
        self.acceptance_binder = acceptance_binder
        self.email_outbox = email_outbox
        self.expiry = timedelta(days=expiry_days)

    async def create(
        self,
        organization_id: OrganizationId,
        email: str,
        role_id: RoleId,
        invited_by_id: UserId,
        enforce_quota: bool = True,
    ) -> Invitation:
        """Create a pending invitation and email its token.

        Args:
            organization_id: Organization the invitee is invited into
            email: Invitee email
            role_id: Role granted on acceptance
            invited_by_id: Inviting user
            enforce_quota: Run the per-organization quota check; callers that
                already checked the quota for a whole batch pass False

        Returns:
            The created invitation

        Raises:
            ValidationError: If the email is malformed or the role is unknown
            ConflictError: If a pending invitation exists for the email
            QuotaExceededError: If the organization is at its ceiling
        """
        with logfire.span(
            "invitation_service.create",
            organization_id=str(organization_id),
            role_id=str(role_id),
        ):
            address = self._parse_email(email)

            role = await self.role_repository.find_by_id(organization_id, role_id)
            if not role:
                logfire.warn(
                    "Invitation role not found",
                    organization_id=str(organization_id),
                    role_id=str(role_id),
                )
                raise ValidationError(
                    "The specified role does not exist in this organization"
                )

            existing = await self.invitation_repository.find_pending_by_email(
                organization_id, address
            )
            if existing:
                logfire.warn(
                    "Pending invitation already exists",
                    organization_id=str(organization_id),
                    invitation_id=str(existing.id),
                )
                raise ConflictError(
                    "A pending invitation for this email already exists"
                )

            if enforce_quota:
                await self.quota_guard.check_capacity(organization_id)

            now = utcnow()
            invitation = await self.invitation_repository.add(
                Invitation(
                    id=InvitationId(uuid4()),
                    organization_id=organization_id,
                    email=address,
                    role_id=role_id,
                    token=self.token_issuer.issue(),
                    status=InvitationStatus.PENDING,
                    invited_by_id=invited_by_id,
                    expires_at=now + self.expiry,
                    created_at=now,
                    updated_at=now,
                )
            )
            logfire.info(
                "Invitation created",
                invitation_id=str(invitation.id),
                organization_id=str(organization_id),
                token=invitation.token.masked,
            )

            self.email_outbox.add(invitation)
            return invitation

    async def resend(
        self, organization_id: OrganizationId, invitation_id: InvitationId
    ) -> Invitation:
        """Issue a fresh token and expiry for a pending invitation.

        The previous token stops working immediately. A pending invitation
        whose window has already closed is renewed as well.

        Args:
            organization_id: Organization that owns the invitation
            invitation_id: Invitation to resend

        Returns:
            The refreshed invitation

        Raises:
            NotFoundError: If the invitation is not in the organization
            CannotResendError: If the invitation is no longer pending
        """
        with logfire.span(
            "invitation_service.resend",
            organization_id=str(organization_id),
            invitation_id=str(invitation_id),
        ):
            invitation = await self.invitation_repository.find_by_id(
                organization_id, invitation_id
            )
            if not invitation:
                raise NotFoundError("Invitation", str(invitation_id))
            if invitation.status is not InvitationStatus.PENDING:
                raise CannotResendError(invitation.status.value)

            now = utcnow()
            refreshed = await self.invitation_repository.replace_token(
                invitation.id,
                self.token_issuer.issue(),
                expires_at=now + self.expiry,
                updated_at=now,
            )
            if refreshed is None:
                # Accepted or expired between the read and the update
                current = await self.invitation_repository.find_by_id(
                    organization_id, invitation_id
                )
                status = current.status if current else invitation.status
                raise CannotResendError(status.value)

            logfire.info(
                "Invitation resent",
                invitation_id=str(refreshed.id),
                token=refreshed.token.masked,
            )
            self.email_outbox.add(refreshed)
            return refreshed

    async def accept(
        self, token: str, name: str, password: str
    ) -> tuple[User, Invitation]:
        """Accept an invitation, creating or reusing the user and binding the role.

        Args:
            token: Token from the invitation email
            name: Full name of the invitee
            password: Password for a newly created account

        Returns:
            Tuple of (bound user, accepted invitation)

        Raises:
            InvalidInvitationError: If the token is unknown or the role is gone
            InvitationAlreadyAcceptedError: If the invitation was already used
            InvitationExpiredError: If the acceptance window has closed
            ValidationError: If the name or password is rejected
        """
        with logfire.span("invitation_service.accept", token=token[:8] + "..."):
            invitation = await self._load_usable(token)

            role = await self.role_repository.find_by_id(
                invitation.organization_id, invitation.role_id
            )
            if not role:
                logfire.warn(
                    "Invitation role no longer exists",
                    invitation_id=str(invitation.id),
                    role_id=str(invitation.role_id),
                )
                raise InvalidInvitationError("Invitation role no longer exists")

            person_name = self._check_credentials(name, password)

            now = utcnow()
            claimed = await self.invitation_repository.transition_status(
                invitation.id,
                InvitationStatus.PENDING,
                InvitationStatus.ACCEPTED,
                updated_at=now,
                valid_at=now,
                token=invitation.token,
            )
            if claimed is None:
                await self._raise_lost_claim(invitation)

            user = await self.acceptance_binder.bind(
                invitation.organization_id,
                invitation.role_id,
                invitation.email,
                person_name,
                password,
                assigned_by_id=invitation.invited_by_id,
            )
            accepted = await self.invitation_repository.record_acceptance(
                invitation.id, user.id, now
            )
            logfire.info(
                "Invitation accepted",
                invitation_id=str(accepted.id),
                user_id=str(user.id),
            )
            return user, accepted

    async def preview(self, token: str) -> InvitationPreview:
        """Describe a usable invitation without consuming it.

        Args:
            token: Token from the invitation email

        Returns:
            Invitation details safe to show the invitee

        Raises:
            InvalidInvitationError: If the token is unknown or the role is gone
            InvitationAlreadyAcceptedError: If the invitation was already used
            InvitationExpiredError: If the acceptance window has closed
        """
        with logfire.span("invitation_service.preview", token=token[:8] + "..."):
            invitation = await self._load_usable(token)

            role = await self.role_repository.find_by_id(
                invitation.organization_id, invitation.role_id
            )
            if not role:
                raise InvalidInvitationError("Invitation role no longer exists")

            inviter = await self.user_repository.find_by_id(invitation.invited_by_id)
            return InvitationPreview(
                email=invitation.email,
                organization_id=invitation.organization_id,
                role_id=role.id,
                role_name=role.name,
                invited_by_name=inviter.display_name if inviter else None,
                expires_at=invitation.expires_at,
            )

    async def list_invitations(
        self,
        organization_id: OrganizationId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[InvitationSummary], PageMeta]:
        """List an organization's invitations, newest first, without tokens.

        Args:
            organization_id: Organization to list
            status: Optional status filter
            limit: Page size (1-100)
            offset: Number of invitations to skip

        Returns:
            Tuple of (page of summaries, pagination metadata)

        Raises:
            ValidationError: If limit or offset is out of range
        """
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if offset < 0:
            raise ValidationError("Offset must not be negative")

        with logfire.span(
            "invitation_service.list_invitations",
            organization_id=str(organization_id),
            status=status.value if status else None,
        ):
            invitations = await self.invitation_repository.find_by_organization(
                organization_id, status=status, limit=limit, offset=offset
            )
            total = await self.invitation_repository.count_by_organization(
                organization_id, status
            )
            return (
                [invitation.summary() for invitation in invitations],
                PageMeta.build(total=total, limit=limit, offset=offset),
            )

    async def get_stats(self, organization_id: OrganizationId) -> InvitationStats:
        """Count an organization's invitations per status."""
        with logfire.span(
            "invitation_service.get_stats", organization_id=str(organization_id)
        ):
            return await self.invitation_repository.stats_by_organization(
                organization_id
            )

    async def expire_overdue(self, now: datetime | None = None) -> int:
        """Expire every pending invitation whose window has closed.

        Acceptance re-checks expiry on its own, so running this only keeps
        stored statuses and quota counts current.

        Args:
            now: Reference time, defaults to the current time

        Returns:
            Number of invitations expired
        """
        with logfire.span("invitation_service.expire_overdue"):
            count = await self.invitation_repository.expire_overdue(now or utcnow())
            logfire.info("Overdue invitations expired", count=count)
            return count

    async def _load_usable(self, raw_token: str) -> Invitation:
        """Resolve a token to a pending, in-window invitation.

        An overdue pending invitation is moved to ``expired`` before the
        error is raised.
        """
        try:
            token = InvitationToken(raw_token)
        except pydantic.ValidationError as e:
            raise InvalidInvitationError() from e

        invitation = await self.invitation_repository.find_by_token(token)
        if not invitation:
            logfire.warn("Invitation token not found", token=token.masked)
            raise InvalidInvitationError()
        if invitation.status is InvitationStatus.ACCEPTED:
            raise InvitationAlreadyAcceptedError()
        if invitation.status is InvitationStatus.EXPIRED:
            raise InvitationExpiredError()

        now = utcnow()
        if invitation.is_overdue(now):
            await self.invitation_repository.transition_status(
                invitation.id,
                InvitationStatus.PENDING,
                InvitationStatus.EXPIRED,
                updated_at=now,
            )
            logfire.info(
                "Invitation expired on access", invitation_id=str(invitation.id)
            )
            raise InvitationExpiredError()

        return invitation

    async def _raise_lost_claim(self, invitation: Invitation) -> None:
        """Explain why the accept claim matched no row."""
        current = await self.invitation_repository.find_by_id(
            invitation.organization_id, invitation.id
        )
        logfire.warn(
            "Invitation claim lost",
            invitation_id=str(invitation.id),
            status=current.status.value if current else None,
        )
        if current is None or current.token != invitation.token:
            raise InvalidInvitationError()
        if current.status is InvitationStatus.ACCEPTED:
            raise InvitationAlreadyAcceptedError()
        if current.status is InvitationStatus.PENDING:
            now = utcnow()
            if not current.is_overdue(now):
                raise InvalidInvitationError()
            await self.invitation_repository.transition_status(
                current.id,
                InvitationStatus.PENDING,
                InvitationStatus.EXPIRED,
                updated_at=now,
            )
        raise InvitationExpiredError()

    def _check_credentials(self, name: str, password: str) -> PersonName:
        """Validate name and password together, reporting every problem."""
        problems: list[str] = []
        person_name = None
        try:
            person_name = PersonName(name)
        except pydantic.ValidationError as e:
            problems.extend(
                error["msg"].removeprefix("Value error, ") for error in e.errors()
            )

        problems.extend(self.password_policy.violations(password))
        if problems or person_name is None:
            raise ValidationError("Invalid acceptance details", details=problems)
        return person_name

    @staticmethod
    def _parse_email(email: str) -> EmailAddress:
        try:
            return EmailAddress(email)
        except pydantic.ValidationError as e:
            raise ValidationError("Invalid email address") from e
