"""Accept invitation use case."""

from pydantic import BaseModel

from ubos.application.usecase.base import BaseUseCase, internal_errors
from ubos.domain.service import InvitationService


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    token: str
    name: str
    password: str


class AcceptedUser(BaseModel):
    """The user the invitation resolved to."""

    id: str
    email: str
    first_name: str
    last_name: str


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    message: str
    user: AcceptedUser
    organization_id: str
    role_id: str


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for turning an invitation token into a user and role binding."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    @internal_errors("accept_invitation")
    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        """Execute accept invitation use case.

        Args:
            request: Token plus the invitee's name and password

        Returns:
            The bound user and the organization/role they joined

        Raises:
            InvalidInvitationError: If the token is unknown or the role is gone
            InvitationAlreadyAcceptedError: If the invitation was already used
            InvitationExpiredError: If the acceptance window has closed
            ValidationError: If the name or password is rejected
        """
        user, invitation = await self.invitation_service.accept(
            request.token, request.name, request.password
        )
        return AcceptInvitationResponse(
            message="Invitation accepted successfully",
            user=AcceptedUser(
                id=str(user.id),
                email=user.email.root,
                first_name=user.first_name,
                last_name=user.last_name,
            ),
            organization_id=str(invitation.organization_id),
            role_id=str(invitation.role_id),
        )
