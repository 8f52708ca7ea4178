"""Mock email providers for testing."""

from dishka import Scope, provide

from ubos.adapter.email import MockInvitationMailer
from ubos.domain.service import InvitationMailer
from ubos.util.di.infrastructure.email import EmailProvider


class MockEmailProvider(EmailProvider):
    """Mock email provider recording sent invitations in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_invitation_mailer(self) -> MockInvitationMailer:
        return MockInvitationMailer()

    @provide(scope=Scope.APP)
    def get_invitation_mailer(self, mailer: MockInvitationMailer) -> InvitationMailer:
        """Provide recording invitation mailer."""
        return mailer
