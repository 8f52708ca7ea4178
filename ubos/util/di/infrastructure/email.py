"""Email infrastructure providers."""

from dishka import Scope, provide

from ubos.adapter.email import SmtpInvitationMailer
from ubos.config import Settings
from ubos.domain.service import InvitationMailer
from ubos.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider sending over SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_invitation_mailer(self, settings: Settings) -> InvitationMailer:
        """Provide SMTP invitation mailer.

        Accept links point at the frontend's invitation page.
        """
        return SmtpInvitationMailer(
            settings=settings.email,
            accept_url_base=settings.api.frontend_url
            + settings.invitations.accept_path,
        )
