"""Invitation mailers.

Uses aiosmtplib for asynchronous email sending via SMTP.
"""

from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib
import logfire
from pydantic import BaseModel

from ubos.adapter.error import EmailDeliveryError
from ubos.config import EmailSettings
from ubos.domain.service.notification import InvitationMailer
from ubos.domain.value import EmailAddress, InvitationId, InvitationToken


class SmtpInvitationMailer(InvitationMailer):
    """Sends invitation emails over SMTP."""

    def __init__(self, settings: EmailSettings, accept_url_base: str) -> None:
        """Initialize the SMTP mailer.

        Args:
            settings: SMTP configuration
            accept_url_base: Frontend URL the token is appended to,
                e.g. ``https://app.example.com/invite``
        """
        self.settings = settings
        self.accept_url_base = accept_url_base.rstrip("/")

    def accept_url(self, token: InvitationToken) -> str:
        """Link the invitee follows to accept."""
        return f"{self.accept_url_base}/{token.root}"

    async def send(
        self,
        invitation_id: InvitationId,
        email: EmailAddress,
        token: InvitationToken,
        expires_at: datetime,
    ) -> None:
        """Send the invitation email.

        Args:
            invitation_id: Invitation being announced
            email: Recipient
            token: Token embedded in the accept link
            expires_at: When the link stops working

        Raises:
            EmailDeliveryError: If the SMTP exchange fails
        """
        if not self.settings.enabled:
            logfire.info(
                "Email disabled, invitation email skipped",
                invitation_id=str(invitation_id),
            )
            return

        message = self._compose(email, token, expires_at)

        try:
            async with aiosmtplib.SMTP(
                hostname=self.settings.host,
                port=self.settings.port,
                timeout=self.settings.timeout,
                start_tls=self.settings.use_tls,
            ) as smtp:
                if self.settings.username and self.settings.password:
                    await smtp.login(self.settings.username, self.settings.password)
                await smtp.send_message(message)
        except (aiosmtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(f"SMTP delivery failed: {e}") from e

    def _compose(
        self, email: EmailAddress, token: InvitationToken, expires_at: datetime
    ) -> MIMEMultipart:
        message = MIMEMultipart()
        message["Subject"] = "You have been invited"
        message["From"] = f"{self.settings.from_name} <{self.settings.from_email}>"
        message["To"] = email.root
        if self.settings.reply_to:
            message["Reply-To"] = self.settings.reply_to

        body = (
            "You have been invited to join an organization.\n\n"
            f"Accept the invitation: {self.accept_url(token)}\n\n"
            f"This link expires on {expires_at:%Y-%m-%d %H:%M} UTC.\n"
        )
        message.attach(MIMEText(body, "plain"))
        return message


class SentInvitation(BaseModel):
    """One call recorded by the mock mailer."""

    invitation_id: InvitationId
    email: EmailAddress
    token: InvitationToken
    expires_at: datetime


class MockInvitationMailer(InvitationMailer):
    """Mock mailer for testing.

    Records every send instead of talking to a mail server. Set ``fail``
    to make sends raise.
    """

    def __init__(self) -> None:
        self.sent: list[SentInvitation] = []
        self.fail = False

    async def send(
        self,
        invitation_id: InvitationId,
        email: EmailAddress,
        token: InvitationToken,
        expires_at: datetime,
    ) -> None:
        """Record the send, or raise when ``fail`` is set."""
        if self.fail:
            raise EmailDeliveryError("Mock delivery failure")
        self.sent.append(
            SentInvitation(
                invitation_id=invitation_id,
                email=email,
                token=token,
                expires_at=expires_at,
            )
        )
