"""Invitation email adapter."""

from .mailer import MockInvitationMailer, SentInvitation, SmtpInvitationMailer

__all__ = ["MockInvitationMailer", "SentInvitation", "SmtpInvitationMailer"]
