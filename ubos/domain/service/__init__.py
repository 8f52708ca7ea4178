"""Domain services."""

from .acceptance_binder import AcceptanceBinder
from .base import Service
from .bulk_invitation import (
    BulkInvitationCoordinator,
    BulkInvitationFailure,
    BulkInvitationItem,
    BulkInvitationResult,
)
from .credential import CredentialStore
from .invitation_service import InvitationService
from .jwt_service import JWTService
from .notification import EmailDispatcher, EmailOutbox, InvitationMailer
from .password_policy import PasswordPolicy
from .quota_guard import QuotaGuard
from .token_issuer import TokenIssuer

__all__ = [
    "AcceptanceBinder",
    "BulkInvitationCoordinator",
    "BulkInvitationFailure",
    "BulkInvitationItem",
    "BulkInvitationResult",
    "CredentialStore",
    "EmailDispatcher",
    "EmailOutbox",
    "InvitationMailer",
    "InvitationService",
    "JWTService",
    "PasswordPolicy",
    "QuotaGuard",
    "Service",
    "TokenIssuer",
]
