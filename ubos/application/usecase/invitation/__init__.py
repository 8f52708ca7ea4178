"""Invitation use cases."""

from ubos.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from ubos.application.usecase.invitation.bulk_create_invitations import (
    BulkCreateInvitationsRequest,
    BulkCreateInvitationsResponse,
    BulkCreateInvitationsUseCase,
    InviteeInfo,
)
from ubos.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationUseCase,
    InvitationItem,
)
from ubos.application.usecase.invitation.expire_invitations import (
    ExpireInvitationsRequest,
    ExpireInvitationsResponse,
    ExpireInvitationsUseCase,
)
from ubos.application.usecase.invitation.get_invitation_stats import (
    GetInvitationStatsRequest,
    GetInvitationStatsResponse,
    GetInvitationStatsUseCase,
)
from ubos.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from ubos.application.usecase.invitation.resend_invitation import (
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from ubos.application.usecase.invitation.validate_invitation import (
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "BulkCreateInvitationsRequest",
    "BulkCreateInvitationsResponse",
    "BulkCreateInvitationsUseCase",
    "CreateInvitationRequest",
    "CreateInvitationUseCase",
    "ExpireInvitationsRequest",
    "ExpireInvitationsResponse",
    "ExpireInvitationsUseCase",
    "GetInvitationStatsRequest",
    "GetInvitationStatsResponse",
    "GetInvitationStatsUseCase",
    "InvitationItem",
    "InviteeInfo",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "ResendInvitationRequest",
    "ResendInvitationResponse",
    "ResendInvitationUseCase",
    "ValidateInvitationRequest",
    "ValidateInvitationResponse",
    "ValidateInvitationUseCase",
]
