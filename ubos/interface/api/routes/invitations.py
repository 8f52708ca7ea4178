"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel

from ubos.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    BulkCreateInvitationsRequest,
    BulkCreateInvitationsResponse,
    BulkCreateInvitationsUseCase,
    CreateInvitationRequest,
    CreateInvitationUseCase,
    GetInvitationStatsRequest,
    GetInvitationStatsResponse,
    GetInvitationStatsUseCase,
    InvitationItem,
    InviteeInfo,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from ubos.domain.service import JWTService
from ubos.domain.value import InvitationStatus
from ubos.util.jwt import JWTError

router = APIRouter(
    prefix="/invitations", tags=["invitations"], route_class=DishkaRoute
)


class Caller(BaseModel):
    """Authenticated user and the organization they act in."""

    user_id: UUID
    organization_id: UUID


class CreateInvitationAPIRequest(BaseModel):
    """API request for inviting one person."""

    email: str
    role_id: UUID


class BulkCreateInvitationsAPIRequest(BaseModel):
    """API request for inviting many people."""

    invitations: list[InviteeInfo]


class AcceptInvitationAPIRequest(BaseModel):
    """API request for accepting an invitation."""

    name: str
    password: str


def authenticate(jwt_service: JWTService, auth_token: str | None) -> Caller:
    """Resolve the caller from the auth cookie.

    Args:
        jwt_service: JWT service
        auth_token: JWT token from cookie

    Returns:
        The caller

    Raises:
        HTTPException: 401 if the token is missing, invalid or malformed
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        payload = jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    try:
        return Caller(
            user_id=UUID(payload.user_id),
            organization_id=UUID(payload.organization_id),
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )


@router.post(
    "", response_model=InvitationItem, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> InvitationItem:
    """Invite one person into the caller's organization.

    Args:
        request: Email and role to invite
        create_invitation_use_case: Create invitation use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        The created invitation, without its token
    """
    caller = authenticate(jwt_service, auth_token)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            organization_id=caller.organization_id,
            invited_by_id=caller.user_id,
            email=request.email,
            role_id=request.role_id,
        )
    )


@router.post(
    "/bulk",
    response_model=BulkCreateInvitationsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def bulk_create_invitations(
    request: BulkCreateInvitationsAPIRequest,
    bulk_create_use_case: FromDishka[BulkCreateInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> BulkCreateInvitationsResponse:
    """Invite up to 100 people at once.

    Rows fail independently; the response lists created invitations and
    per-row errors.
    """
    caller = authenticate(jwt_service, auth_token)
    return await bulk_create_use_case.execute(
        BulkCreateInvitationsRequest(
            organization_id=caller.organization_id,
            invited_by_id=caller.user_id,
            invitations=request.invitations,
        )
    )


@router.get("", response_model=ListInvitationsResponse)
async def list_invitations(
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListInvitationsResponse:
    """List the caller's organization invitations, newest first.

    Args:
        list_invitations_use_case: List invitations use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        status_filter: Optional status filter (pending, accepted, expired)
        limit: Maximum number of results (1-100)
        offset: Number of results to skip

    Returns:
        A page of invitations with pagination metadata
    """
    caller = authenticate(jwt_service, auth_token)
    return await list_invitations_use_case.execute(
        ListInvitationsRequest(
            organization_id=caller.organization_id,
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    )


@router.get("/stats", response_model=GetInvitationStatsResponse)
async def get_invitation_stats(
    stats_use_case: FromDishka[GetInvitationStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetInvitationStatsResponse:
    """Count the caller's organization invitations by status."""
    caller = authenticate(jwt_service, auth_token)
    return await stats_use_case.execute(
        GetInvitationStatsRequest(organization_id=caller.organization_id)
    )


@router.post("/{invitation_id}/resend", response_model=ResendInvitationResponse)
async def resend_invitation(
    invitation_id: UUID,
    resend_use_case: FromDishka[ResendInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResendInvitationResponse:
    """Issue a fresh token for a pending invitation and email it again.

    Args:
        invitation_id: Invitation to resend
        resend_use_case: Resend invitation use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        Confirmation with the renewed expiry
    """
    caller = authenticate(jwt_service, auth_token)
    return await resend_use_case.execute(
        ResendInvitationRequest(
            organization_id=caller.organization_id,
            invitation_id=invitation_id,
        )
    )


@router.get("/{token}/validate", response_model=ValidateInvitationResponse)
async def validate_invitation(
    token: str,
    validate_use_case: FromDishka[ValidateInvitationUseCase],
) -> ValidateInvitationResponse:
    """Preview an invitation by token. No authentication required."""
    return await validate_use_case.execute(ValidateInvitationRequest(token=token))


@router.post("/{token}/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    token: str,
    request: AcceptInvitationAPIRequest,
    accept_use_case: FromDishka[AcceptInvitationUseCase],
) -> AcceptInvitationResponse:
    """Accept an invitation. No authentication required; the token is the proof.

    Args:
        token: Invitation token from the emailed link
        request: Invitee's full name and password
        accept_use_case: Accept invitation use case from DI

    Returns:
        The bound user with the organization and role they joined
    """
    return await accept_use_case.execute(
        AcceptInvitationRequest(
            token=token, name=request.name, password=request.password
        )
    )
