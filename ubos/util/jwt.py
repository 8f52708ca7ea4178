"""Session JWTs scoping a caller to one organization."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from ubos.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims of a session token."""

    user_id: str
    organization_id: str
    exp: datetime


class JWTError(Exception):
    """Token is malformed, forged, expired or missing claims."""


def create_token(user_id: str, organization_id: str, settings: AuthSettings) -> str:
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)
    claims = {"user_id": user_id, "organization_id": organization_id, "exp": expiry}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode ``token`` and check its signature and expiry.

    Raises:
        JWTError: If the token is expired or otherwise unusable
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return TokenPayload(**claims)
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except (jwt.InvalidTokenError, ValueError) as e:
        # ValueError covers claims that fail TokenPayload validation
        raise JWTError("Invalid token") from e
