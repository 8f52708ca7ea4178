"""Session token service used to identify API callers."""

import logfire

from ubos.config import AuthSettings
from ubos.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and verifies organization-scoped session tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, organization_id: str) -> str:
        """Mint a token letting ``user_id`` act inside ``organization_id``."""
        return create_token(user_id, organization_id, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Return the token's claims.

        Raises:
            JWTError: If the token is invalid or expired
        """
        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Session token rejected", error=str(e))
            raise
