"""Invitation token issuing."""

import secrets

from ubos.domain.value import InvitationToken

from .base import Service


class TokenIssuer(Service):
    """Mints opaque, URL-safe invitation tokens.

    Tokens come straight from the operating system CSPRNG and carry no
    metadata. Collisions are negligible; uniqueness is still enforced by
    the invitation repository.
    """

    def __init__(self, token_bytes: int = 32) -> None:
        """Initialize token issuer.

        Args:
            token_bytes: Number of random bytes per token (minimum 16)
        """
        if token_bytes < 16:
            raise ValueError("token_bytes must be at least 16")
        self.token_bytes = token_bytes

    def issue(self) -> InvitationToken:
        """Generate a fresh token."""
        return InvitationToken(secrets.token_urlsafe(self.token_bytes))
