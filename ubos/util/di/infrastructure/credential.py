"""Credential infrastructure providers."""

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncSession

from ubos.adapter.credential import Argon2CredentialStore
from ubos.domain.service import CredentialStore
from ubos.util.di.base import ProviderBase


class CredentialProvider(ProviderBase):
    """Credential component base."""

    __mock_component__ = "credential"


class ProdCredentialProvider(CredentialProvider):
    """Production credential provider storing Argon2id hashes in PostgreSQL."""

    __is_mock__ = False
    __depends_on__ = {"persistence"}

    @provide(scope=Scope.REQUEST)
    def get_credential_store(self, session: AsyncSession) -> CredentialStore:
        """Provide credential store bound to the request session."""
        return Argon2CredentialStore(session)
