"""Password credential stores using Argon2id."""

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, VerifyMismatchError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ubos.adapter.error import CredentialStoreError
from ubos.domain.model.common import utcnow
from ubos.domain.service.credential import CredentialStore
from ubos.domain.value import UserId
from ubos.persistence.tables import user_credentials_table


class Argon2CredentialStore(CredentialStore):
    """Stores Argon2id password hashes in ``user_credentials``.

    Writes through the request session, so the credential commits or rolls
    back together with the rest of the acceptance.
    """

    def __init__(self, session: AsyncSession, hasher: PasswordHasher | None = None):
        """Initialize credential store.

        Args:
            session: SQLAlchemy async session
            hasher: Argon2 hasher, library defaults (Argon2id) when omitted
        """
        self.session = session
        self.hasher = hasher or PasswordHasher()

    async def hash_and_store(self, user_id: UserId, password: str) -> None:
        """Hash the password and upsert it as the user's credential.

        Raises:
            CredentialStoreError: If hashing or the write fails
        """
        try:
            password_hash = self.hasher.hash(password)
        except HashingError as e:
            raise CredentialStoreError("Password hashing failed") from e

        now = utcnow()
        stmt = (
            pg_insert(user_credentials_table)
            .values(user_id=user_id, password_hash=password_hash, updated_at=now)
            .on_conflict_do_update(
                index_elements=[user_credentials_table.c.user_id],
                set_={"password_hash": password_hash, "updated_at": now},
            )
        )
        try:
            await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise CredentialStoreError("Could not store credential") from e


class MockCredentialStore(CredentialStore):
    """In-memory credential store for testing.

    Hashes with Argon2 like production, so ``verify`` exercises the real
    hash format.
    """

    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self.hasher = hasher or PasswordHasher()
        self.hashes: dict[UserId, str] = {}

    async def hash_and_store(self, user_id: UserId, password: str) -> None:
        """Hash the password and keep it in memory."""
        self.hashes[user_id] = self.hasher.hash(password)

    def verify(self, user_id: UserId, password: str) -> bool:
        """Check a password against the stored hash."""
        password_hash = self.hashes.get(user_id)
        if password_hash is None:
            return False
        try:
            return self.hasher.verify(password_hash, password)
        except VerifyMismatchError:
            return False
