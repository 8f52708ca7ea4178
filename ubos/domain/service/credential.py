"""Credential collaborator interface."""

from ubos.domain.value import UserId


class CredentialStore:
    """Hashes and persists user passwords.

    Implementations must use a memory-hard hash (Argon2id or equivalent)
    and never keep the plaintext.
    """

    async def hash_and_store(self, user_id: UserId, password: str) -> None:
        """Hash ``password`` and store it as the credential of ``user_id``.

        Args:
            user_id: Owner of the credential
            password: Plaintext password, already checked against policy
        """
        raise NotImplementedError
