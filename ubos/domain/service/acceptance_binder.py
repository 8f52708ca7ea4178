"""Materializes the user and role binding for an accepted invitation."""

from uuid import uuid4

import logfire

from ubos.domain.error import ConflictError
from ubos.domain.model import RoleAssignment, User
from ubos.domain.repository import RoleAssignmentRepository, UserRepository
from ubos.domain.value import EmailAddress, OrganizationId, PersonName, RoleId, UserId

from .base import Service
from .credential import CredentialStore


class AcceptanceBinder(Service):
    """Finds or creates the invitee and binds them to the invited role."""

    def __init__(
        self,
        user_repository: UserRepository,
        role_assignment_repository: RoleAssignmentRepository,
        credential_store: CredentialStore,
    ) -> None:
        """Initialize acceptance binder.

        Args:
            user_repository: User repository
            role_assignment_repository: Role binding repository
            credential_store: Password hashing collaborator
        """
        self.user_repository = user_repository
        self.role_assignment_repository = role_assignment_repository
        self.credential_store = credential_store

    async def bind(
        self,
        organization_id: OrganizationId,
        role_id: RoleId,
        email: EmailAddress,
        name: PersonName,
        password: str,
        assigned_by_id: UserId | None,
    ) -> User:
        """Bind the invitee to ``role_id`` inside ``organization_id``.

        An existing user with the same email (case-insensitive) is reused
        as-is, keeping their profile and credential. Otherwise a new user
        is created from ``name`` and ``password``.

        Args:
            organization_id: Organization being joined
            role_id: Role granted by the invitation
            email: Invitee email
            name: Full name supplied at acceptance
            password: Plaintext password, already checked against policy
            assigned_by_id: Inviter, recorded on the binding

        Returns:
            The bound user
        """
        with logfire.span(
            "acceptance_binder.bind",
            organization_id=str(organization_id),
            role_id=str(role_id),
        ):
            user = await self.user_repository.find_by_email(email)
            if user is None:
                user = await self._create_user(email, name, password)
            else:
                logfire.info("Reusing existing user", user_id=str(user.id))

            _, created = await self.role_assignment_repository.upsert(
                RoleAssignment(
                    user_id=user.id,
                    role_id=role_id,
                    organization_id=organization_id,
                    assigned_by_id=assigned_by_id,
                )
            )
            logfire.info(
                "Role bound",
                user_id=str(user.id),
                role_id=str(role_id),
                created=created,
            )
            return user

    async def _create_user(
        self, email: EmailAddress, name: PersonName, password: str
    ) -> User:
        """Create the invitee's account, or adopt one that just appeared.

        Two invitations for the same address (say, from different
        organizations) can be accepted at once. Both miss the email lookup
        and the second insert hits the unique email. The account the other
        acceptance created is reused instead, keeping its credential.
        """
        try:
            user = await self.user_repository.save(
                User(
                    id=UserId(uuid4()),
                    email=email,
                    first_name=name.first_name,
                    last_name=name.last_name,
                )
            )
        except ConflictError:
            existing = await self.user_repository.find_by_email(email)
            if existing is None:
                raise
            logfire.info(
                "User created concurrently, reusing it", user_id=str(existing.id)
            )
            return existing

        await self.credential_store.hash_and_store(user.id, password)
        logfire.info("User created from invitation", user_id=str(user.id))
        return user
