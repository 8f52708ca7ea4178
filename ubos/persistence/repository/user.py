"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ubos.domain.error import ConflictError
from ubos.domain.model import User
from ubos.domain.repository import UserRepository
from ubos.domain.value import EmailAddress, UserId
from ubos.persistence.mappers import row_to_user, user_to_dict
from ubos.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _first(self, stmt) -> Optional[User]:
        row = (await self.session.execute(stmt)).mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return await self._first(select(users_table).where(users_table.c.id == user_id))

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        return await self._first(
            select(users_table).where(
                func.lower(users_table.c.email) == email.normalized
            )
        )

    async def save(self, user: User) -> User:
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
        )

        # A duplicate email must not poison the surrounding transaction
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError("Email address is already in use") from e

        return user
