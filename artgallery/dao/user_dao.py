"""UserDAO — users table operations."""

from sqlalchemy import or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.dao.base import BaseDAO
from artgallery.models.user import User


class UserDAO(BaseDAO[User]):
    model = User

    async def get_by_username(self, session: AsyncSession, username: str) -> User | None:
        """Look up a user by username (login flow)."""
        return await self.get_by_field(session, username=username)

    async def username_or_email_taken(
        self, session: AsyncSession, username: str, email: str
    ) -> bool:
        """True if another account already uses *username* or *email*."""
        stmt = select(User.id).where(or_(User.username == username, User.email == email))
        result = await session.execute(stmt)
        return result.first() is not None

    async def upsert(
        self,
        session: AsyncSession,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: str = "admin",
    ) -> User | None:
        """Insert a user or do nothing if username already exists.

        Used at startup to ensure the bootstrap admin account exists.
        """
        stmt = (
            insert(User)
            .values(
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
            )
            .on_conflict_do_nothing(index_elements=["username"])
            .returning(User)
        )
        result = await session.execute(stmt)
        row = result.scalars().first()
        if row is None:
            return await self.get_by_field(session, username=username)
        return row
