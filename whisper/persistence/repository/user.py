"""PostgreSQL implementation of User repository."""

from typing import List, Optional

from sqlalchemy import delete, desc, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from whisper.domain.model import User
from whisper.domain.repository import UserRepository
from whisper.domain.value import UserId
from whisper.domain.value.types import Username
from whisper.persistence.mappers import row_to_user, user_to_dict
from whisper.persistence.repository.message import like_pattern
from whisper.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        stmt = select(users_table).where(users_table.c.username == username.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_active(self) -> List[User]:
        """Find all active users, oldest first."""
        stmt = (
            select(users_table)
            .where(users_table.c.is_active.is_(True))
            .order_by(users_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def search(self, query: str, limit: int) -> List[User]:
        """Find active users by username or display name, newest first."""
        pattern = like_pattern(query)
        stmt = (
            select(users_table)
            .where(users_table.c.is_active.is_(True))
            .where(
                or_(
                    users_table.c.username.ilike(pattern, escape="\\"),
                    users_table.c.display_name.ilike(pattern, escape="\\"),
                )
            )
            .order_by(desc(users_table.c.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def save(self, user: User) -> User:
        """Save a user (upsert on id)."""
        user_dict = user_to_dict(user)
        stmt = insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in user_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        stmt = delete(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
