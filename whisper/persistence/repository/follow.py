"""PostgreSQL implementation of Follow repository."""

from typing import Dict, Optional
from uuid import UUID

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from whisper.domain.model import Follow
from whisper.domain.repository import FollowRepository
from whisper.domain.value import UserId
from whisper.domain.value.types import ActorKind
from whisper.persistence.mappers import follow_to_dict, row_to_follow
from whisper.persistence.tables import follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _edge(
        self, follower_id: UserId, followee_kind: ActorKind, followee_id: UUID
    ):
        return and_(
            follows_table.c.follower_id == follower_id,
            follows_table.c.followee_kind == followee_kind.value,
            follows_table.c.followee_id == followee_id,
        )

    async def find(
        self, follower_id: UserId, followee_kind: ActorKind, followee_id: UUID
    ) -> Optional[Follow]:
        """Find an edge."""
        stmt = select(follows_table).where(
            self._edge(follower_id, followee_kind, followee_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_follow(row._asdict()) if row else None

    async def save(self, follow: Follow) -> Follow:
        """Insert an edge; duplicates are skipped by the unique constraint."""
        stmt = (
            insert(follows_table)
            .values(**follow_to_dict(follow))
            .on_conflict_do_nothing(constraint="unique_follow")
            .returning(follows_table.c.id)
        )
        result = await self.session.execute(stmt)
        inserted = result.fetchone()
        await self.session.flush()

        if inserted is None:
            raise IntegrityError("Duplicate follow", None, Exception())
        return follow

    async def delete(
        self, follower_id: UserId, followee_kind: ActorKind, followee_id: UUID
    ) -> bool:
        """Delete an edge."""
        stmt = delete(follows_table).where(
            self._edge(follower_id, followee_kind, followee_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_followers(self, followee_kind: ActorKind, followee_id: UUID) -> int:
        """Count edges pointing at an account."""
        stmt = (
            select(func.count())
            .select_from(follows_table)
            .where(follows_table.c.followee_kind == followee_kind.value)
            .where(follows_table.c.followee_id == followee_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_following(self, follower_id: UserId) -> int:
        """Count edges leaving a user."""
        stmt = (
            select(func.count())
            .select_from(follows_table)
            .where(follows_table.c.follower_id == follower_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def follower_counts(self, followee_kind: ActorKind) -> Dict[UUID, int]:
        """Count followers per followed account of one kind."""
        stmt = (
            select(follows_table.c.followee_id, func.count())
            .where(follows_table.c.followee_kind == followee_kind.value)
            .group_by(follows_table.c.followee_id)
        )
        result = await self.session.execute(stmt)
        return {followee_id: count for followee_id, count in result.fetchall()}

    async def delete_by_account(self, kind: ActorKind, account_id: UUID) -> int:
        """Delete every edge that touches an account."""
        as_followee = and_(
            follows_table.c.followee_kind == kind.value,
            follows_table.c.followee_id == account_id,
        )
        condition = (
            or_(follows_table.c.follower_id == account_id, as_followee)
            if kind == ActorKind.USER
            else as_followee
        )
        stmt = delete(follows_table).where(condition)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
