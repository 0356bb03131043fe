"""PostgreSQL implementation of Reply repository."""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from whisper.domain.model import Reply
from whisper.domain.repository import ReplyRepository
from whisper.domain.value import MessageId, ReplyId, UserId
from whisper.domain.value.types import AuthorRef
from whisper.persistence.mappers import reply_to_dict, row_to_reply
from whisper.persistence.repository.message import author_clause
from whisper.persistence.tables import replies_table


class PostgresReplyRepository(ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        stmt = select(replies_table).where(replies_table.c.id == reply_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reply(row._asdict()) if row else None

    async def find_by_message(self, message_id: MessageId) -> List[Reply]:
        """Find all replies to a message, oldest first."""
        stmt = (
            select(replies_table)
            .where(replies_table.c.message_id == message_id)
            .order_by(replies_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_reply(row._asdict()) for row in result.fetchall()]

    async def save(self, reply: Reply) -> Reply:
        """Save a reply (create)."""
        stmt = insert(replies_table).values(**reply_to_dict(reply))
        await self.session.execute(stmt)
        await self.session.flush()
        return reply

    async def delete_many(self, reply_ids: Sequence[ReplyId]) -> int:
        """Delete a batch of replies in one statement."""
        if not reply_ids:
            return 0
        stmt = delete(replies_table).where(replies_table.c.id.in_(reply_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_message(self, message_id: MessageId) -> int:
        """Delete every reply to a message."""
        stmt = delete(replies_table).where(replies_table.c.message_id == message_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_by_author(self, author: AuthorRef) -> int:
        """Count replies attributed to an author."""
        stmt = (
            select(func.count())
            .select_from(replies_table)
            .where(author_clause(replies_table, author))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_per_user(self) -> Dict[UserId, int]:
        """Count replies per user."""
        stmt = (
            select(replies_table.c.user_id, func.count())
            .where(replies_table.c.user_id.is_not(None))
            .group_by(replies_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        return {UserId(user_id): count for user_id, count in result.fetchall()}

    async def clear_author(self, author: AuthorRef) -> int:
        """Remove the identity reference from an author's replies."""
        stmt = (
            update(replies_table)
            .where(author_clause(replies_table, author))
            .values(user_id=None, admin_id=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
