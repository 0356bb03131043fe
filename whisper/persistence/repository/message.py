"""PostgreSQL implementation of Message repository."""

from typing import Dict, List, Optional

from sqlalchemy import Table, delete, desc, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from whisper.domain.model import Message
from whisper.domain.repository import MessageRepository
from whisper.domain.value import MessageId, UserId
from whisper.domain.value.types import AuthorRef, Category
from whisper.persistence.mappers import message_to_dict, row_to_message
from whisper.persistence.tables import messages_table


def like_pattern(query: str) -> str:
    """Build a substring ILIKE pattern that matches '%' and '_' literally."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def author_clause(table: Table, author: AuthorRef) -> ColumnElement[bool]:
    """Build a WHERE clause matching rows attributed to an author."""
    if author.user_id is not None:
        return table.c.user_id == author.user_id
    if author.admin_id is not None:
        return table.c.admin_id == author.admin_id
    return table.c.user_id.is_(None) & table.c.admin_id.is_(None)


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        stmt = select(messages_table).where(messages_table.c.id == message_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_message(row._asdict()) if row else None

    async def find_public(
        self,
        category: Optional[Category] = None,
        query: Optional[str] = None,
    ) -> List[Message]:
        """Find public messages, newest first."""
        stmt = select(messages_table).where(messages_table.c.is_public.is_(True))

        if category:
            stmt = stmt.where(messages_table.c.category == category.value)

        if query:
            pattern = like_pattern(query)
            stmt = stmt.where(
                or_(
                    messages_table.c.content.ilike(pattern, escape="\\"),
                    messages_table.c.category.ilike(pattern, escape="\\"),
                    messages_table.c.sender_name.ilike(pattern, escape="\\"),
                )
            )

        stmt = stmt.order_by(desc(messages_table.c.created_at))
        result = await self.session.execute(stmt)
        return [row_to_message(row._asdict()) for row in result.fetchall()]

    async def find_private_by_recipient(self, recipient: str) -> List[Message]:
        """Find private messages addressed to a recipient, newest first."""
        stmt = (
            select(messages_table)
            .where(messages_table.c.is_public.is_(False))
            .where(messages_table.c.recipient == recipient)
            .order_by(desc(messages_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_message(row._asdict()) for row in result.fetchall()]

    async def find_public_by_author(self, author: AuthorRef) -> List[Message]:
        """Find an author's public messages, newest first."""
        stmt = (
            select(messages_table)
            .where(author_clause(messages_table, author))
            .where(messages_table.c.is_public.is_(True))
            .order_by(desc(messages_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_message(row._asdict()) for row in result.fetchall()]

    async def count_private_by_recipient(self, recipient: str) -> int:
        """Count private messages addressed to a recipient."""
        stmt = (
            select(func.count())
            .select_from(messages_table)
            .where(messages_table.c.is_public.is_(False))
            .where(messages_table.c.recipient == recipient)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def readdress_private(self, old_recipient: str, new_recipient: str) -> int:
        """Move pending private messages to a renamed recipient."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.is_public.is_(False))
            .where(messages_table.c.recipient == old_recipient)
            .values(recipient=new_recipient)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def save(self, message: Message) -> Message:
        """Save a message (upsert on id)."""
        message_dict = message_to_dict(message)
        stmt = insert(messages_table).values(**message_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[messages_table.c.id],
            set_={k: v for k, v in message_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return message

    async def mark_public(self, message_id: MessageId) -> Optional[Message]:
        """Conditionally flip a private message to public."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.id == message_id)
            .where(messages_table.c.is_public.is_(False))
            .values(is_public=True)
            .returning(messages_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            # Missing, or another transaction promoted it first
            return None

        await self.session.flush()
        return row_to_message(row._asdict())

    async def delete(self, message_id: MessageId) -> bool:
        """Delete a message."""
        stmt = delete(messages_table).where(messages_table.c.id == message_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def increment_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Atomically increase reply_count."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.id == message_id)
            .values(reply_count=messages_table.c.reply_count + by)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Atomically decrease reply_count (minimum 0)."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.id == message_id)
            .values(reply_count=func.greatest(messages_table.c.reply_count - by, 0))
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_reaction_count(self, message_id: MessageId) -> None:
        """Atomically increase reaction_count by 1."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.id == message_id)
            .values(reaction_count=messages_table.c.reaction_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_reaction_count(self, message_id: MessageId) -> None:
        """Atomically decrease reaction_count by 1 (minimum 0)."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.id == message_id)
            .where(messages_table.c.reaction_count > 0)  # Don't go below 0
            .values(reaction_count=messages_table.c.reaction_count - 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def count_by_author(self, author: AuthorRef) -> int:
        """Count messages attributed to an author."""
        stmt = (
            select(func.count())
            .select_from(messages_table)
            .where(author_clause(messages_table, author))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def sum_public_reactions_by_author(self, author: AuthorRef) -> int:
        """Sum reaction counts over an author's public messages."""
        stmt = (
            select(func.coalesce(func.sum(messages_table.c.reaction_count), 0))
            .where(author_clause(messages_table, author))
            .where(messages_table.c.is_public.is_(True))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def count_per_user(self) -> Dict[UserId, int]:
        """Count messages per user."""
        stmt = (
            select(messages_table.c.user_id, func.count())
            .where(messages_table.c.user_id.is_not(None))
            .group_by(messages_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        return {UserId(user_id): count for user_id, count in result.fetchall()}

    async def public_reactions_per_user(self) -> Dict[UserId, int]:
        """Sum public message reactions per user."""
        stmt = (
            select(messages_table.c.user_id, func.sum(messages_table.c.reaction_count))
            .where(messages_table.c.user_id.is_not(None))
            .where(messages_table.c.is_public.is_(True))
            .group_by(messages_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        return {UserId(user_id): int(total) for user_id, total in result.fetchall()}

    async def clear_author(self, author: AuthorRef) -> int:
        """Remove the identity reference from an author's messages."""
        stmt = (
            update(messages_table)
            .where(author_clause(messages_table, author))
            .values(user_id=None, admin_id=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
