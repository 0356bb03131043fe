"""PostgreSQL implementation of Reaction repository."""

from typing import List, Optional

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from whisper.domain.model import Reaction
from whisper.domain.repository import ReactionRepository
from whisper.domain.value import MessageId
from whisper.domain.value.types import AuthorRef
from whisper.persistence.mappers import reaction_to_dict, row_to_reaction
from whisper.persistence.repository.message import author_clause
from whisper.persistence.tables import reactions_table


class PostgresReactionRepository(ReactionRepository):
    """PostgreSQL implementation of ReactionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_reactor_and_message(
        self, reactor: AuthorRef, message_id: MessageId
    ) -> Optional[Reaction]:
        """Find a reactor's reaction on a message."""
        stmt = select(reactions_table).where(
            and_(
                author_clause(reactions_table, reactor),
                reactions_table.c.message_id == message_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reaction(row._asdict()) if row else None

    async def save(self, reaction: Reaction) -> Reaction:
        """Save a reaction (raises IntegrityError on duplicate)."""
        stmt = insert(reactions_table).values(**reaction_to_dict(reaction))
        await self.session.execute(stmt)
        await self.session.flush()
        return reaction

    async def delete_by_reactor_and_message(
        self, reactor: AuthorRef, message_id: MessageId
    ) -> bool:
        """Delete a reactor's reaction on a message."""
        stmt = delete(reactions_table).where(
            and_(
                author_clause(reactions_table, reactor),
                reactions_table.c.message_id == message_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_message(self, message_id: MessageId) -> int:
        """Delete every reaction on a message."""
        stmt = delete(reactions_table).where(
            reactions_table.c.message_id == message_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_reactor(self, reactor: AuthorRef) -> List[MessageId]:
        """Delete every reaction left by a reactor."""
        stmt = (
            delete(reactions_table)
            .where(author_clause(reactions_table, reactor))
            .returning(reactions_table.c.message_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return [MessageId(row.message_id) for row in result.fetchall()]
