"""In-memory reaction repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from whisper.domain.model.reaction import Reaction
from whisper.domain.repository.reaction import ReactionRepository
from whisper.domain.value import MessageId
from whisper.domain.value.types import AuthorRef

from .message import attributed_to


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository for testing."""

    def __init__(self) -> None:
        self._reactions: list[Reaction] = []

    async def find_by_reactor_and_message(
        self, reactor: AuthorRef, message_id: MessageId
    ) -> Optional[Reaction]:
        """Find a reactor's reaction on a message."""
        for reaction in self._reactions:
            if reaction.message_id == message_id and attributed_to(reaction, reactor):
                return reaction
        return None

    async def save(self, reaction: Reaction) -> Reaction:
        """Save a reaction.

        Raises:
            IntegrityError: If the reactor already reacted (duplicate)
        """
        reactor = AuthorRef.resolve(reaction.user_id, reaction.admin_id)
        if await self.find_by_reactor_and_message(reactor, reaction.message_id):
            raise IntegrityError("Duplicate reaction", None, Exception())

        self._reactions.append(reaction)
        return reaction

    async def delete_by_reactor_and_message(
        self, reactor: AuthorRef, message_id: MessageId
    ) -> bool:
        """Delete a reactor's reaction on a message."""
        reaction = await self.find_by_reactor_and_message(reactor, message_id)
        if reaction is None:
            return False
        self._reactions.remove(reaction)
        return True

    async def delete_by_message(self, message_id: MessageId) -> int:
        """Delete every reaction on a message."""
        before = len(self._reactions)
        self._reactions = [r for r in self._reactions if r.message_id != message_id]
        return before - len(self._reactions)

    async def delete_by_reactor(self, reactor: AuthorRef) -> list[MessageId]:
        """Delete every reaction left by a reactor."""
        removed = [r for r in self._reactions if attributed_to(r, reactor)]
        self._reactions = [r for r in self._reactions if not attributed_to(r, reactor)]
        return [r.message_id for r in removed]
