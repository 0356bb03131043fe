"""Reaction repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from whisper.domain.model.reaction import Reaction
from whisper.domain.value import MessageId
from whisper.domain.value.types import AuthorRef


class ReactionRepository(ABC):
    """Repository for Reaction entity."""

    @abstractmethod
    async def find_by_reactor_and_message(
        self, reactor: AuthorRef, message_id: MessageId
    ) -> Optional[Reaction]:
        """Find a reactor's reaction on a message.

        Args:
            reactor: User or admin reference
            message_id: The message ID

        Returns:
            The reaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, reaction: Reaction) -> Reaction:
        """Save a reaction.

        Raises:
            IntegrityError: If the reactor already reacted to the message
        """
        pass

    @abstractmethod
    async def delete_by_reactor_and_message(
        self, reactor: AuthorRef, message_id: MessageId
    ) -> bool:
        """Delete a reactor's reaction on a message.

        Returns:
            True if a reaction was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_message(self, message_id: MessageId) -> int:
        """Delete every reaction on a message.

        Returns:
            Number of reactions deleted
        """
        pass

    @abstractmethod
    async def delete_by_reactor(self, reactor: AuthorRef) -> List[MessageId]:
        """Delete every reaction left by a reactor.

        Args:
            reactor: User or admin reference

        Returns:
            IDs of the messages the deleted reactions were on
        """
        pass
