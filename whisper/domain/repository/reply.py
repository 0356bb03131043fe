"""Reply repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from whisper.domain.model.reply import Reply
from whisper.domain.value import MessageId, ReplyId, UserId
from whisper.domain.value.types import AuthorRef


class ReplyRepository(ABC):
    """Repository for Reply entity."""

    @abstractmethod
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_message(self, message_id: MessageId) -> List[Reply]:
        """Find all replies to a message, oldest first.

        Args:
            message_id: The message ID

        Returns:
            Flat list of replies ordered by created_at
        """
        pass

    @abstractmethod
    async def save(self, reply: Reply) -> Reply:
        """Save a reply.

        Args:
            reply: The reply to save

        Returns:
            The saved reply
        """
        pass

    @abstractmethod
    async def delete_many(self, reply_ids: Sequence[ReplyId]) -> int:
        """Delete a batch of replies in one statement.

        Args:
            reply_ids: IDs to delete

        Returns:
            Number of replies deleted
        """
        pass

    @abstractmethod
    async def delete_by_message(self, message_id: MessageId) -> int:
        """Delete every reply to a message.

        Args:
            message_id: The message ID

        Returns:
            Number of replies deleted
        """
        pass

    @abstractmethod
    async def count_by_author(self, author: AuthorRef) -> int:
        """Count replies attributed to an author."""
        pass

    @abstractmethod
    async def count_per_user(self) -> Dict[UserId, int]:
        """Count replies for every user that has at least one."""
        pass

    @abstractmethod
    async def clear_author(self, author: AuthorRef) -> int:
        """Remove the identity reference from an author's replies.

        Args:
            author: User or admin reference

        Returns:
            Number of replies changed
        """
        pass
