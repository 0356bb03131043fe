"""Message repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from whisper.domain.model.message import Message
from whisper.domain.value import MessageId, UserId
from whisper.domain.value.types import AuthorRef, Category


class MessageRepository(ABC):
    """Repository for Message entity.

    Defines the contract for message persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID.

        Args:
            message_id: The message's unique identifier

        Returns:
            The message if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_public(
        self,
        category: Optional[Category] = None,
        query: Optional[str] = None,
    ) -> List[Message]:
        """Find public messages, newest first.

        Args:
            category: Only return messages in this category
            query: Case-insensitive substring matched against content,
                category and sender name

        Returns:
            List of public messages
        """
        pass

    @abstractmethod
    async def find_private_by_recipient(self, recipient: str) -> List[Message]:
        """Find private messages addressed to a recipient, newest first.

        Args:
            recipient: Admin display name

        Returns:
            List of private messages
        """
        pass

    @abstractmethod
    async def find_public_by_author(self, author: AuthorRef) -> List[Message]:
        """Find an author's public messages, newest first.

        Args:
            author: User or admin reference

        Returns:
            List of public messages attributed to the author
        """
        pass

    @abstractmethod
    async def count_private_by_recipient(self, recipient: str) -> int:
        """Count private messages still waiting in a recipient's inbox.

        Args:
            recipient: Admin display name

        Returns:
            Number of private messages
        """
        pass

    @abstractmethod
    async def readdress_private(self, old_recipient: str, new_recipient: str) -> int:
        """Move pending private messages to a renamed recipient.

        Public messages keep the name they were sent to.

        Args:
            old_recipient: Previous admin display name
            new_recipient: New admin display name

        Returns:
            Number of messages changed
        """
        pass

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Save a message (create or update).

        Args:
            message: The message to save

        Returns:
            The saved message
        """
        pass

    @abstractmethod
    async def mark_public(self, message_id: MessageId) -> Optional[Message]:
        """Flip a private message to public.

        This is a conditional update: only a message that is still private
        is changed, so of two concurrent callers only one gets a result.

        Args:
            message_id: The message ID

        Returns:
            The updated message, or None if it is missing or already public
        """
        pass

    @abstractmethod
    async def delete(self, message_id: MessageId) -> bool:
        """Delete a message.

        Args:
            message_id: The message ID to delete

        Returns:
            True if a message was deleted
        """
        pass

    @abstractmethod
    async def increment_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Atomically increase the cached reply count.

        Args:
            message_id: The message ID
            by: Amount to add
        """
        pass

    @abstractmethod
    async def decrement_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Atomically decrease the cached reply count (minimum 0).

        Args:
            message_id: The message ID
            by: Amount to subtract
        """
        pass

    @abstractmethod
    async def increment_reaction_count(self, message_id: MessageId) -> None:
        """Atomically increase the cached reaction count by one."""
        pass

    @abstractmethod
    async def decrement_reaction_count(self, message_id: MessageId) -> None:
        """Atomically decrease the cached reaction count by one (minimum 0)."""
        pass

    @abstractmethod
    async def count_by_author(self, author: AuthorRef) -> int:
        """Count messages attributed to an author.

        Args:
            author: User or admin reference

        Returns:
            Number of messages, public and private
        """
        pass

    @abstractmethod
    async def sum_public_reactions_by_author(self, author: AuthorRef) -> int:
        """Sum reaction counts over an author's public messages.

        Args:
            author: User or admin reference

        Returns:
            Total reactions received
        """
        pass

    @abstractmethod
    async def count_per_user(self) -> Dict[UserId, int]:
        """Count messages for every user that has at least one.

        Returns:
            Mapping of user ID to message count
        """
        pass

    @abstractmethod
    async def public_reactions_per_user(self) -> Dict[UserId, int]:
        """Sum public message reactions for every user that has any.

        Returns:
            Mapping of user ID to reaction total
        """
        pass

    @abstractmethod
    async def clear_author(self, author: AuthorRef) -> int:
        """Remove the identity reference from an author's messages.

        The sender name is left untouched.

        Args:
            author: User or admin reference

        Returns:
            Number of messages changed
        """
        pass
