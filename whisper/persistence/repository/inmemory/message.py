"""In-memory message repository for testing."""

from collections import Counter
from typing import Optional

from whisper.domain.model.message import Message
from whisper.domain.repository.message import MessageRepository
from whisper.domain.value import MessageId, UserId
from whisper.domain.value.types import AuthorRef, Category


def attributed_to(item, author: AuthorRef) -> bool:
    """Check whether a message, reply or reaction belongs to an author."""
    return item.user_id == author.user_id and item.admin_id == author.admin_id


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._messages: dict[MessageId, Message] = {}

    def _newest_first(self, messages: list[Message]) -> list[Message]:
        order = {message_id: i for i, message_id in enumerate(self._messages)}
        return sorted(
            messages, key=lambda m: (m.created_at, order[m.id]), reverse=True
        )

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        return self._messages.get(message_id)

    async def find_public(
        self,
        category: Optional[Category] = None,
        query: Optional[str] = None,
    ) -> list[Message]:
        """Find public messages, newest first."""
        messages = [m for m in self._messages.values() if m.is_public]

        if category:
            messages = [m for m in messages if m.category == category]

        if query:
            needle = query.lower()
            messages = [
                m
                for m in messages
                if needle in m.content.lower()
                or needle in m.category.value.lower()
                or needle in (m.sender_name or "").lower()
            ]

        return self._newest_first(messages)

    async def find_private_by_recipient(self, recipient: str) -> list[Message]:
        """Find private messages addressed to a recipient, newest first."""
        return self._newest_first(
            [
                m
                for m in self._messages.values()
                if not m.is_public and m.recipient == recipient
            ]
        )

    async def find_public_by_author(self, author: AuthorRef) -> list[Message]:
        """Find an author's public messages, newest first."""
        return self._newest_first(
            [
                m
                for m in self._messages.values()
                if m.is_public and attributed_to(m, author)
            ]
        )

    async def count_private_by_recipient(self, recipient: str) -> int:
        """Count private messages addressed to a recipient."""
        return sum(
            1
            for m in self._messages.values()
            if not m.is_public and m.recipient == recipient
        )

    async def readdress_private(self, old_recipient: str, new_recipient: str) -> int:
        """Move pending private messages to a renamed recipient."""
        changed = 0
        for message_id, message in list(self._messages.items()):
            if not message.is_public and message.recipient == old_recipient:
                self._messages[message_id] = message.model_copy(
                    update={"recipient": new_recipient}
                )
                changed += 1
        return changed

    async def save(self, message: Message) -> Message:
        """Save a message."""
        self._messages[message.id] = message
        return message

    async def mark_public(self, message_id: MessageId) -> Optional[Message]:
        """Conditionally flip a private message to public."""
        message = self._messages.get(message_id)
        if message is None or message.is_public:
            return None
        promoted = message.model_copy(update={"is_public": True})
        self._messages[message_id] = promoted
        return promoted

    async def delete(self, message_id: MessageId) -> bool:
        """Delete a message."""
        return self._messages.pop(message_id, None) is not None

    async def increment_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Increase reply_count."""
        message = self._messages.get(message_id)
        if message:
            self._messages[message_id] = message.model_copy(
                update={"reply_count": message.reply_count + by}
            )

    async def decrement_reply_count(self, message_id: MessageId, by: int = 1) -> None:
        """Decrease reply_count (minimum 0)."""
        message = self._messages.get(message_id)
        if message:
            self._messages[message_id] = message.model_copy(
                update={"reply_count": max(0, message.reply_count - by)}
            )

    async def increment_reaction_count(self, message_id: MessageId) -> None:
        """Increase reaction_count by 1."""
        message = self._messages.get(message_id)
        if message:
            self._messages[message_id] = message.model_copy(
                update={"reaction_count": message.reaction_count + 1}
            )

    async def decrement_reaction_count(self, message_id: MessageId) -> None:
        """Decrease reaction_count by 1 (minimum 0)."""
        message = self._messages.get(message_id)
        if message and message.reaction_count > 0:
            self._messages[message_id] = message.model_copy(
                update={"reaction_count": message.reaction_count - 1}
            )

    async def count_by_author(self, author: AuthorRef) -> int:
        """Count messages attributed to an author."""
        return sum(1 for m in self._messages.values() if attributed_to(m, author))

    async def sum_public_reactions_by_author(self, author: AuthorRef) -> int:
        """Sum reaction counts over an author's public messages."""
        return sum(
            m.reaction_count
            for m in self._messages.values()
            if m.is_public and attributed_to(m, author)
        )

    async def count_per_user(self) -> dict[UserId, int]:
        """Count messages per user."""
        return dict(
            Counter(m.user_id for m in self._messages.values() if m.user_id)
        )

    async def public_reactions_per_user(self) -> dict[UserId, int]:
        """Sum public message reactions per user."""
        totals: Counter[UserId] = Counter()
        for m in self._messages.values():
            if m.user_id and m.is_public:
                totals[m.user_id] += m.reaction_count
        return dict(totals)

    async def clear_author(self, author: AuthorRef) -> int:
        """Remove the identity reference from an author's messages."""
        changed = 0
        for message_id, message in list(self._messages.items()):
            if attributed_to(message, author):
                self._messages[message_id] = message.model_copy(
                    update={"user_id": None, "admin_id": None}
                )
                changed += 1
        return changed
