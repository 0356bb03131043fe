"""In-memory reply repository for testing."""

from collections import Counter
from typing import Optional, Sequence

from whisper.domain.model.reply import Reply
from whisper.domain.repository.reply import ReplyRepository
from whisper.domain.value import MessageId, ReplyId, UserId
from whisper.domain.value.types import AuthorRef

from .message import attributed_to


class InMemoryReplyRepository(ReplyRepository):
    """In-memory implementation of ReplyRepository for testing."""

    def __init__(self) -> None:
        self._replies: dict[ReplyId, Reply] = {}

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        return self._replies.get(reply_id)

    async def find_by_message(self, message_id: MessageId) -> list[Reply]:
        """Find all replies to a message in insertion order."""
        return [r for r in self._replies.values() if r.message_id == message_id]

    async def save(self, reply: Reply) -> Reply:
        """Save a reply."""
        self._replies[reply.id] = reply
        return reply

    async def delete_many(self, reply_ids: Sequence[ReplyId]) -> int:
        """Delete a batch of replies."""
        return sum(1 for rid in set(reply_ids) if self._replies.pop(rid, None))

    async def delete_by_message(self, message_id: MessageId) -> int:
        """Delete every reply to a message."""
        doomed = [r.id for r in self._replies.values() if r.message_id == message_id]
        return await self.delete_many(doomed)

    async def count_by_author(self, author: AuthorRef) -> int:
        """Count replies attributed to an author."""
        return sum(1 for r in self._replies.values() if attributed_to(r, author))

    async def count_per_user(self) -> dict[UserId, int]:
        """Count replies per user."""
        return dict(Counter(r.user_id for r in self._replies.values() if r.user_id))

    async def clear_author(self, author: AuthorRef) -> int:
        """Remove the identity reference from an author's replies."""
        changed = 0
        for reply_id, reply in list(self._replies.items()):
            if attributed_to(reply, author):
                self._replies[reply_id] = reply.model_copy(
                    update={"user_id": None, "admin_id": None}
                )
                changed += 1
        return changed
