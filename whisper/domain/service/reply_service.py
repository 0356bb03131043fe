"""Reply domain service.

Replies nest under a message up to a fixed depth. Top-level replies have
depth 1; depth is derived from parent links and never stored.
"""

import re
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from whisper.config import ThreadSettings
from whisper.domain.error import (
    MaxDepthExceededError,
    MessageNotFoundError,
    ParentNotFoundError,
    ReplyNotFoundError,
    ValidationError,
)
from whisper.domain.model import MAX_REPLY_LENGTH, Actor, AnonymousActor, Reply
from whisper.domain.repository import ReplyRepository
from whisper.domain.value import MessageId, ReplyId

from .base import Service
from .message_service import MessageService
from .visibility_service import VisibilityService

ANONYMOUS_NICKNAME = "Anonymous"
MENTION_PATTERN = re.compile(r"@(\w+)")


@dataclass
class ReplyTreeNode:
    """Reply with its nested children."""

    reply: Reply
    depth: int
    children: list["ReplyTreeNode"]


@dataclass
class ContentSegment:
    """Piece of reply text; mentions are rendered with emphasis."""

    text: str
    is_mention: bool = False


class ReplyService(Service):
    """Domain service for reply threads."""

    def __init__(
        self,
        reply_repository: ReplyRepository,
        message_service: MessageService,
        visibility_service: VisibilityService,
        thread_settings: ThreadSettings,
    ) -> None:
        """Initialize reply service.

        Args:
            reply_repository: Reply repository
            message_service: Message domain service
            visibility_service: Privilege checks
            thread_settings: Threading configuration (maximum depth)
        """
        self.reply_repository = reply_repository
        self.message_service = message_service
        self.visibility_service = visibility_service
        self.max_depth = thread_settings.max_reply_depth

    async def add_reply(
        self,
        message_id: MessageId,
        content: str,
        actor: Actor,
        parent_id: Optional[ReplyId] = None,
        nickname: Optional[str] = None,
    ) -> Reply:
        """Reply to a message or to another reply.

        Args:
            message_id: Message being replied to
            content: Reply text
            actor: Acting principal
            parent_id: Parent reply for nested replies (None for top-level)
            nickname: Free-text label for anonymous replies

        Returns:
            Created reply

        Raises:
            ValidationError: If content is blank or too long
            MessageNotFoundError: If the message is missing or not readable
            ParentNotFoundError: If the parent is missing or on another message
            MaxDepthExceededError: If the reply would nest too deep
        """
        with logfire.span(
            "reply_service.add_reply",
            message_id=str(message_id),
            parent_id=str(parent_id) if parent_id else None,
            author_kind=actor.kind.value,
        ):
            content = content.strip()
            if not content:
                raise ValidationError("Reply content cannot be blank")
            if len(content) > MAX_REPLY_LENGTH:
                raise ValidationError(
                    f"Reply content cannot exceed {MAX_REPLY_LENGTH} characters"
                )

            await self.message_service.get_message(message_id, actor)

            depth = 1
            if parent_id:
                parent = await self.reply_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn("Parent reply not found", parent_id=str(parent_id))
                    raise ParentNotFoundError(str(parent_id))
                if parent.message_id != message_id:
                    logfire.warn(
                        "Parent reply belongs to another message",
                        parent_id=str(parent_id),
                        parent_message_id=str(parent.message_id),
                        target_message_id=str(message_id),
                    )
                    raise ParentNotFoundError(str(parent_id))
                depth = await self._depth_of(parent) + 1

            if depth > self.max_depth:
                logfire.warn(
                    "Reply too deep", depth=depth, max_depth=self.max_depth
                )
                raise MaxDepthExceededError(depth, self.max_depth)

            if isinstance(actor, AnonymousActor):
                label = (nickname or "").strip() or ANONYMOUS_NICKNAME
            else:
                label = actor.label or ANONYMOUS_NICKNAME

            author = actor.author_ref
            reply = Reply(
                id=ReplyId(uuid4()),
                message_id=message_id,
                parent_id=parent_id,
                content=content,
                nickname=label,
                user_id=author.user_id,
                admin_id=author.admin_id,
                created_at=datetime.now(),
            )

            saved = await self.reply_repository.save(reply)
            await self.message_service.increment_reply_count(message_id)

            logfire.info(
                "Reply created",
                reply_id=str(saved.id),
                message_id=str(message_id),
                depth=depth,
            )
            return saved

    async def build_tree(self, message_id: MessageId) -> list[ReplyTreeNode]:
        """Assemble the replies of a message into nested nodes.

        Algorithm:
        1. Fetch the flat reply list, oldest first
        2. Bucket replies by parent_id
        3. Recursively build each root's subtree

        Replies whose parent is missing are treated as roots. Sibling order
        follows created_at.

        Args:
            message_id: Message ID

        Returns:
            Root nodes with children populated recursively
        """
        with logfire.span("reply_service.build_tree", message_id=str(message_id)):
            replies = await self.reply_repository.find_by_message(message_id)
            replies.sort(key=lambda r: r.created_at)

            known = {reply.id for reply in replies}
            children: dict[ReplyId, list[Reply]] = defaultdict(list)
            roots: list[Reply] = []
            for reply in replies:
                if reply.parent_id is not None and reply.parent_id in known:
                    children[reply.parent_id].append(reply)
                else:
                    roots.append(reply)

            def build_subtree(reply: Reply, depth: int) -> ReplyTreeNode:
                return ReplyTreeNode(
                    reply=reply,
                    depth=depth,
                    children=[
                        build_subtree(child, depth + 1)
                        for child in children.get(reply.id, [])
                    ],
                )

            tree = [build_subtree(root, 1) for root in roots]
            logfire.info(
                "Built reply tree",
                message_id=str(message_id),
                reply_count=len(replies),
                root_count=len(tree),
            )
            return tree

    def annotate_mentions(self, content: str) -> list[ContentSegment]:
        """Split text into plain and ``@name`` segments.

        Display only: names are not resolved to accounts.

        Args:
            content: Reply text

        Returns:
            Segments in order; concatenating their text yields the input
        """
        segments: list[ContentSegment] = []
        position = 0
        for match in MENTION_PATTERN.finditer(content):
            if match.start() > position:
                segments.append(ContentSegment(content[position : match.start()]))
            segments.append(ContentSegment(match.group(0), is_mention=True))
            position = match.end()
        if position < len(content):
            segments.append(ContentSegment(content[position:]))
        return segments

    async def delete_reply(self, reply_id: ReplyId, acting: Actor) -> int:
        """Delete a reply together with all of its descendants.

        Args:
            reply_id: Reply ID
            acting: Acting principal (must be an admin)

        Returns:
            Number of replies removed

        Raises:
            NotAuthorizedError: If the actor is not an admin
            ReplyNotFoundError: If the reply does not exist or belongs to a
                private message addressed to another admin
        """
        with logfire.span("reply_service.delete_reply", reply_id=str(reply_id)):
            admin = self.visibility_service.require_admin(acting, "delete replies")

            reply = await self.reply_repository.find_by_id(reply_id)
            if not reply:
                logfire.warn("Reply not found", reply_id=str(reply_id))
                raise ReplyNotFoundError(str(reply_id))

            try:
                await self.message_service.get_message(reply.message_id, acting)
            except MessageNotFoundError:
                # Replies under another admin's private message
                raise ReplyNotFoundError(str(reply_id)) from None

            siblings = await self.reply_repository.find_by_message(reply.message_id)
            children: dict[ReplyId, list[ReplyId]] = defaultdict(list)
            for other in siblings:
                if other.parent_id is not None:
                    children[other.parent_id].append(other.id)

            doomed: list[ReplyId] = []
            stack = [reply.id]
            while stack:
                current = stack.pop()
                doomed.append(current)
                stack.extend(children.get(current, []))

            removed = await self.reply_repository.delete_many(doomed)
            await self.message_service.decrement_reply_count(reply.message_id, removed)

            logfire.info(
                "Reply subtree deleted",
                reply_id=str(reply_id),
                message_id=str(reply.message_id),
                admin_id=str(admin.id),
                removed=removed,
            )
            return removed

    async def _depth_of(self, reply: Reply) -> int:
        """Walk parent links up to the root; stops once past max_depth."""
        depth = 1
        current = reply
        while current.parent_id is not None and depth <= self.max_depth:
            parent = await self.reply_repository.find_by_id(current.parent_id)
            if parent is None or parent.message_id != reply.message_id:
                break
            depth += 1
            current = parent
        return depth
