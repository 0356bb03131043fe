"""Get message thread use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from whisper.application.usecase.common import MessageInfo
from whisper.domain.model import Actor
from whisper.domain.service import (
    MessageService,
    ReactionService,
    ReplyService,
    ReplyTreeNode,
)
from whisper.domain.value import MessageId
from whisper.domain.value.types import ActorKind


class ContentSegmentResponse(BaseModel):
    """Piece of reply text."""

    text: str
    is_mention: bool


class ReplyNodeResponse(BaseModel):
    """Reply with its nested children.

    Recursive structure mirroring the domain tree.
    """

    reply_id: str
    parent_id: str | None
    content: str
    segments: list[ContentSegmentResponse]
    nickname: str
    author_kind: ActorKind
    user_id: str | None
    admin_id: str | None
    depth: int
    created_at: datetime
    children: list["ReplyNodeResponse"]

    @classmethod
    def from_domain(
        cls, node: ReplyTreeNode, reply_service: ReplyService
    ) -> "ReplyNodeResponse":
        """Convert a domain tree node, annotating mentions on the way."""
        reply = node.reply
        return cls(
            reply_id=str(reply.id),
            parent_id=str(reply.parent_id) if reply.parent_id else None,
            content=reply.content,
            segments=[
                ContentSegmentResponse(text=s.text, is_mention=s.is_mention)
                for s in reply_service.annotate_mentions(reply.content)
            ],
            nickname=reply.nickname,
            author_kind=reply.author.kind,
            user_id=str(reply.user_id) if reply.user_id else None,
            admin_id=str(reply.admin_id) if reply.admin_id else None,
            depth=node.depth,
            created_at=reply.created_at,
            children=[cls.from_domain(child, reply_service) for child in node.children],
        )


class GetThreadRequest(BaseModel):
    """Get thread request."""

    message_id: str  # UUID string
    actor: Actor


class GetThreadResponse(BaseModel):
    """Get thread response."""

    message: MessageInfo
    replies: list[ReplyNodeResponse]
    has_reacted: bool


class GetThreadUseCase:
    """Use case for a message with its nested reply tree."""

    def __init__(
        self,
        message_service: MessageService,
        reply_service: ReplyService,
        reaction_service: ReactionService,
    ) -> None:
        """Initialize get thread use case.

        Args:
            message_service: Message domain service
            reply_service: Reply domain service
            reaction_service: Reaction domain service
        """
        self.message_service = message_service
        self.reply_service = reply_service
        self.reaction_service = reaction_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Load the message (checks read access)
        2. Build the reply tree
        3. Check whether the actor reacted

        Raises:
            MessageNotFoundError: If missing or not readable by the actor
        """
        message_id = MessageId(UUID(request.message_id))
        message = await self.message_service.get_message(message_id, request.actor)
        tree = await self.reply_service.build_tree(message_id)
        has_reacted = await self.reaction_service.has_reacted(
            message_id, request.actor
        )

        return GetThreadResponse(
            message=MessageInfo.from_domain(message),
            replies=[
                ReplyNodeResponse.from_domain(node, self.reply_service)
                for node in tree
            ],
            has_reacted=has_reacted,
        )
