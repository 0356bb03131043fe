"""Add reply use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from whisper.domain.model import Actor
from whisper.domain.service import ReplyService
from whisper.domain.value import MessageId, ReplyId
from whisper.domain.value.types import ActorKind


class AddReplyRequest(BaseModel):
    """Add reply request."""

    message_id: str  # UUID string
    content: str
    parent_id: str | None = None  # UUID string, None for top-level
    nickname: str | None = None  # Anonymous replies only
    actor: Actor


class AddReplyResponse(BaseModel):
    """Add reply response."""

    reply_id: str
    message_id: str
    parent_id: str | None
    content: str
    nickname: str
    author_kind: ActorKind
    created_at: datetime


class AddReplyUseCase:
    """Use case for replying to a message or to another reply."""

    def __init__(self, reply_service: ReplyService) -> None:
        """Initialize add reply use case.

        Args:
            reply_service: Reply domain service
        """
        self.reply_service = reply_service

    async def execute(self, request: AddReplyRequest) -> AddReplyResponse:
        """Execute add reply flow.

        Raises:
            ValidationError: If content is blank
            MessageNotFoundError: If the message is missing or not readable
            ParentNotFoundError: If the parent reply is missing or foreign
            MaxDepthExceededError: If the reply would nest too deep
        """
        reply = await self.reply_service.add_reply(
            message_id=MessageId(UUID(request.message_id)),
            content=request.content,
            actor=request.actor,
            parent_id=ReplyId(UUID(request.parent_id)) if request.parent_id else None,
            nickname=request.nickname,
        )

        return AddReplyResponse(
            reply_id=str(reply.id),
            message_id=str(reply.message_id),
            parent_id=str(reply.parent_id) if reply.parent_id else None,
            content=reply.content,
            nickname=reply.nickname,
            author_kind=reply.author.kind,
            created_at=reply.created_at,
        )
