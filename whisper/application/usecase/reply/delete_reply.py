"""Delete reply use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.domain.model import Actor
from whisper.domain.service import ReplyService
from whisper.domain.value import ReplyId


class DeleteReplyRequest(BaseModel):
    """Delete reply request."""

    reply_id: str  # UUID string
    actor: Actor


class DeleteReplyResponse(BaseModel):
    """Delete reply response."""

    removed: int  # The reply plus its descendants


class DeleteReplyUseCase:
    """Use case for removing a reply subtree."""

    def __init__(self, reply_service: ReplyService) -> None:
        self.reply_service = reply_service

    async def execute(self, request: DeleteReplyRequest) -> DeleteReplyResponse:
        removed = await self.reply_service.delete_reply(
            ReplyId(UUID(request.reply_id)), request.actor
        )
        return DeleteReplyResponse(removed=removed)
