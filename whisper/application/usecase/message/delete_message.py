"""Delete message use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.domain.model import Actor
from whisper.domain.service import MessageService
from whisper.domain.value import MessageId


class DeleteMessageRequest(BaseModel):
    """Delete message request."""

    message_id: str  # UUID string
    actor: Actor


class DeleteMessageUseCase:
    """Use case for removing a message and everything under it."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: DeleteMessageRequest) -> None:
        await self.message_service.delete_message(
            MessageId(UUID(request.message_id)), request.actor
        )
