"""Promote message use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.application.usecase.common import MessageInfo
from whisper.domain.error import InvalidTransitionError
from whisper.domain.model import Actor
from whisper.domain.service import MessageService
from whisper.domain.value import MessageId


class PromoteMessageRequest(BaseModel):
    """Promote message request."""

    message_id: str  # UUID string
    is_public: bool  # Only True is a valid target
    actor: Actor


class PromoteMessageUseCase:
    """Use case for making a private message public."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: PromoteMessageRequest) -> MessageInfo:
        """Execute promote flow.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            MessageNotFoundError: If the message does not exist
            AlreadyPublicError: If the message is already public
            InvalidTransitionError: If a move back to private is requested
        """
        if not request.is_public:
            self.message_service.visibility_service.require_admin(
                request.actor, "change message visibility"
            )
            raise InvalidTransitionError("public", "private_pending")

        message = await self.message_service.promote_to_public(
            MessageId(UUID(request.message_id)), request.actor
        )
        return MessageInfo.from_domain(message)
