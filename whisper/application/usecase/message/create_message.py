"""Create message use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import MessageInfo
from whisper.domain.model import Actor
from whisper.domain.service import MessageService


class CreateMessageRequest(BaseModel):
    """Create message request."""

    category: str
    content: str
    is_public: bool = True
    recipient: str | None = None  # Admin display name for private messages
    sender_name: str | None = None  # Ignored for signed-in authors
    media_link: str | None = None
    actor: Actor  # Acting principal from session


class CreateMessageUseCase:
    """Use case for posting a public message or a private one to a moderator."""

    def __init__(self, message_service: MessageService) -> None:
        """Initialize create message use case.

        Args:
            message_service: Message domain service
        """
        self.message_service = message_service

    async def execute(self, request: CreateMessageRequest) -> MessageInfo:
        """Execute create message flow.

        Raises:
            ValidationError: If content, category or media link is invalid
            RecipientRequiredError: If a private message names no recipient
            UnknownRecipientError: If the recipient is not an active admin
        """
        message = await self.message_service.create_message(
            category=request.category,
            content=request.content,
            is_public=request.is_public,
            actor=request.actor,
            recipient=request.recipient,
            sender_name=request.sender_name,
            media_link=request.media_link,
        )
        return MessageInfo.from_domain(message)
