"""React and unreact use cases."""

from uuid import UUID

from pydantic import BaseModel

from whisper.domain.model import Actor
from whisper.domain.service import MessageService, ReactionService
from whisper.domain.value import MessageId
from whisper.domain.value.types import ReactionType


class ReactRequest(BaseModel):
    """React or unreact request."""

    message_id: str  # UUID string
    reaction_type: ReactionType = ReactionType.HEART
    actor: Actor


class ReactResponse(BaseModel):
    """Reaction state after the request."""

    message_id: str
    has_reacted: bool
    reaction_count: int


class ReactUseCase:
    """Use case for reacting to a message."""

    def __init__(
        self, reaction_service: ReactionService, message_service: MessageService
    ) -> None:
        """Initialize react use case.

        Args:
            reaction_service: Reaction domain service
            message_service: Message domain service (fresh counts)
        """
        self.reaction_service = reaction_service
        self.message_service = message_service

    async def execute(self, request: ReactRequest) -> ReactResponse:
        """Execute react flow.

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            MessageNotFoundError: If the message is missing or not readable
            AlreadyReactedError: If the actor already reacted
        """
        message_id = MessageId(UUID(request.message_id))
        await self.reaction_service.add_reaction(
            message_id, request.actor, request.reaction_type
        )
        message = await self.message_service.get_message(message_id, request.actor)
        return ReactResponse(
            message_id=request.message_id,
            has_reacted=True,
            reaction_count=message.reaction_count,
        )


class UnreactUseCase:
    """Use case for withdrawing a reaction."""

    def __init__(
        self, reaction_service: ReactionService, message_service: MessageService
    ) -> None:
        self.reaction_service = reaction_service
        self.message_service = message_service

    async def execute(self, request: ReactRequest) -> ReactResponse:
        message_id = MessageId(UUID(request.message_id))
        await self.reaction_service.remove_reaction(message_id, request.actor)
        message = await self.message_service.get_message(message_id, request.actor)
        return ReactResponse(
            message_id=request.message_id,
            has_reacted=False,
            reaction_count=message.reaction_count,
        )
