"""List private messages use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import MessageInfo
from whisper.domain.model import Actor
from whisper.domain.service import MessageService


class ListPrivateMessagesRequest(BaseModel):
    """List private messages request."""

    recipient: str | None = None  # Defaults to the acting admin's own inbox
    actor: Actor


class ListPrivateMessagesResponse(BaseModel):
    """List private messages response."""

    recipient: str
    messages: list[MessageInfo]


class ListPrivateMessagesUseCase:
    """Use case for a moderator's private inbox."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(
        self, request: ListPrivateMessagesRequest
    ) -> ListPrivateMessagesResponse:
        """Execute list private messages flow.

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            NotAuthorizedError: If the actor may not read the inbox
        """
        recipient = request.recipient
        if not recipient:
            admin = self.message_service.visibility_service.require_admin(
                request.actor, "read private inbox"
            )
            recipient = admin.display_name

        messages = await self.message_service.list_private_for_recipient(
            recipient, request.actor
        )
        return ListPrivateMessagesResponse(
            recipient=recipient,
            messages=[MessageInfo.from_domain(m) for m in messages],
        )
