"""List account messages use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.application.usecase.common import MessageInfo
from whisper.domain.model import Admin
from whisper.domain.service import IdentityService, MessageService
from whisper.domain.value import AdminId, UserId
from whisper.domain.value.types import ActorKind, AuthorRef


class ListAccountMessagesRequest(BaseModel):
    """List account messages request."""

    kind: ActorKind
    account_id: str  # UUID string


class ListAccountMessagesResponse(BaseModel):
    """Public messages written by one account."""

    messages: list[MessageInfo]


class ListAccountMessagesUseCase:
    """Use case for the public messages shown on a profile."""

    def __init__(
        self, identity_service: IdentityService, message_service: MessageService
    ) -> None:
        self.identity_service = identity_service
        self.message_service = message_service

    async def execute(
        self, request: ListAccountMessagesRequest
    ) -> ListAccountMessagesResponse:
        """Execute list account messages flow.

        Raises:
            AccountNotFoundError: If no such account exists
        """
        account = await self.identity_service.get_account(
            request.kind, UUID(request.account_id)
        )
        author = (
            AuthorRef.of_admin(AdminId(account.id))
            if isinstance(account, Admin)
            else AuthorRef.of_user(UserId(account.id))
        )
        messages = await self.message_service.list_public_by_author(author)
        return ListAccountMessagesResponse(
            messages=[MessageInfo.from_domain(m) for m in messages]
        )
