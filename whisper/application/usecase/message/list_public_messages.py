"""List public messages use case."""

from pydantic import BaseModel

from whisper.application.usecase.common import MessageInfo
from whisper.domain.error import ValidationError
from whisper.domain.service import MessageService
from whisper.domain.value.types import Category


class ListPublicMessagesRequest(BaseModel):
    """List public messages request."""

    category: str | None = None
    query: str | None = None


class ListPublicMessagesResponse(BaseModel):
    """List public messages response."""

    messages: list[MessageInfo]


class ListPublicMessagesUseCase:
    """Use case for the public board, optionally filtered and searched."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(
        self, request: ListPublicMessagesRequest
    ) -> ListPublicMessagesResponse:
        """Execute list public messages flow.

        Raises:
            ValidationError: If the category filter is unknown
        """
        category = None
        if request.category:
            try:
                category = Category(request.category)
            except ValueError:
                raise ValidationError(
                    f"Unknown category: {request.category}"
                ) from None

        messages = await self.message_service.list_public(
            category=category, query=request.query
        )
        return ListPublicMessagesResponse(
            messages=[MessageInfo.from_domain(m) for m in messages]
        )
