"""List recipients use case."""

from pydantic import BaseModel

from whisper.domain.service import IdentityService


class ListRecipientsResponse(BaseModel):
    """Display names of admins accepting private messages."""

    recipients: list[str]


class ListRecipientsUseCase:
    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self) -> ListRecipientsResponse:
        recipients = await self.identity_service.list_recipients()
        return ListRecipientsResponse(recipients=recipients)
