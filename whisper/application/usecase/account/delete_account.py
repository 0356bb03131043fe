"""Delete account use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.domain.model import Actor
from whisper.domain.service import IdentityService
from whisper.domain.value.types import ActorKind


class DeleteAccountRequest(BaseModel):
    """Delete account request."""

    kind: ActorKind
    account_id: str  # UUID string
    actor: Actor


class DeleteAccountUseCase:
    """Use case for removing an account while keeping its content."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: DeleteAccountRequest) -> None:
        await self.identity_service.delete_account(
            request.kind, UUID(request.account_id), request.actor
        )
