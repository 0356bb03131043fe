"""Set verification use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.model import Actor
from whisper.domain.service import IdentityService
from whisper.domain.value.types import ActorKind


class SetVerificationRequest(BaseModel):
    """Set verification request."""

    kind: ActorKind
    account_id: str  # UUID string
    verified: bool
    actor: Actor


class SetVerificationUseCase:
    """Use case for granting or revoking the verified badge."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: SetVerificationRequest) -> AccountInfo:
        account = await self.identity_service.set_verification(
            request.kind, UUID(request.account_id), request.verified, request.actor
        )
        return AccountInfo.from_domain(account)
