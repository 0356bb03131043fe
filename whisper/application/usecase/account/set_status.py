"""Set account status use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.model import Actor
from whisper.domain.service import IdentityService
from whisper.domain.value.types import ActorKind


class SetStatusRequest(BaseModel):
    """Set status request."""

    kind: ActorKind
    account_id: str  # UUID string
    is_active: bool
    actor: Actor


class SetStatusUseCase:
    """Use case for activating or deactivating an account."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: SetStatusRequest) -> AccountInfo:
        """Execute set status flow.

        Raises:
            NotAuthorizedError: If the actor lacks the privilege
            AccountNotFoundError: If no such account exists
            BusinessRuleViolationError: If a super-admin deactivates themselves
        """
        account = await self.identity_service.set_active(
            request.kind, UUID(request.account_id), request.is_active, request.actor
        )
        return AccountInfo.from_domain(account)
