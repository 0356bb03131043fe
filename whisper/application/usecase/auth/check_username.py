"""Check username availability use case."""

from pydantic import BaseModel

from whisper.domain.service import IdentityService
from whisper.domain.value.types import ActorKind


class CheckUsernameResponse(BaseModel):
    """Check username response."""

    username: str
    available: bool
    taken_by: ActorKind | None


class CheckUsernameUseCase:
    """Use case for probing whether a username is free."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, username: str) -> CheckUsernameResponse:
        holder = await self.identity_service.check_username(username)
        return CheckUsernameResponse(
            username=username, available=holder is None, taken_by=holder
        )
