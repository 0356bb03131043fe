"""Update profile use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.model import Actor
from whisper.domain.service import IdentityService
from whisper.domain.value.types import ActorKind


class UpdateProfileRequest(BaseModel):
    """Update profile request.

    Omitted fields are left unchanged; an empty string clears a field.
    """

    kind: ActorKind
    account_id: str  # UUID string
    display_name: Optional[str] = None
    bio: Optional[str] = None
    profile_picture_url: Optional[str] = None
    actor: Actor


class UpdateProfileUseCase:
    """Use case for an account editing its own profile."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: UpdateProfileRequest) -> AccountInfo:
        """Execute update profile flow.

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            NotAuthorizedError: If the actor is another account
            AccountNotFoundError: If no such account exists
            ValidationError: If a field is malformed
            BusinessRuleViolationError: If the display name changed too recently
            DisplayNameTakenError: If another admin uses the display name
        """
        account = await self.identity_service.update_profile(
            request.kind,
            UUID(request.account_id),
            request.actor,
            display_name=request.display_name,
            bio=request.bio,
            profile_picture_url=request.profile_picture_url,
        )
        return AccountInfo.from_domain(account)
