"""Follow and unfollow use cases."""

from uuid import UUID

from pydantic import BaseModel

from whisper.domain.model import Actor
from whisper.domain.service import FollowService
from whisper.domain.value.types import ActorKind


class FollowRequest(BaseModel):
    """Follow or unfollow request."""

    followee_kind: ActorKind
    followee_id: str  # UUID string
    actor: Actor


class FollowResponse(BaseModel):
    """Follow state after the request."""

    followee_kind: ActorKind
    followee_id: str
    following: bool


class FollowUseCase:
    """Use case for following a user or admin. Repeating it is harmless."""

    def __init__(self, follow_service: FollowService) -> None:
        self.follow_service = follow_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        """Execute follow flow.

        Raises:
            AuthenticationRequiredError: If the actor is anonymous
            NotAuthorizedError: If the actor is an admin
            ValidationError: If a user follows themselves
            AccountNotFoundError: If the followee does not exist
        """
        follow = await self.follow_service.follow(
            request.actor, request.followee_kind, UUID(request.followee_id)
        )
        return FollowResponse(
            followee_kind=follow.followee_kind,
            followee_id=str(follow.followee_id),
            following=True,
        )


class UnfollowUseCase:
    def __init__(self, follow_service: FollowService) -> None:
        self.follow_service = follow_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        await self.follow_service.unfollow(
            request.actor, request.followee_kind, UUID(request.followee_id)
        )
        return FollowResponse(
            followee_kind=request.followee_kind,
            followee_id=request.followee_id,
            following=False,
        )
