"""Get profile use case."""

from uuid import UUID

from pydantic import BaseModel

from whisper.application.usecase.common import AccountInfo
from whisper.domain.model import Actor, Admin, UserActor
from whisper.domain.service import FollowService, IdentityService, MetricsService
from whisper.domain.value import AdminId, UserId
from whisper.domain.value.types import ActorKind, AuthorRef


class GetProfileRequest(BaseModel):
    """Get profile request."""

    kind: ActorKind
    account_id: str  # UUID string
    actor: Actor  # Viewer, used for the follow flag


class GetProfileResponse(BaseModel):
    """Account with its derived counts."""

    account: AccountInfo
    message_count: int
    reply_count: int
    reaction_total: int
    follower_count: int
    following_count: int
    is_following: bool


class GetProfileUseCase:
    """Use case for a public profile with its statistics."""

    def __init__(
        self,
        identity_service: IdentityService,
        metrics_service: MetricsService,
        follow_service: FollowService,
    ) -> None:
        """Initialize get profile use case.

        Args:
            identity_service: Identity domain service
            metrics_service: Metrics domain service
            follow_service: Follow domain service
        """
        self.identity_service = identity_service
        self.metrics_service = metrics_service
        self.follow_service = follow_service

    async def execute(self, request: GetProfileRequest) -> GetProfileResponse:
        """Execute get profile flow.

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
        stats = await self.metrics_service.profile_stats(author)

        viewer = request.actor.user.id if isinstance(request.actor, UserActor) else None
        is_following = await self.follow_service.is_following(
            viewer, request.kind, account.id
        )

        return GetProfileResponse(
            account=AccountInfo.from_domain(account),
            message_count=stats.message_count,
            reply_count=stats.reply_count,
            reaction_total=stats.reaction_total,
            follower_count=stats.follower_count,
            following_count=stats.following_count,
            is_following=is_following,
        )
