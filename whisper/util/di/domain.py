"""Domain layer DI providers."""

from dishka import Scope, provide

from whisper.config import (
    AuthSettings,
    LeaderboardSettings,
    ProfileSettings,
    ThreadSettings,
)
from whisper.domain.repository import (
    AdminRepository,
    FollowRepository,
    MessageRepository,
    ReactionRepository,
    ReplyRepository,
    UserRepository,
)
from whisper.domain.service import (
    FollowService,
    IdentityService,
    JWTService,
    MessageService,
    MetricsService,
    ReactionService,
    ReplyService,
    VisibilityService,
)
from whisper.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_visibility_service(self) -> VisibilityService:
        """Provide visibility rules."""
        return VisibilityService()

    @provide
    def get_identity_service(
        self,
        user_repository: UserRepository,
        admin_repository: AdminRepository,
        message_repository: MessageRepository,
        reply_repository: ReplyRepository,
        follow_repository: FollowRepository,
        reaction_repository: ReactionRepository,
        visibility_service: VisibilityService,
        profile_settings: ProfileSettings,
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(
            user_repository=user_repository,
            admin_repository=admin_repository,
            message_repository=message_repository,
            reply_repository=reply_repository,
            follow_repository=follow_repository,
            reaction_repository=reaction_repository,
            visibility_service=visibility_service,
            profile_settings=profile_settings,
        )

    @provide
    def get_message_service(
        self,
        message_repository: MessageRepository,
        reply_repository: ReplyRepository,
        reaction_repository: ReactionRepository,
        admin_repository: AdminRepository,
        visibility_service: VisibilityService,
    ) -> MessageService:
        """Provide message domain service."""
        return MessageService(
            message_repository=message_repository,
            reply_repository=reply_repository,
            reaction_repository=reaction_repository,
            admin_repository=admin_repository,
            visibility_service=visibility_service,
        )

    @provide
    def get_reply_service(
        self,
        reply_repository: ReplyRepository,
        message_service: MessageService,
        visibility_service: VisibilityService,
        thread_settings: ThreadSettings,
    ) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(
            reply_repository=reply_repository,
            message_service=message_service,
            visibility_service=visibility_service,
            thread_settings=thread_settings,
        )

    @provide
    def get_reaction_service(
        self,
        reaction_repository: ReactionRepository,
        message_service: MessageService,
        visibility_service: VisibilityService,
    ) -> ReactionService:
        """Provide reaction domain service."""
        return ReactionService(
            reaction_repository=reaction_repository,
            message_service=message_service,
            visibility_service=visibility_service,
        )

    @provide
    def get_follow_service(
        self,
        follow_repository: FollowRepository,
        user_repository: UserRepository,
        admin_repository: AdminRepository,
        visibility_service: VisibilityService,
    ) -> FollowService:
        """Provide follow domain service."""
        return FollowService(
            follow_repository=follow_repository,
            user_repository=user_repository,
            admin_repository=admin_repository,
            visibility_service=visibility_service,
        )

    @provide
    def get_metrics_service(
        self,
        message_repository: MessageRepository,
        reply_repository: ReplyRepository,
        follow_repository: FollowRepository,
        user_repository: UserRepository,
        leaderboard_settings: LeaderboardSettings,
    ) -> MetricsService:
        """Provide metrics domain service."""
        return MetricsService(
            message_repository=message_repository,
            reply_repository=reply_repository,
            follow_repository=follow_repository,
            user_repository=user_repository,
            leaderboard_settings=leaderboard_settings,
        )
