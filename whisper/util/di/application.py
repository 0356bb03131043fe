"""Application layer DI providers."""

from dishka import Scope, provide

from whisper.application.usecase.account import (
    DeleteAccountUseCase,
    GetProfileUseCase,
    ListAccountMessagesUseCase,
    ListRecipientsUseCase,
    SearchAccountsUseCase,
    SetStatusUseCase,
    SetVerificationUseCase,
    UpdateProfileUseCase,
)
from whisper.application.usecase.auth import (
    CheckUsernameUseCase,
    CreateAdminUseCase,
    GetCurrentActorUseCase,
    LoginUseCase,
    RegisterUseCase,
)
from whisper.application.usecase.message import (
    CreateMessageUseCase,
    DeleteMessageUseCase,
    GetThreadUseCase,
    ListCategoriesUseCase,
    ListPrivateMessagesUseCase,
    ListPublicMessagesUseCase,
    PromoteMessageUseCase,
)
from whisper.application.usecase.reply import AddReplyUseCase, DeleteReplyUseCase
from whisper.application.usecase.social import (
    FollowUseCase,
    LeaderboardUseCase,
    ReactUseCase,
    UnfollowUseCase,
    UnreactUseCase,
)
from whisper.domain.service import (
    FollowService,
    IdentityService,
    JWTService,
    MessageService,
    MetricsService,
    ReactionService,
    ReplyService,
)
from whisper.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            identity_service=identity_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(identity_service=identity_service, jwt_service=jwt_service)

    @provide(scope=Scope.REQUEST)
    def get_current_actor_use_case(
        self, jwt_service: JWTService, identity_service: IdentityService
    ) -> GetCurrentActorUseCase:
        """Provide get current actor use case."""
        return GetCurrentActorUseCase(
            jwt_service=jwt_service, identity_service=identity_service
        )

    @provide(scope=Scope.REQUEST)
    def get_check_username_use_case(
        self, identity_service: IdentityService
    ) -> CheckUsernameUseCase:
        """Provide check username use case."""
        return CheckUsernameUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_create_admin_use_case(
        self, identity_service: IdentityService
    ) -> CreateAdminUseCase:
        """Provide create admin use case."""
        return CreateAdminUseCase(identity_service=identity_service)

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_set_verification_use_case(
        self, identity_service: IdentityService
    ) -> SetVerificationUseCase:
        """Provide set verification use case."""
        return SetVerificationUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_set_status_use_case(
        self, identity_service: IdentityService
    ) -> SetStatusUseCase:
        """Provide set status use case."""
        return SetStatusUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_account_use_case(
        self, identity_service: IdentityService
    ) -> DeleteAccountUseCase:
        """Provide delete account use case."""
        return DeleteAccountUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, identity_service: IdentityService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_list_account_messages_use_case(
        self, identity_service: IdentityService, message_service: MessageService
    ) -> ListAccountMessagesUseCase:
        """Provide list account messages use case."""
        return ListAccountMessagesUseCase(
            identity_service=identity_service, message_service=message_service
        )

    @provide(scope=Scope.REQUEST)
    def get_search_accounts_use_case(
        self, identity_service: IdentityService
    ) -> SearchAccountsUseCase:
        """Provide search accounts use case."""
        return SearchAccountsUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_profile_use_case(
        self,
        identity_service: IdentityService,
        metrics_service: MetricsService,
        follow_service: FollowService,
    ) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(
            identity_service=identity_service,
            metrics_service=metrics_service,
            follow_service=follow_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_recipients_use_case(
        self, identity_service: IdentityService
    ) -> ListRecipientsUseCase:
        """Provide list recipients use case."""
        return ListRecipientsUseCase(identity_service=identity_service)

    # Message use cases
    @provide(scope=Scope.REQUEST)
    def get_create_message_use_case(
        self, message_service: MessageService
    ) -> CreateMessageUseCase:
        """Provide create message use case."""
        return CreateMessageUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_list_public_messages_use_case(
        self, message_service: MessageService
    ) -> ListPublicMessagesUseCase:
        """Provide list public messages use case."""
        return ListPublicMessagesUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_list_private_messages_use_case(
        self, message_service: MessageService
    ) -> ListPrivateMessagesUseCase:
        """Provide list private messages use case."""
        return ListPrivateMessagesUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_thread_use_case(
        self,
        message_service: MessageService,
        reply_service: ReplyService,
        reaction_service: ReactionService,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            message_service=message_service,
            reply_service=reply_service,
            reaction_service=reaction_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_promote_message_use_case(
        self, message_service: MessageService
    ) -> PromoteMessageUseCase:
        """Provide promote message use case."""
        return PromoteMessageUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_message_use_case(
        self, message_service: MessageService
    ) -> DeleteMessageUseCase:
        """Provide delete message use case."""
        return DeleteMessageUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_list_categories_use_case(self) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase()

    # Reply use cases
    @provide(scope=Scope.REQUEST)
    def get_add_reply_use_case(self, reply_service: ReplyService) -> AddReplyUseCase:
        """Provide add reply use case."""
        return AddReplyUseCase(reply_service=reply_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_reply_use_case(
        self, reply_service: ReplyService
    ) -> DeleteReplyUseCase:
        """Provide delete reply use case."""
        return DeleteReplyUseCase(reply_service=reply_service)

    # Social use cases
    @provide(scope=Scope.REQUEST)
    def get_follow_use_case(self, follow_service: FollowService) -> FollowUseCase:
        """Provide follow use case."""
        return FollowUseCase(follow_service=follow_service)

    @provide(scope=Scope.REQUEST)
    def get_unfollow_use_case(self, follow_service: FollowService) -> UnfollowUseCase:
        """Provide unfollow use case."""
        return UnfollowUseCase(follow_service=follow_service)

    @provide(scope=Scope.REQUEST)
    def get_react_use_case(
        self, reaction_service: ReactionService, message_service: MessageService
    ) -> ReactUseCase:
        """Provide react use case."""
        return ReactUseCase(
            reaction_service=reaction_service, message_service=message_service
        )

    @provide(scope=Scope.REQUEST)
    def get_unreact_use_case(
        self, reaction_service: ReactionService, message_service: MessageService
    ) -> UnreactUseCase:
        """Provide unreact use case."""
        return UnreactUseCase(
            reaction_service=reaction_service, message_service=message_service
        )

    @provide(scope=Scope.REQUEST)
    def get_leaderboard_use_case(
        self, metrics_service: MetricsService
    ) -> LeaderboardUseCase:
        """Provide leaderboard use case."""
        return LeaderboardUseCase(metrics_service=metrics_service)
