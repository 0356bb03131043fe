"""Unit tests for PromoteMessageUseCase and the message listing use cases."""

from dishka import AsyncContainer
import pytest

from tests.conftest import add_admin, add_user
from tests.harness import create_env_fixture
from whisper.application.usecase.message import (
    CreateMessageRequest,
    CreateMessageUseCase,
    ListCategoriesUseCase,
    ListPrivateMessagesRequest,
    ListPrivateMessagesUseCase,
    ListPublicMessagesRequest,
    ListPublicMessagesUseCase,
    PromoteMessageRequest,
    PromoteMessageUseCase,
)
from whisper.domain.error import (
    AlreadyPublicError,
    InvalidTransitionError,
    NotAuthorizedError,
    ValidationError,
)
from whisper.domain.model import AnonymousActor
from whisper.domain.value.types import Category

# Unit test fixture
unit_env = create_env_fixture()


async def _send_private(env, content: str = "I need to tell someone") -> str:
    create = await env.get(CreateMessageUseCase)
    info = await create.execute(
        CreateMessageRequest(
            category="Confession",
            content=content,
            is_public=False,
            recipient="Luna",
            actor=AnonymousActor(),
        )
    )
    return info.message_id


class TestPromoteMessageUseCase:
    """Tests for PromoteMessageUseCase."""

    @pytest.mark.asyncio
    async def test_private_message_moves_from_inbox_to_board(
        self, unit_env: AsyncContainer
    ):
        """A promoted message shows on the public board and only once."""
        # Arrange
        luna = await add_admin(unit_env, display_name="Luna")
        message_id = await _send_private(unit_env)
        promote = await unit_env.get(PromoteMessageUseCase)
        public = await unit_env.get(ListPublicMessagesUseCase)
        inbox = await unit_env.get(ListPrivateMessagesUseCase)

        before = await public.execute(ListPublicMessagesRequest())
        assert before.messages == []

        # Act
        promoted = await promote.execute(
            PromoteMessageRequest(message_id=message_id, is_public=True, actor=luna)
        )

        # Assert
        assert promoted.is_public is True
        after = await public.execute(ListPublicMessagesRequest())
        assert [m.message_id for m in after.messages] == [message_id]
        remaining = await inbox.execute(ListPrivateMessagesRequest(actor=luna))
        assert remaining.messages == []

        with pytest.raises(AlreadyPublicError):
            await promote.execute(
                PromoteMessageRequest(message_id=message_id, is_public=True, actor=luna)
            )

    @pytest.mark.asyncio
    async def test_demotion_is_invalid(self, unit_env: AsyncContainer):
        luna = await add_admin(unit_env, display_name="Luna")
        message_id = await _send_private(unit_env)
        promote = await unit_env.get(PromoteMessageUseCase)

        with pytest.raises(InvalidTransitionError):
            await promote.execute(
                PromoteMessageRequest(message_id=message_id, is_public=False, actor=luna)
            )

    @pytest.mark.asyncio
    async def test_user_cannot_promote(self, unit_env: AsyncContainer):
        await add_admin(unit_env, display_name="Luna")
        fox = await add_user(unit_env)
        message_id = await _send_private(unit_env)
        promote = await unit_env.get(PromoteMessageUseCase)

        with pytest.raises(NotAuthorizedError):
            await promote.execute(
                PromoteMessageRequest(message_id=message_id, is_public=True, actor=fox)
            )


class TestListingUseCases:
    """Tests for the inbox, board and category use cases."""

    @pytest.mark.asyncio
    async def test_inbox_defaults_to_acting_admin(self, unit_env: AsyncContainer):
        luna = await add_admin(unit_env, display_name="Luna")
        message_id = await _send_private(unit_env)
        inbox = await unit_env.get(ListPrivateMessagesUseCase)

        response = await inbox.execute(ListPrivateMessagesRequest(actor=luna))

        assert response.recipient == "Luna"
        assert [m.message_id for m in response.messages] == [message_id]

    @pytest.mark.asyncio
    async def test_anonymous_has_no_inbox(self, unit_env: AsyncContainer):
        inbox = await unit_env.get(ListPrivateMessagesUseCase)

        with pytest.raises(NotAuthorizedError):
            await inbox.execute(ListPrivateMessagesRequest(actor=AnonymousActor()))

    @pytest.mark.asyncio
    async def test_board_rejects_unknown_category(self, unit_env: AsyncContainer):
        public = await unit_env.get(ListPublicMessagesUseCase)

        with pytest.raises(ValidationError):
            await public.execute(ListPublicMessagesRequest(category="Gossip"))

    @pytest.mark.asyncio
    async def test_board_filters_by_category(self, unit_env: AsyncContainer):
        create = await unit_env.get(CreateMessageUseCase)
        public = await unit_env.get(ListPublicMessagesUseCase)
        love = await create.execute(
            CreateMessageRequest(category="Love", content="hearts", actor=AnonymousActor())
        )
        await create.execute(
            CreateMessageRequest(category="Rant", content="traffic", actor=AnonymousActor())
        )

        response = await public.execute(ListPublicMessagesRequest(category="Love"))

        assert [m.message_id for m in response.messages] == [love.message_id]

    @pytest.mark.asyncio
    async def test_categories_are_fixed(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ListCategoriesUseCase)

        response = await use_case.execute()

        assert [c.name for c in response.categories] == [c.value for c in Category]
        assert all(c.description for c in response.categories)
