"""Unit tests for ReactionService."""

import pytest

from tests.conftest import add_admin, add_message, add_user
from tests.harness import create_env_fixture
from whisper.domain.error import (
    AlreadyReactedError,
    AuthenticationRequiredError,
    MessageNotFoundError,
)
from whisper.domain.model import AnonymousActor
from whisper.domain.repository import MessageRepository
from whisper.domain.service import ReactionService

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _reaction_count(env, message_id) -> int:
    message = await (await env.get(MessageRepository)).find_by_id(message_id)
    return message.reaction_count


class TestAddReaction:
    """Tests for add_reaction."""

    @pytest.mark.asyncio
    async def test_user_reaction_increments_count(self, unit_env):
        service = await unit_env.get(ReactionService)
        user = await add_user(unit_env)
        message = await add_message(unit_env)

        reaction = await service.add_reaction(message.id, user)

        assert reaction.user_id == user.user.id
        assert reaction.admin_id is None
        assert await _reaction_count(unit_env, message.id) == 1
        assert await service.has_reacted(message.id, user)

    @pytest.mark.asyncio
    async def test_admin_can_react(self, unit_env):
        service = await unit_env.get(ReactionService)
        luna = await add_admin(unit_env)
        message = await add_message(unit_env)

        reaction = await service.add_reaction(message.id, luna)

        assert reaction.admin_id == luna.admin.id
        assert reaction.user_id is None

    @pytest.mark.asyncio
    async def test_duplicate_reaction_rejected(self, unit_env):
        service = await unit_env.get(ReactionService)
        user = await add_user(unit_env)
        message = await add_message(unit_env)
        await service.add_reaction(message.id, user)

        with pytest.raises(AlreadyReactedError):
            await service.add_reaction(message.id, user)

        assert await _reaction_count(unit_env, message.id) == 1

    @pytest.mark.asyncio
    async def test_anonymous_cannot_react(self, unit_env):
        service = await unit_env.get(ReactionService)
        message = await add_message(unit_env)

        with pytest.raises(AuthenticationRequiredError):
            await service.add_reaction(message.id, AnonymousActor())

        assert await _reaction_count(unit_env, message.id) == 0

    @pytest.mark.asyncio
    async def test_cannot_react_to_hidden_private_message(self, unit_env):
        service = await unit_env.get(ReactionService)
        user = await add_user(unit_env)
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(MessageNotFoundError):
            await service.add_reaction(message.id, user)


class TestRemoveReaction:
    """Tests for remove_reaction."""

    @pytest.mark.asyncio
    async def test_remove_decrements_count(self, unit_env):
        service = await unit_env.get(ReactionService)
        user = await add_user(unit_env)
        message = await add_message(unit_env)
        await service.add_reaction(message.id, user)

        removed = await service.remove_reaction(message.id, user)

        assert removed is True
        assert await _reaction_count(unit_env, message.id) == 0
        assert not await service.has_reacted(message.id, user)

    @pytest.mark.asyncio
    async def test_remove_without_reaction_is_noop(self, unit_env):
        service = await unit_env.get(ReactionService)
        user = await add_user(unit_env)
        message = await add_message(unit_env, reaction_count=2)

        removed = await service.remove_reaction(message.id, user)

        assert removed is False
        assert await _reaction_count(unit_env, message.id) == 2

    @pytest.mark.asyncio
    async def test_anonymous_has_never_reacted(self, unit_env):
        service = await unit_env.get(ReactionService)
        message = await add_message(unit_env)

        assert not await service.has_reacted(message.id, AnonymousActor())
