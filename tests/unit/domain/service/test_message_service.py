"""Unit tests for MessageService."""

from uuid import uuid4

import pytest

from tests.conftest import add_admin, add_message, add_user
from tests.harness import create_env_fixture
from whisper.domain.error import (
    AlreadyPublicError,
    AuthenticationRequiredError,
    MessageNotFoundError,
    NotAuthorizedError,
    RecipientRequiredError,
    UnknownRecipientError,
    ValidationError,
)
from whisper.domain.model import MAX_MESSAGE_LENGTH, AnonymousActor
from whisper.domain.repository import (
    MessageRepository,
    ReactionRepository,
    ReplyRepository,
)
from whisper.domain.service import MessageService, ReactionService, ReplyService
from whisper.domain.value import MessageId
from whisper.domain.value.types import AdminRole, Category

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestCreateMessage:
    """Tests for create_message."""

    @pytest.mark.asyncio
    async def test_anonymous_public_message_keeps_client_sender_name(self, unit_env):
        service = await unit_env.get(MessageService)

        message = await service.create_message(
            category="Rant",
            content="  Mondays again  ",
            is_public=True,
            actor=AnonymousActor(),
            sender_name="  night owl ",
        )

        assert message.category == Category.RANT
        assert message.content == "Mondays again"
        assert message.sender_name == "night owl"
        assert message.user_id is None
        assert message.admin_id is None
        assert message.author.is_anonymous

    @pytest.mark.asyncio
    async def test_public_message_drops_recipient(self, unit_env):
        service = await unit_env.get(MessageService)

        message = await service.create_message(
            category=Category.ANYTHING,
            content="hello",
            is_public=True,
            actor=AnonymousActor(),
            recipient="Luna",
        )

        assert message.recipient is None

    @pytest.mark.asyncio
    async def test_signed_in_author_is_named_by_account(self, unit_env):
        service = await unit_env.get(MessageService)
        actor = await add_user(unit_env, username="quiet_fox", display_name="Fox")

        message = await service.create_message(
            category=Category.WRITING,
            content="A poem",
            is_public=True,
            actor=actor,
            sender_name="someone else",
        )

        assert message.sender_name == "Fox"
        assert message.user_id == actor.user.id
        assert message.admin_id is None

    @pytest.mark.asyncio
    async def test_admin_author_is_attributed_to_admin(self, unit_env):
        service = await unit_env.get(MessageService)
        luna = await add_admin(unit_env)

        message = await service.create_message(
            category=Category.ADVICE,
            content="Drink water",
            is_public=True,
            actor=luna,
        )

        assert message.admin_id == luna.admin.id
        assert message.user_id is None
        assert message.sender_name == "Luna"

    @pytest.mark.asyncio
    async def test_private_message_requires_recipient(self, unit_env):
        service = await unit_env.get(MessageService)

        with pytest.raises(RecipientRequiredError):
            await service.create_message(
                category=Category.CONFESSION,
                content="secret",
                is_public=False,
                actor=AnonymousActor(),
            )

    @pytest.mark.asyncio
    async def test_private_message_to_unknown_admin_rejected(self, unit_env):
        service = await unit_env.get(MessageService)

        with pytest.raises(UnknownRecipientError):
            await service.create_message(
                category=Category.CONFESSION,
                content="secret",
                is_public=False,
                actor=AnonymousActor(),
                recipient="Nobody",
            )

    @pytest.mark.asyncio
    async def test_private_message_to_inactive_admin_rejected(self, unit_env):
        service = await unit_env.get(MessageService)
        await add_admin(unit_env, display_name="Luna", is_active=False)

        with pytest.raises(UnknownRecipientError):
            await service.create_message(
                category=Category.CONFESSION,
                content="secret",
                is_public=False,
                actor=AnonymousActor(),
                recipient="Luna",
            )

    @pytest.mark.asyncio
    async def test_private_message_to_active_admin(self, unit_env):
        service = await unit_env.get(MessageService)
        await add_admin(unit_env, display_name="Luna")

        message = await service.create_message(
            category=Category.CONFESSION,
            content="secret",
            is_public=False,
            actor=AnonymousActor(),
            recipient="Luna",
        )

        assert not message.is_public
        assert message.recipient == "Luna"

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, unit_env):
        service = await unit_env.get(MessageService)

        with pytest.raises(ValidationError, match="blank"):
            await service.create_message(
                category=Category.ANYTHING,
                content="   ",
                is_public=True,
                actor=AnonymousActor(),
            )

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, unit_env):
        service = await unit_env.get(MessageService)

        with pytest.raises(ValidationError, match="Unknown category") as exc_info:
            await service.create_message(
                category="Gossip",
                content="hello",
                is_public=True,
                actor=AnonymousActor(),
            )

        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__

    @pytest.mark.asyncio
    async def test_overlong_content_rejected(self, unit_env):
        service = await unit_env.get(MessageService)

        with pytest.raises(ValidationError, match="exceed"):
            await service.create_message(
                category=Category.ANYTHING,
                content="x" * (MAX_MESSAGE_LENGTH + 1),
                is_public=True,
                actor=AnonymousActor(),
            )

    @pytest.mark.asyncio
    async def test_media_link_must_be_http(self, unit_env):
        service = await unit_env.get(MessageService)

        with pytest.raises(ValidationError, match="Media link"):
            await service.create_message(
                category=Category.ANYTHING,
                content="look",
                is_public=True,
                actor=AnonymousActor(),
                media_link="javascript:alert(1)",
            )


class TestListing:
    """Tests for the public, per-author and private listings."""

    @pytest.mark.asyncio
    async def test_public_list_excludes_private_messages(self, unit_env):
        service = await unit_env.get(MessageService)
        public = await add_message(unit_env, content="out loud")
        await add_message(unit_env, content="hush", is_public=False, recipient="Luna")

        messages = await service.list_public()

        assert [m.id for m in messages] == [public.id]

    @pytest.mark.asyncio
    async def test_public_list_is_newest_first(self, unit_env):
        service = await unit_env.get(MessageService)
        first = await add_message(unit_env, content="first")
        second = await add_message(unit_env, content="second")

        messages = await service.list_public()

        assert [m.id for m in messages] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_public_list_filters_by_category_and_query(self, unit_env):
        service = await unit_env.get(MessageService)
        love = await add_message(unit_env, content="Butterflies", category=Category.LOVE)
        await add_message(unit_env, content="Traffic", category=Category.RANT)

        by_category = await service.list_public(category=Category.LOVE)
        by_query = await service.list_public(query="butter")

        assert [m.id for m in by_category] == [love.id]
        assert [m.id for m in by_query] == [love.id]

    @pytest.mark.asyncio
    async def test_author_list_is_public_and_newest_first(self, unit_env):
        service = await unit_env.get(MessageService)
        fox = await add_user(unit_env)
        first = await add_message(unit_env, content="first", user_id=fox.user.id)
        await add_message(
            unit_env,
            content="hush",
            is_public=False,
            recipient="Luna",
            user_id=fox.user.id,
        )
        second = await add_message(unit_env, content="second", user_id=fox.user.id)
        await add_message(unit_env, content="someone else")

        messages = await service.list_public_by_author(fox.author_ref)

        assert [m.id for m in messages] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_admin_reads_own_inbox(self, unit_env):
        service = await unit_env.get(MessageService)
        luna = await add_admin(unit_env, display_name="Luna")
        mine = await add_message(unit_env, is_public=False, recipient="Luna")
        await add_message(unit_env, is_public=False, recipient="Sol")

        messages = await service.list_private_for_recipient("Luna", luna)

        assert [m.id for m in messages] == [mine.id]

    @pytest.mark.asyncio
    async def test_admin_cannot_read_foreign_inbox(self, unit_env):
        service = await unit_env.get(MessageService)
        luna = await add_admin(unit_env, display_name="Luna")

        with pytest.raises(NotAuthorizedError):
            await service.list_private_for_recipient("Sol", luna)

    @pytest.mark.asyncio
    async def test_super_admin_reads_any_inbox(self, unit_env):
        service = await unit_env.get(MessageService)
        root = await add_admin(
            unit_env,
            username="root_admin",
            display_name="Root",
            role=AdminRole.SUPER_ADMIN,
        )
        await add_message(unit_env, is_public=False, recipient="Luna")

        messages = await service.list_private_for_recipient("Luna", root)

        assert len(messages) == 1

    @pytest.mark.asyncio
    async def test_users_cannot_read_inboxes(self, unit_env):
        service = await unit_env.get(MessageService)
        user = await add_user(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.list_private_for_recipient("Luna", user)


class TestGetMessage:
    """Tests for get_message."""

    @pytest.mark.asyncio
    async def test_private_message_reported_missing_to_anonymous(self, unit_env):
        service = await unit_env.get(MessageService)
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(MessageNotFoundError):
            await service.get_message(message.id, AnonymousActor())

    @pytest.mark.asyncio
    async def test_missing_message(self, unit_env):
        service = await unit_env.get(MessageService)

        with pytest.raises(MessageNotFoundError):
            await service.get_message(MessageId(uuid4()), AnonymousActor())


class TestPromoteToPublic:
    """Tests for promote_to_public."""

    @pytest.mark.asyncio
    async def test_promote_private_message(self, unit_env):
        service = await unit_env.get(MessageService)
        luna = await add_admin(unit_env, display_name="Luna")
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        promoted = await service.promote_to_public(message.id, luna)

        assert promoted.is_public
        assert [m.id for m in await service.list_public()] == [message.id]

    @pytest.mark.asyncio
    async def test_second_promotion_raises_already_public(self, unit_env):
        service = await unit_env.get(MessageService)
        luna = await add_admin(unit_env, display_name="Luna")
        message = await add_message(unit_env, is_public=False, recipient="Luna")
        await service.promote_to_public(message.id, luna)

        with pytest.raises(AlreadyPublicError):
            await service.promote_to_public(message.id, luna)

        stored = await (await unit_env.get(MessageRepository)).find_by_id(message.id)
        assert stored.is_public

    @pytest.mark.asyncio
    async def test_lost_race_reports_already_public(self, unit_env):
        """A conditional update that matches nothing means another promotion won."""
        service = await unit_env.get(MessageService)
        repo = await unit_env.get(MessageRepository)
        luna = await add_admin(unit_env, display_name="Luna")
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        # Simulate the competing request landing between read and update
        original_mark_public = repo.mark_public

        async def mark_public_after_competitor(message_id):
            await original_mark_public(message_id)
            return await original_mark_public(message_id)

        repo.mark_public = mark_public_after_competitor

        with pytest.raises(AlreadyPublicError):
            await service.promote_to_public(message.id, luna)

    @pytest.mark.asyncio
    async def test_users_cannot_promote(self, unit_env):
        service = await unit_env.get(MessageService)
        user = await add_user(unit_env)
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(NotAuthorizedError):
            await service.promote_to_public(message.id, user)

    @pytest.mark.asyncio
    async def test_anonymous_cannot_promote(self, unit_env):
        service = await unit_env.get(MessageService)
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(AuthenticationRequiredError):
            await service.promote_to_public(message.id, AnonymousActor())

    @pytest.mark.asyncio
    async def test_promote_missing_message(self, unit_env):
        service = await unit_env.get(MessageService)
        luna = await add_admin(unit_env)

        with pytest.raises(MessageNotFoundError):
            await service.promote_to_public(MessageId(uuid4()), luna)

    @pytest.mark.asyncio
    async def test_other_admin_sees_foreign_private_message_as_missing(self, unit_env):
        service = await unit_env.get(MessageService)
        await add_admin(unit_env, display_name="Luna")
        sol = await add_admin(unit_env, username="sol_listens", display_name="Sol")
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(MessageNotFoundError):
            await service.promote_to_public(message.id, sol)

        stored = await (await unit_env.get(MessageRepository)).find_by_id(message.id)
        assert not stored.is_public

    @pytest.mark.asyncio
    async def test_super_admin_promotes_any_private_message(self, unit_env):
        service = await unit_env.get(MessageService)
        await add_admin(unit_env, display_name="Luna")
        root = await add_admin(
            unit_env,
            username="root_admin",
            display_name="Root",
            role=AdminRole.SUPER_ADMIN,
        )
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        promoted = await service.promote_to_public(message.id, root)

        assert promoted.is_public


class TestDeleteMessage:
    """Tests for delete_message."""

    @pytest.mark.asyncio
    async def test_delete_removes_replies_and_reactions(self, unit_env):
        service = await unit_env.get(MessageService)
        reply_service = await unit_env.get(ReplyService)
        reaction_service = await unit_env.get(ReactionService)
        luna = await add_admin(unit_env)
        user = await add_user(unit_env)
        message = await add_message(unit_env)

        top = await reply_service.add_reply(message.id, "top", AnonymousActor())
        await reply_service.add_reply(message.id, "nested", user, parent_id=top.id)
        await reaction_service.add_reaction(message.id, user)

        await service.delete_message(message.id, luna)

        assert await (await unit_env.get(MessageRepository)).find_by_id(message.id) is None
        assert await (await unit_env.get(ReplyRepository)).find_by_message(message.id) == []
        reactions = await unit_env.get(ReactionRepository)
        assert (
            await reactions.find_by_reactor_and_message(user.author_ref, message.id)
            is None
        )

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, unit_env):
        service = await unit_env.get(MessageService)
        user = await add_user(unit_env)
        message = await add_message(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.delete_message(message.id, user)

    @pytest.mark.asyncio
    async def test_other_admin_cannot_delete_foreign_private_message(self, unit_env):
        service = await unit_env.get(MessageService)
        await add_admin(unit_env, display_name="Luna")
        sol = await add_admin(unit_env, username="sol_listens", display_name="Sol")
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(MessageNotFoundError):
            await service.delete_message(message.id, sol)

        repo = await unit_env.get(MessageRepository)
        assert await repo.find_by_id(message.id) is not None

    @pytest.mark.asyncio
    async def test_recipient_deletes_own_private_message(self, unit_env):
        service = await unit_env.get(MessageService)
        luna = await add_admin(unit_env, display_name="Luna")
        message = await add_message(unit_env, is_public=False, recipient="Luna")

        await service.delete_message(message.id, luna)

        repo = await unit_env.get(MessageRepository)
        assert await repo.find_by_id(message.id) is None
