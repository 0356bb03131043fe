"""Unit tests for IdentityService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from tests.conftest import PASSWORD, add_admin, add_message, add_user
from tests.harness import create_env_fixture
from whisper.domain.error import (
    AccountDisabledError,
    AuthenticationRequiredError,
    AccountNotFoundError,
    BusinessRuleViolationError,
    DisplayNameTakenError,
    InboxNotEmptyError,
    InvalidCredentialsError,
    NotAuthorizedError,
    UsernameTakenError,
    ValidationError,
)
from whisper.domain.model import AdminActor, AnonymousActor, UserActor
from whisper.domain.repository import (
    AdminRepository,
    FollowRepository,
    MessageRepository,
    ReplyRepository,
    UserRepository,
)
from whisper.domain.service import (
    FollowService,
    IdentityService,
    MessageService,
    ReactionService,
    ReplyService,
)
from whisper.domain.value.types import ActorKind, AdminRole, Username

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _super_admin(env) -> AdminActor:
    return await add_admin(
        env, username="root_admin", display_name="Root", role=AdminRole.SUPER_ADMIN
    )


class TestRegistration:
    """Tests for register_user and check_username."""

    @pytest.mark.asyncio
    async def test_register_hashes_password(self, unit_env):
        service = await unit_env.get(IdentityService)

        user = await service.register_user(
            Username("quiet_fox"), "hunter22", display_name="  Fox "
        )

        assert user.username.root == "quiet_fox"
        assert user.display_name == "Fox"
        assert user.password_hash != "hunter22"
        assert not user.is_verified

    @pytest.mark.asyncio
    async def test_username_taken_by_user(self, unit_env):
        service = await unit_env.get(IdentityService)
        await add_user(unit_env, username="quiet_fox")

        with pytest.raises(UsernameTakenError) as exc_info:
            await service.register_user(Username("quiet_fox"), "hunter22")

        assert exc_info.value.taken_by == "user"

    @pytest.mark.asyncio
    async def test_username_taken_by_admin(self, unit_env):
        """Users and admins share one username namespace."""
        service = await unit_env.get(IdentityService)
        await add_admin(unit_env, username="luna_listens")

        with pytest.raises(UsernameTakenError) as exc_info:
            await service.register_user(Username("luna_listens"), "hunter22")

        assert exc_info.value.taken_by == "admin"

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, unit_env):
        service = await unit_env.get(IdentityService)

        with pytest.raises(ValidationError):
            await service.register_user(Username("quiet_fox"), "12345")

    @pytest.mark.asyncio
    async def test_check_username(self, unit_env):
        service = await unit_env.get(IdentityService)
        await add_user(unit_env, username="quiet_fox")
        await add_admin(unit_env, username="luna_listens")

        assert await service.check_username("quiet_fox") == ActorKind.USER
        assert await service.check_username("luna_listens") == ActorKind.ADMIN
        assert await service.check_username("free_name") is None
        assert await service.check_username("x") is None


class TestAuthenticate:
    """Tests for authenticate."""

    @pytest.mark.asyncio
    async def test_user_signs_in(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env, username="quiet_fox")

        actor = await service.authenticate("quiet_fox", PASSWORD)

        assert isinstance(actor, UserActor)
        assert actor.user.id == fox.user.id

    @pytest.mark.asyncio
    async def test_admin_signs_in(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env, username="luna_listens")

        actor = await service.authenticate("luna_listens", PASSWORD)

        assert isinstance(actor, AdminActor)
        assert actor.admin.id == luna.admin.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        service = await unit_env.get(IdentityService)
        await add_user(unit_env, username="quiet_fox")

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("quiet_fox", "not-the-password")

    @pytest.mark.asyncio
    async def test_unknown_username(self, unit_env):
        service = await unit_env.get(IdentityService)

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("nobody_here", PASSWORD)

    @pytest.mark.asyncio
    async def test_deactivated_account(self, unit_env):
        service = await unit_env.get(IdentityService)
        await add_user(unit_env, username="quiet_fox", is_active=False)

        with pytest.raises(AccountDisabledError):
            await service.authenticate("quiet_fox", PASSWORD)


class TestResolveActor:
    """Tests for resolve_actor."""

    @pytest.mark.asyncio
    async def test_resolves_active_user(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env)

        actor = await service.resolve_actor(ActorKind.USER, fox.user.id)

        assert isinstance(actor, UserActor)

    @pytest.mark.asyncio
    async def test_deactivated_account_is_anonymous(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env, is_active=False)

        actor = await service.resolve_actor(ActorKind.ADMIN, luna.admin.id)

        assert isinstance(actor, AnonymousActor)

    @pytest.mark.asyncio
    async def test_unknown_subject_is_anonymous(self, unit_env):
        service = await unit_env.get(IdentityService)

        actor = await service.resolve_actor(ActorKind.USER, uuid4())

        assert isinstance(actor, AnonymousActor)


class TestCreateAdmin:
    """Tests for create_admin."""

    @pytest.mark.asyncio
    async def test_super_admin_creates_admin(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)

        admin = await service.create_admin(
            Username("sol_listens"), "hunter22", "Sol", AdminRole.MODERATOR, root
        )

        assert admin.display_name == "Sol"
        assert admin.role == AdminRole.MODERATOR
        assert await service.list_recipients() == ["Root", "Sol"]

    @pytest.mark.asyncio
    async def test_plain_admin_cannot_create_admins(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.create_admin(
                Username("sol_listens"), "hunter22", "Sol", AdminRole.ADMIN, luna
            )

    @pytest.mark.asyncio
    async def test_display_name_must_be_unique(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)
        await add_admin(unit_env, username="luna_listens", display_name="Luna")

        with pytest.raises(DisplayNameTakenError):
            await service.create_admin(
                Username("other_luna"), "hunter22", "Luna", AdminRole.ADMIN, root
            )

    @pytest.mark.asyncio
    async def test_admin_username_cannot_shadow_user(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)
        await add_user(unit_env, username="quiet_fox")

        with pytest.raises(UsernameTakenError):
            await service.create_admin(
                Username("quiet_fox"), "hunter22", "Fox", AdminRole.ADMIN, root
            )

    @pytest.mark.asyncio
    async def test_bootstrap_super_admin(self, unit_env):
        service = await unit_env.get(IdentityService)

        admin = await service.bootstrap_super_admin(
            Username("root_admin"), "hunter22", "Root"
        )

        assert admin.is_super_admin


class TestModeration:
    """Tests for set_verification, set_active and list_recipients."""

    @pytest.mark.asyncio
    async def test_super_admin_verifies_user(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)
        fox = await add_user(unit_env)

        updated = await service.set_verification(
            ActorKind.USER, fox.user.id, True, root
        )

        assert updated.is_verified
        stored = await (await unit_env.get(UserRepository)).find_by_id(fox.user.id)
        assert stored.is_verified

    @pytest.mark.asyncio
    async def test_plain_admin_cannot_verify(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)
        fox = await add_user(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.set_verification(ActorKind.USER, fox.user.id, True, luna)

    @pytest.mark.asyncio
    async def test_admin_deactivates_user(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)
        fox = await add_user(unit_env)

        updated = await service.set_active(ActorKind.USER, fox.user.id, False, luna)

        assert not updated.is_active

    @pytest.mark.asyncio
    async def test_plain_admin_cannot_deactivate_admin(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)
        sol = await add_admin(unit_env, username="sol_listens", display_name="Sol")

        with pytest.raises(NotAuthorizedError):
            await service.set_active(ActorKind.ADMIN, sol.admin.id, False, luna)

    @pytest.mark.asyncio
    async def test_super_admin_cannot_deactivate_self(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)

        with pytest.raises(BusinessRuleViolationError):
            await service.set_active(ActorKind.ADMIN, root.admin.id, False, root)

    @pytest.mark.asyncio
    async def test_deactivated_admin_drops_out_of_recipients(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)
        luna = await add_admin(unit_env)

        await service.set_active(ActorKind.ADMIN, luna.admin.id, False, root)

        assert await service.list_recipients() == ["Root"]

    @pytest.mark.asyncio
    async def test_missing_account(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)

        with pytest.raises(AccountNotFoundError):
            await service.set_active(ActorKind.USER, uuid4(), False, luna)


class TestDeleteAccount:
    """Tests for delete_account."""

    @pytest.mark.asyncio
    async def test_delete_user_anonymizes_content(self, unit_env):
        service = await unit_env.get(IdentityService)
        replies = await unit_env.get(ReplyService)
        reactions = await unit_env.get(ReactionService)
        follows = await unit_env.get(FollowService)
        root = await _super_admin(unit_env)
        fox = await add_user(unit_env, username="quiet_fox")
        owl = await add_user(unit_env, username="night_owl")

        own = await add_message(unit_env, user_id=fox.user.id)
        other = await add_message(unit_env, content="owl's message")
        reply = await replies.add_reply(own.id, "bump", fox)
        await reactions.add_reaction(other.id, fox)
        await follows.follow(fox, ActorKind.USER, owl.user.id)
        await follows.follow(owl, ActorKind.USER, fox.user.id)

        await service.delete_account(ActorKind.USER, fox.user.id, root)

        messages = await unit_env.get(MessageRepository)
        kept = await messages.find_by_id(own.id)
        assert kept is not None
        assert kept.user_id is None
        assert kept.content == own.content
        kept_reply = await (await unit_env.get(ReplyRepository)).find_by_id(reply.id)
        assert kept_reply.user_id is None
        assert (await messages.find_by_id(other.id)).reaction_count == 0
        follow_repo = await unit_env.get(FollowRepository)
        assert await follow_repo.count_following(owl.user.id) == 0
        assert await follow_repo.count_followers(ActorKind.USER, owl.user.id) == 0
        assert await (await unit_env.get(UserRepository)).find_by_id(fox.user.id) is None

    @pytest.mark.asyncio
    async def test_super_admin_cannot_delete_self(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)

        with pytest.raises(BusinessRuleViolationError):
            await service.delete_account(ActorKind.ADMIN, root.admin.id, root)

    @pytest.mark.asyncio
    async def test_plain_admin_cannot_delete(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)
        fox = await add_user(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.delete_account(ActorKind.USER, fox.user.id, luna)

    @pytest.mark.asyncio
    async def test_admin_with_pending_inbox_cannot_be_deleted(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)
        luna = await add_admin(unit_env)
        await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(InboxNotEmptyError) as exc_info:
            await service.delete_account(ActorKind.ADMIN, luna.admin.id, root)

        assert exc_info.value.pending == 1
        admins = await unit_env.get(AdminRepository)
        assert await admins.find_by_id(luna.admin.id) is not None

    @pytest.mark.asyncio
    async def test_admin_with_empty_inbox_is_deleted(self, unit_env):
        """Messages that were already made public do not block deletion."""
        service = await unit_env.get(IdentityService)
        messages = await unit_env.get(MessageService)
        root = await _super_admin(unit_env)
        luna = await add_admin(unit_env)
        pending = await add_message(unit_env, is_public=False, recipient="Luna")
        await messages.promote_to_public(pending.id, luna)

        await service.delete_account(ActorKind.ADMIN, luna.admin.id, root)

        admins = await unit_env.get(AdminRepository)
        assert await admins.find_by_id(luna.admin.id) is None


class TestInboxGuard:
    """Admins with waiting private messages stay reachable."""

    @pytest.mark.asyncio
    async def test_admin_with_pending_inbox_cannot_be_deactivated(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)
        luna = await add_admin(unit_env)
        await add_message(unit_env, is_public=False, recipient="Luna")

        with pytest.raises(InboxNotEmptyError):
            await service.set_active(ActorKind.ADMIN, luna.admin.id, False, root)

        assert await service.list_recipients() == ["Luna", "Root"]

    @pytest.mark.asyncio
    async def test_inactive_admin_can_be_reactivated(self, unit_env):
        service = await unit_env.get(IdentityService)
        root = await _super_admin(unit_env)
        luna = await add_admin(unit_env, is_active=False)
        await add_message(unit_env, is_public=False, recipient="Luna")

        updated = await service.set_active(ActorKind.ADMIN, luna.admin.id, True, root)

        assert updated.is_active


class TestUpdateProfile:
    """Tests for update_profile."""

    @pytest.mark.asyncio
    async def test_user_edits_own_profile(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env, display_name="Fox")

        updated = await service.update_profile(
            ActorKind.USER,
            fox.user.id,
            fox,
            bio="  night walker ",
            profile_picture_url="https://example.com/fox.png",
        )

        assert updated.bio == "night walker"
        assert updated.profile_picture_url == "https://example.com/fox.png"
        assert updated.display_name == "Fox"
        assert updated.display_name_changed_at is None

    @pytest.mark.asyncio
    async def test_empty_string_clears_field(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env)
        await service.update_profile(ActorKind.USER, fox.user.id, fox, bio="hello")

        updated = await service.update_profile(
            ActorKind.USER, fox.user.id, fox, bio=""
        )

        assert updated.bio is None

    @pytest.mark.asyncio
    async def test_only_the_owner_may_edit(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env, username="quiet_fox")
        owl = await add_user(unit_env, username="night_owl")
        root = await _super_admin(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.update_profile(ActorKind.USER, fox.user.id, owl, bio="x")
        with pytest.raises(NotAuthorizedError):
            await service.update_profile(ActorKind.USER, fox.user.id, root, bio="x")
        with pytest.raises(AuthenticationRequiredError):
            await service.update_profile(
                ActorKind.USER, fox.user.id, AnonymousActor(), bio="x"
            )

    @pytest.mark.asyncio
    async def test_same_id_of_other_kind_is_not_the_owner(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.update_profile(ActorKind.USER, luna.admin.id, luna, bio="x")

    @pytest.mark.asyncio
    async def test_picture_must_be_http_url(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env)

        with pytest.raises(ValidationError):
            await service.update_profile(
                ActorKind.USER,
                fox.user.id,
                fox,
                profile_picture_url="javascript:alert(1)",
            )

    @pytest.mark.asyncio
    async def test_overlong_bio_rejected(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env)

        with pytest.raises(ValidationError):
            await service.update_profile(
                ActorKind.USER, fox.user.id, fox, bio="b" * 501
            )

    @pytest.mark.asyncio
    async def test_display_name_change_has_cooldown(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env, display_name="Fox")

        renamed = await service.update_profile(
            ActorKind.USER, fox.user.id, fox, display_name="Vixen"
        )

        assert renamed.display_name == "Vixen"
        assert renamed.display_name_changed_at is not None
        with pytest.raises(BusinessRuleViolationError):
            await service.update_profile(
                ActorKind.USER, fox.user.id, fox, display_name="Fennec"
            )

    @pytest.mark.asyncio
    async def test_unchanged_display_name_skips_cooldown(self, unit_env):
        service = await unit_env.get(IdentityService)
        fox = await add_user(unit_env, display_name="Fox")
        await service.update_profile(
            ActorKind.USER, fox.user.id, fox, display_name="Vixen"
        )

        updated = await service.update_profile(
            ActorKind.USER, fox.user.id, fox, display_name=" Vixen ", bio="hi"
        )

        assert updated.bio == "hi"

    @pytest.mark.asyncio
    async def test_rename_allowed_after_cooldown(self, unit_env):
        service = await unit_env.get(IdentityService)
        users = await unit_env.get(UserRepository)
        fox = await add_user(unit_env, display_name="Fox")
        await users.save(
            fox.user.model_copy(
                update={"display_name_changed_at": datetime.now() - timedelta(days=31)}
            )
        )

        renamed = await service.update_profile(
            ActorKind.USER, fox.user.id, fox, display_name="Vixen"
        )

        assert renamed.display_name == "Vixen"

    @pytest.mark.asyncio
    async def test_admin_rename_must_stay_unique(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env, username="luna_listens", display_name="Luna")
        await add_admin(unit_env, username="sol_listens", display_name="Sol")

        with pytest.raises(DisplayNameTakenError):
            await service.update_profile(
                ActorKind.ADMIN, luna.admin.id, luna, display_name="Sol"
            )

    @pytest.mark.asyncio
    async def test_admin_display_name_cannot_be_cleared(self, unit_env):
        service = await unit_env.get(IdentityService)
        luna = await add_admin(unit_env)

        with pytest.raises(ValidationError):
            await service.update_profile(
                ActorKind.ADMIN, luna.admin.id, luna, display_name="  "
            )

    @pytest.mark.asyncio
    async def test_admin_rename_carries_pending_inbox(self, unit_env):
        service = await unit_env.get(IdentityService)
        messages = await unit_env.get(MessageService)
        luna = await add_admin(unit_env)
        pending = await add_message(unit_env, is_public=False, recipient="Luna")
        public = await add_message(unit_env, is_public=True)

        renamed = await service.update_profile(
            ActorKind.ADMIN, luna.admin.id, luna, display_name="Selene"
        )
        selene = AdminActor(admin=renamed)

        inbox = await messages.list_private_for_recipient("Selene", selene)
        assert [m.id for m in inbox] == [pending.id]
        assert await service.list_recipients() == ["Selene"]
        repo = await unit_env.get(MessageRepository)
        assert (await repo.find_by_id(public.id)).recipient is None
        assert await repo.count_private_by_recipient("Luna") == 0


class TestSearchAccounts:
    """Tests for search_accounts."""

    @pytest.mark.asyncio
    async def test_matches_username_and_display_name(self, unit_env):
        service = await unit_env.get(IdentityService)
        await add_user(unit_env, username="quiet_fox", display_name="Lunatic")
        await add_user(unit_env, username="night_owl")
        await add_admin(unit_env, username="luna_listens", display_name="Luna")

        users, admins = await service.search_accounts("LUN")

        assert [u.username.root for u in users] == ["quiet_fox"]
        assert [a.display_name for a in admins] == ["Luna"]

    @pytest.mark.asyncio
    async def test_newest_first_and_active_only(self, unit_env):
        service = await unit_env.get(IdentityService)
        now = datetime.now()
        await add_user(
            unit_env, username="fox_one", created_at=now - timedelta(days=2)
        )
        await add_user(unit_env, username="fox_two", created_at=now)
        await add_user(unit_env, username="fox_gone", is_active=False)

        users, admins = await service.search_accounts("fox")

        assert [u.username.root for u in users] == ["fox_two", "fox_one"]
        assert admins == []

    @pytest.mark.asyncio
    async def test_query_too_short(self, unit_env):
        service = await unit_env.get(IdentityService)

        with pytest.raises(ValidationError):
            await service.search_accounts(" f ")
