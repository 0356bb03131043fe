"""Unit tests for MetricsService."""

from datetime import datetime, timedelta

import pytest

from tests.conftest import add_admin, add_message, add_user
from tests.harness import create_env_fixture
from whisper.domain.error import ValidationError
from whisper.domain.model import AnonymousActor
from whisper.domain.service import FollowService, MetricsService, ReplyService
from whisper.domain.value.types import ActorKind, LeaderboardMetric

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestProfileStats:
    """Tests for profile_stats."""

    @pytest.mark.asyncio
    async def test_counts_for_user(self, unit_env):
        service = await unit_env.get(MetricsService)
        replies = await unit_env.get(ReplyService)
        follows = await unit_env.get(FollowService)
        fox = await add_user(unit_env, username="quiet_fox")
        owl = await add_user(unit_env, username="night_owl")

        public = await add_message(unit_env, user_id=fox.user.id, reaction_count=4)
        await add_message(
            unit_env,
            is_public=False,
            recipient="Luna",
            user_id=fox.user.id,
            reaction_count=7,
        )
        await replies.add_reply(public.id, "replying to myself", fox)
        await follows.follow(owl, ActorKind.USER, fox.user.id)
        await follows.follow(fox, ActorKind.USER, owl.user.id)

        stats = await service.profile_stats(fox.author_ref)

        assert stats.message_count == 2
        assert stats.reply_count == 1
        # Private message reactions are not counted
        assert stats.reaction_total == 4
        assert stats.follower_count == 1
        assert stats.following_count == 1

    @pytest.mark.asyncio
    async def test_admin_never_follows(self, unit_env):
        service = await unit_env.get(MetricsService)
        luna = await add_admin(unit_env)

        stats = await service.profile_stats(luna.author_ref)

        assert stats.following_count == 0
        assert stats.message_count == 0

    @pytest.mark.asyncio
    async def test_anonymous_has_no_stats(self, unit_env):
        service = await unit_env.get(MetricsService)

        with pytest.raises(ValidationError):
            await service.profile_stats(AnonymousActor().author_ref)


class TestLeaderboard:
    """Tests for leaderboard."""

    @pytest.mark.asyncio
    async def test_ranks_by_message_count(self, unit_env):
        service = await unit_env.get(MetricsService)
        quiet = await add_user(unit_env, username="quiet_fox")
        loud = await add_user(unit_env, username="loud_jay")
        for _ in range(3):
            await add_message(unit_env, user_id=loud.user.id)
        await add_message(unit_env, user_id=quiet.user.id)

        entries = await service.leaderboard(LeaderboardMetric.MESSAGES)

        assert [(e.rank, e.user.id, e.value) for e in entries] == [
            (1, loud.user.id, 3),
            (2, quiet.user.id, 1),
        ]

    @pytest.mark.asyncio
    async def test_ties_go_to_oldest_account(self, unit_env):
        service = await unit_env.get(MetricsService)
        now = datetime.now()
        newer = await add_user(unit_env, username="newer", created_at=now)
        older = await add_user(
            unit_env, username="older", created_at=now - timedelta(days=1)
        )

        entries = await service.leaderboard(LeaderboardMetric.REPLIES)

        assert [e.user.id for e in entries] == [older.user.id, newer.user.id]
        assert all(e.value == 0 for e in entries)

    @pytest.mark.asyncio
    async def test_inactive_users_are_left_out(self, unit_env):
        service = await unit_env.get(MetricsService)
        await add_user(unit_env, username="gone_user", is_active=False)
        active = await add_user(unit_env, username="still_here")

        entries = await service.leaderboard(LeaderboardMetric.FOLLOWERS)

        assert [e.user.id for e in entries] == [active.user.id]

    @pytest.mark.asyncio
    async def test_reactions_count_public_messages_only(self, unit_env):
        service = await unit_env.get(MetricsService)
        fox = await add_user(unit_env)
        await add_message(unit_env, user_id=fox.user.id, reaction_count=2)
        await add_message(
            unit_env,
            is_public=False,
            recipient="Luna",
            user_id=fox.user.id,
            reaction_count=9,
        )

        entries = await service.leaderboard(LeaderboardMetric.REACTIONS)

        assert entries[0].value == 2

    @pytest.mark.asyncio
    async def test_limit_truncates(self, unit_env):
        service = await unit_env.get(MetricsService)
        for name in ("user_one", "user_two", "user_three"):
            await add_user(unit_env, username=name)

        entries = await service.leaderboard(LeaderboardMetric.MESSAGES, limit=2)

        assert [e.rank for e in entries] == [1, 2]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 101])
    async def test_limit_out_of_range(self, unit_env, limit):
        service = await unit_env.get(MetricsService)

        with pytest.raises(ValidationError):
            await service.leaderboard(LeaderboardMetric.MESSAGES, limit=limit)

    @pytest.mark.asyncio
    async def test_anonymous_messages_do_not_rank(self, unit_env):
        service = await unit_env.get(MetricsService)
        fox = await add_user(unit_env)
        await add_message(unit_env)

        entries = await service.leaderboard(LeaderboardMetric.MESSAGES)

        assert [(e.user.id, e.value) for e in entries] == [(fox.user.id, 0)]
