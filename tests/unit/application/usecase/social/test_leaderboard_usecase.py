"""Unit tests for the follow, reaction and leaderboard use cases."""

from dishka import AsyncContainer
import pytest

from tests.conftest import add_message, add_user
from tests.harness import create_env_fixture
from whisper.application.usecase.social import (
    FollowRequest,
    FollowUseCase,
    LeaderboardRequest,
    LeaderboardUseCase,
    ReactRequest,
    ReactUseCase,
    UnfollowUseCase,
    UnreactUseCase,
)
from whisper.domain.error import AlreadyReactedError, ValidationError
from whisper.domain.value.types import ActorKind, LeaderboardMetric

# Unit test fixture
unit_env = create_env_fixture()


class TestReactUseCases:
    """Tests for ReactUseCase and UnreactUseCase."""

    @pytest.mark.asyncio
    async def test_react_then_unreact(self, unit_env: AsyncContainer):
        react = await unit_env.get(ReactUseCase)
        unreact = await unit_env.get(UnreactUseCase)
        fox = await add_user(unit_env)
        message = await add_message(unit_env)
        request = ReactRequest(message_id=str(message.id), actor=fox)

        reacted = await react.execute(request)
        withdrawn = await unreact.execute(request)

        assert reacted.has_reacted is True
        assert reacted.reaction_count == 1
        assert withdrawn.has_reacted is False
        assert withdrawn.reaction_count == 0

    @pytest.mark.asyncio
    async def test_second_reaction_rejected(self, unit_env: AsyncContainer):
        react = await unit_env.get(ReactUseCase)
        fox = await add_user(unit_env)
        message = await add_message(unit_env)
        request = ReactRequest(message_id=str(message.id), actor=fox)
        await react.execute(request)

        with pytest.raises(AlreadyReactedError):
            await react.execute(request)


class TestFollowUseCases:
    """Tests for FollowUseCase and UnfollowUseCase."""

    @pytest.mark.asyncio
    async def test_follow_and_unfollow(self, unit_env: AsyncContainer):
        follow = await unit_env.get(FollowUseCase)
        unfollow = await unit_env.get(UnfollowUseCase)
        fox = await add_user(unit_env, username="quiet_fox")
        owl = await add_user(unit_env, username="night_owl")
        request = FollowRequest(
            followee_kind=ActorKind.USER, followee_id=str(owl.user.id), actor=fox
        )

        followed = await follow.execute(request)
        again = await follow.execute(request)
        stopped = await unfollow.execute(request)

        assert followed.following is True
        assert again.following is True
        assert stopped.following is False
        assert stopped.followee_id == str(owl.user.id)


class TestLeaderboardUseCase:
    """Tests for LeaderboardUseCase."""

    @pytest.mark.asyncio
    async def test_leaderboard_by_followers(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(LeaderboardUseCase)
        follow = await unit_env.get(FollowUseCase)
        fox = await add_user(unit_env, username="quiet_fox")
        owl = await add_user(unit_env, username="night_owl")
        jay = await add_user(unit_env, username="loud_jay")
        for follower in (fox, jay):
            await follow.execute(
                FollowRequest(
                    followee_kind=ActorKind.USER,
                    followee_id=str(owl.user.id),
                    actor=follower,
                )
            )

        # Act
        response = await use_case.execute(
            LeaderboardRequest(metric=LeaderboardMetric.FOLLOWERS, limit=1)
        )

        # Assert
        assert response.metric == LeaderboardMetric.FOLLOWERS
        assert len(response.entries) == 1
        top = response.entries[0]
        assert top.rank == 1
        assert top.account.username == "night_owl"
        assert top.value == 2

    @pytest.mark.asyncio
    async def test_limit_validation(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LeaderboardUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(LeaderboardRequest(limit=500))
