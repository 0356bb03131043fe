"""Social metrics domain service.

Every value is computed on demand from the stores. Nothing here writes.
"""

from dataclasses import dataclass
from typing import Optional

import logfire

from whisper.config import LeaderboardSettings
from whisper.domain.error import ValidationError
from whisper.domain.model import User
from whisper.domain.repository import (
    FollowRepository,
    MessageRepository,
    ReplyRepository,
    UserRepository,
)
from whisper.domain.value.types import ActorKind, AuthorRef, LeaderboardMetric

from .base import Service


@dataclass
class ProfileStats:
    """Derived counts shown on a profile."""

    message_count: int
    reply_count: int
    reaction_total: int
    follower_count: int
    following_count: int


@dataclass
class LeaderboardEntry:
    """Ranked user on a leaderboard."""

    rank: int
    user: User
    value: int


class MetricsService(Service):
    """Domain service for profile counts and leaderboards."""

    def __init__(
        self,
        message_repository: MessageRepository,
        reply_repository: ReplyRepository,
        follow_repository: FollowRepository,
        user_repository: UserRepository,
        leaderboard_settings: LeaderboardSettings,
    ) -> None:
        """Initialize metrics service.

        Args:
            message_repository: Message repository
            reply_repository: Reply repository
            follow_repository: Follow repository
            user_repository: User repository (leaderboard candidates)
            leaderboard_settings: Leaderboard limits
        """
        self.message_repository = message_repository
        self.reply_repository = reply_repository
        self.follow_repository = follow_repository
        self.user_repository = user_repository
        self.leaderboard_settings = leaderboard_settings

    async def message_count(self, author: AuthorRef) -> int:
        """Count messages attributed to an account, public and private."""
        _require_account(author)
        return await self.message_repository.count_by_author(author)

    async def reply_count(self, author: AuthorRef) -> int:
        """Count replies attributed to an account."""
        _require_account(author)
        return await self.reply_repository.count_by_author(author)

    async def reaction_total(self, author: AuthorRef) -> int:
        """Sum reactions received on an account's public messages."""
        _require_account(author)
        return await self.message_repository.sum_public_reactions_by_author(author)

    async def follower_count(self, author: AuthorRef) -> int:
        _require_account(author)
        return await self.follow_repository.count_followers(
            author.kind, author.identity_id
        )

    async def following_count(self, author: AuthorRef) -> int:
        """Count accounts a user follows. Admins never follow, so 0."""
        _require_account(author)
        if author.user_id is None:
            return 0
        return await self.follow_repository.count_following(author.user_id)

    async def profile_stats(self, author: AuthorRef) -> ProfileStats:
        """Bundle all profile counts for an account.

        Args:
            author: User or admin reference

        Returns:
            Profile statistics

        Raises:
            ValidationError: If the reference is anonymous
        """
        with logfire.span(
            "metrics_service.profile_stats",
            kind=author.kind.value,
            account_id=str(author.identity_id),
        ):
            stats = ProfileStats(
                message_count=await self.message_count(author),
                reply_count=await self.reply_count(author),
                reaction_total=await self.reaction_total(author),
                follower_count=await self.follower_count(author),
                following_count=await self.following_count(author),
            )
            logfire.info(
                "Profile stats computed",
                account_id=str(author.identity_id),
                message_count=stats.message_count,
                follower_count=stats.follower_count,
            )
            return stats

    async def leaderboard(
        self, metric: LeaderboardMetric, limit: Optional[int] = None
    ) -> list[LeaderboardEntry]:
        """Rank active users by a metric.

        Ties are broken by earliest account creation.

        Args:
            metric: Metric to rank by
            limit: Number of entries (defaults to the configured limit)

        Returns:
            Entries ranked 1..n

        Raises:
            ValidationError: If the limit is outside 1..max_limit
        """
        if limit is None:
            limit = self.leaderboard_settings.default_limit
        if not 1 <= limit <= self.leaderboard_settings.max_limit:
            raise ValidationError(
                f"Limit must be between 1 and {self.leaderboard_settings.max_limit}"
            )

        with logfire.span(
            "metrics_service.leaderboard", metric=metric.value, limit=limit
        ):
            users = await self.user_repository.find_active()

            if metric == LeaderboardMetric.MESSAGES:
                values = await self.message_repository.count_per_user()
            elif metric == LeaderboardMetric.REPLIES:
                values = await self.reply_repository.count_per_user()
            elif metric == LeaderboardMetric.REACTIONS:
                values = await self.message_repository.public_reactions_per_user()
            else:
                values = await self.follow_repository.follower_counts(ActorKind.USER)

            ranked = sorted(
                users, key=lambda u: (-values.get(u.id, 0), u.created_at)
            )[:limit]

            entries = [
                LeaderboardEntry(rank=index + 1, user=user, value=values.get(user.id, 0))
                for index, user in enumerate(ranked)
            ]
            logfire.info(
                "Leaderboard computed", metric=metric.value, entries=len(entries)
            )
            return entries


def _require_account(author: AuthorRef) -> None:
    if author.is_anonymous:
        raise ValidationError("Anonymous visitors have no profile metrics")
