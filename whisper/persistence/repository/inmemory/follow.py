"""In-memory follow repository for testing."""

from collections import Counter
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from whisper.domain.model.follow import Follow
from whisper.domain.repository.follow import FollowRepository
from whisper.domain.value import UserId
from whisper.domain.value.types import ActorKind


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        self._follows: list[Follow] = []

    async def find(
        self, follower_id: UserId, followee_kind: ActorKind, followee_id: UUID
    ) -> Optional[Follow]:
        """Find an edge."""
        for follow in self._follows:
            if (
                follow.follower_id == follower_id
                and follow.followee_kind == followee_kind
                and follow.followee_id == followee_id
            ):
                return follow
        return None

    async def save(self, follow: Follow) -> Follow:
        """Save an edge.

        Raises:
            IntegrityError: If the edge already exists (duplicate)
        """
        existing = await self.find(
            follow.follower_id, follow.followee_kind, follow.followee_id
        )
        if existing:
            raise IntegrityError("Duplicate follow", None, Exception())

        self._follows.append(follow)
        return follow

    async def delete(
        self, follower_id: UserId, followee_kind: ActorKind, followee_id: UUID
    ) -> bool:
        """Delete an edge."""
        follow = await self.find(follower_id, followee_kind, followee_id)
        if follow is None:
            return False
        self._follows.remove(follow)
        return True

    async def count_followers(self, followee_kind: ActorKind, followee_id: UUID) -> int:
        """Count edges pointing at an account."""
        return sum(
            1
            for f in self._follows
            if f.followee_kind == followee_kind and f.followee_id == followee_id
        )

    async def count_following(self, follower_id: UserId) -> int:
        """Count edges leaving a user."""
        return sum(1 for f in self._follows if f.follower_id == follower_id)

    async def follower_counts(self, followee_kind: ActorKind) -> dict[UUID, int]:
        """Count followers per followed account of one kind."""
        return dict(
            Counter(
                f.followee_id for f in self._follows if f.followee_kind == followee_kind
            )
        )

    async def delete_by_account(self, kind: ActorKind, account_id: UUID) -> int:
        """Delete every edge that touches an account."""

        def touches(f: Follow) -> bool:
            if f.followee_kind == kind and f.followee_id == account_id:
                return True
            return kind == ActorKind.USER and f.follower_id == account_id

        before = len(self._follows)
        self._follows = [f for f in self._follows if not touches(f)]
        return before - len(self._follows)
